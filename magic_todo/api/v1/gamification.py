from typing import Annotated

from fastapi import APIRouter, Depends

from magic_todo.api.v1.deps import get_controller
from magic_todo.schemas.gamification import GamificationResponse
from magic_todo.services.display import gamification_label
from magic_todo.services.todo_list_controller import TodoListController

router = APIRouter(prefix="/gamification", tags=["gamification"])


@router.get("", response_model=GamificationResponse)
async def get_gamification(
    controller: Annotated[TodoListController, Depends(get_controller)],
):
    state = controller.gamification
    return GamificationResponse(
        xp=state.xp,
        streak=state.streak,
        last_complete_date=state.last_complete_date,
        label=gamification_label(state),
    )
