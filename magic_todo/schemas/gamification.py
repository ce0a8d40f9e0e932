from typing import Optional

from pydantic import BaseModel


class GamificationResponse(BaseModel):
    xp: int
    streak: int
    last_complete_date: Optional[str] = None
    label: str
