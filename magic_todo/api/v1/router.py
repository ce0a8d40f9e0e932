"""Aggregates all v1 routers."""
from fastapi import APIRouter
from magic_todo.api.v1.todos import router as todos_router
from magic_todo.api.v1.gamification import router as gamification_router

router = APIRouter()
router.include_router(todos_router)
router.include_router(gamification_router)
