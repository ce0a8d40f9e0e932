"""FastAPI application entry point with FastMCP mounted."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from magic_todo.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.APP_DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s  %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    from magic_todo.database import AsyncSessionLocal, create_tables
    from magic_todo.mcp.server import bind_controller
    from magic_todo.services.todo_list_controller import build_controller

    # Startup
    logger.info("Starting Magic To-Do...")
    if settings.DB_AUTO_CREATE:
        await create_tables()

    controller = build_controller(AsyncSessionLocal, settings)
    await controller.start()
    app.state.controller = controller
    bind_controller(controller)
    logger.info(
        "Todo list ready with %d tasks (streak policy=%s, atomic reorder=%s)",
        len(controller.todos),
        settings.STREAK_POLICY,
        settings.REORDER_ATOMIC,
    )

    yield

    # Shutdown
    bind_controller(None)
    app.state.controller = None
    logger.info("Magic To-Do stopped")


app = FastAPI(
    title="Magic To-Do",
    description="Ordered to-do list with XP and daily streaks",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# REST API router
from magic_todo.api.v1.router import router as api_router  # noqa: E402

app.include_router(api_router, prefix="/api/v1")

# FastMCP ASGI sub-app
from magic_todo.mcp.server import mcp  # noqa: E402

mcp_app = mcp.http_app(path="/mcp")
app.mount("/mcp", mcp_app)


@app.get("/health")
async def health():
    """Basic liveness probe."""
    return {"status": "ok", "service": "magic-todo"}


@app.get("/health/ready")
async def health_ready():
    """Readiness probe with database check."""
    from magic_todo.database import engine
    from sqlalchemy import text

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return {"status": "ready", "database": "ok"}
    except Exception as e:
        logger.error("Health ready check failed: %s", e)
        return JSONResponse(
            {"status": "not_ready", "database": "error"},
            status_code=503
        )


def run() -> None:
    import uvicorn

    uvicorn.run("magic_todo.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
