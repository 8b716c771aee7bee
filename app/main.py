# app/main.py
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy import exc as sa_exc

from app.config import settings
from app.core.errors import register_error_handlers
from app.database import Base, engine
from app.models.activity import Activity  # noqa: F401
from app.models.checkin import DailyCheckin  # noqa: F401
from app.models.fitness import FitnessTracking  # noqa: F401
from app.models.goal import Goal, GoalCollaborator, Milestone, ProgressEntry  # noqa: F401
from app.models.memory import PhotoMemory  # noqa: F401
from app.models.user import User  # noqa: F401
from app.routers import activities, auth, checkin, fitness, goals, health, memories, milestones, progress, stats
from app.storage.memory import MemoryStorage

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


async def create_tables():
    # Demo convenience; use Alembic migrations in production.
    # Ignore duplicate-object errors from previous partial runs.
    async with engine.begin() as conn:
        try:
            await conn.run_sync(Base.metadata.create_all)
        except sa_exc.IntegrityError as e:
            msg = str(getattr(e, "orig", e))
            if "duplicate key value violates unique constraint" in msg or "already exists" in msg:
                logger.warning("Ignored duplicate DDL error during create_all: %s", msg)
            else:
                raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    if settings.STORAGE_BACKEND == "memory":
        app.state.storage = MemoryStorage()
        logger.info("Using in-memory storage")
    else:
        await create_tables()
        logger.info("Using SQL storage at %s", engine.url.render_as_string(hide_password=True))
    yield
    if settings.STORAGE_BACKEND != "memory":
        await engine.dispose()


app = FastAPI(title="GoalTrack API", version="1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include Routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(goals.router)
app.include_router(milestones.router)
app.include_router(progress.router)
app.include_router(checkin.router)
app.include_router(activities.router)
app.include_router(stats.router)
app.include_router(memories.router)
app.include_router(fitness.router)

app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False), name="uploads")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
