from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sorcerify.api import (
    cards_router,
    daily_router,
    health_router,
    streak_router,
)
from sorcerify.config import settings
from sorcerify.db.database import init_db


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("sorcerify"),
    lifespan=lifespan,
)

app.include_router(cards_router)
app.include_router(daily_router)
app.include_router(health_router)
app.include_router(streak_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
