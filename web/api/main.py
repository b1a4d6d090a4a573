"""FastAPI Tournaments API - players, nested tournaments and registrations."""
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from tournaments.models.base import check_connection, init_db

from web.api.errors import register_error_handlers
from web.api.home_routes import router as home_router
from web.api.players_routes import router as players_router
from web.api.registrations_routes import router as registrations_router
from web.api.tournaments_routes import router as tournaments_router
from web.api.utility_routes import router as utility_router

logger = logging.getLogger("tournaments.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    if not await check_connection():
        logger.warning("Database connection failed; requests will error until it is reachable")
    yield


app = FastAPI(title="Tournaments API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)
app.include_router(home_router)
app.include_router(players_router)
app.include_router(tournaments_router)
app.include_router(registrations_router)
app.include_router(utility_router)
