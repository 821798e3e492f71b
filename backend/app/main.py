import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from backend.app.core import config
from backend.app.core.database import init_models
from backend.app.core.errors import ServiceError, service_error_handler
from backend.app.core.registry import registry
from backend.app.api.auth import router as auth_router
from backend.app.api.users import router as users_router
from backend.app.api.games import router as games_router
from backend.app.api.banners import router as banners_router
from backend.app.api.tournaments import router as tournaments_router
from backend.app.api.teams import router as teams_router
from backend.app.api.notifications import router as notifications_router
from backend.app.api.results import router as results_router
from backend.app.api.wallet import router as wallet_router
from backend.app.api.admin import router as admin_router
from backend.app.api.uploads import router as uploads_router
from backend.app.api.ws import router as ws_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: make sure every table exists
    await init_models()
    logger.info("Database ready")
    yield


app = FastAPI(title="Esports Hub", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(ServiceError, service_error_handler)

# Register routers
app.include_router(auth_router, prefix="/auth", tags=["Auth"])
app.include_router(users_router, prefix="/users", tags=["Users"])
app.include_router(games_router, prefix="/games", tags=["Games"])
app.include_router(banners_router, prefix="/banners", tags=["Banners"])
app.include_router(tournaments_router, prefix="/tournaments", tags=["Tournaments"])
app.include_router(teams_router, prefix="/teams", tags=["Teams"])
app.include_router(notifications_router, prefix="/notifications", tags=["Notifications"])
app.include_router(results_router, prefix="/results", tags=["Results"])
app.include_router(wallet_router, prefix="/wallet", tags=["Wallet"])
app.include_router(admin_router, prefix="/admin", tags=["Admin"])
app.include_router(uploads_router, prefix="/uploads", tags=["Uploads"])
app.include_router(ws_router, prefix="/ws", tags=["Live"])

Path(config.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=config.UPLOAD_DIR), name="uploads")


@app.get("/models")
async def get_available_models():
    """Returns the LLMs the tournament summary can run on."""
    return [
        {"id": key, "provider": val.provider, "label": val.label}
        for key, val in registry.list_models().items()
    ]
