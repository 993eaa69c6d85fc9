import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .db import Base, engine
from .routers import health, lists, quick_input, tasks

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting %s in %s mode", settings.service_name, settings.app_env)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    logger.info("Shutting down %s", settings.service_name)


app = FastAPI(title="Ambient Dashboard - Task Service", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(quick_input.router, prefix="/quick-input", tags=["quick-input"])
app.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
app.include_router(lists.router, prefix="/lists", tags=["lists"])


@app.get("/")
def root():
    return {"ok": True, "service": settings.service_name, "version": "0.1.0"}
