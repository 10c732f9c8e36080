import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studyatlas.config import get_settings
from studyatlas.db.factory import make_database
from studyatlas.db.redis.redis import close_redis_pool
from studyatlas.middlewares import request_logging_middleware
from studyatlas.routers import (
    courses,
    diary,
    lab_reviews,
    labs,
    ping,
    programs,
    reviews,
    saved,
    statistics,
    teachers,
    topics,
    universities,
    users,
    workbench,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan for the API.
    """
    logger.info("Starting StudyAtlas API...")

    settings = get_settings()
    app.state.settings = settings

    database = make_database()
    app.state.database = database
    logger.info("Database connected")

    logger.info("API ready")
    yield

    # Cleanup
    await close_redis_pool()
    database.teardown()
    logger.info("API shutdown complete")


settings = get_settings()

app = FastAPI(
    title="StudyAtlas",
    description="Course catalogue, semester diary and AI study advisor for exchange students.",
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.middleware("http")(request_logging_middleware)

for module in (
    ping,
    universities,
    courses,
    reviews,
    labs,
    lab_reviews,
    programs,
    teachers,
    topics,
    saved,
    diary,
    workbench,
    statistics,
    users,
):
    app.include_router(module.router, prefix="/api/v1")


if __name__ == "__main__":
    uvicorn.run(app, port=8000, host="0.0.0.0")
