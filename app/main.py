# Run from project root: uvicorn app.main:app --reload  (or: python -m app.main)

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import router
from app.core.config import GEMINI_API_VERSION, GEMINI_MODEL, get_settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info("Server running on http://localhost:%d", settings.port)
    logger.info("Gemini API: %s", "configured" if settings.api_key_configured else "NOT CONFIGURED (simulated mode)")
    logger.info("Model: %s", GEMINI_MODEL)
    logger.info("API version: %s", GEMINI_API_VERSION)
    yield


app = FastAPI(title="Fortress Query Relay", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(router)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
