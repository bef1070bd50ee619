"""
FastAPI application entry point for the book status tracker.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from config import APP_TITLE, LOG_LEVEL
from database import init_db
from routes.books import router as books_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"{APP_TITLE} started")
    yield


app = FastAPI(title=APP_TITLE, lifespan=lifespan)
app.include_router(books_router)


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000)
