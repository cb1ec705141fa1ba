# conference_api/main.py

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from conference_api import __version__
from conference_api.auth import auth_router
from conference_api.cache import close_redis_client
from conference_api.config import get_settings
from conference_api.database import init_db
from conference_api.errors import register_error_handlers
from conference_api.logging_config import configure_logging
from conference_api.routers import articles, conferences, questions, requests, tracks

log = configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    log.info("Conference API started")
    yield
    await close_redis_client()


app = FastAPI(title="Conference API", version=__version__, lifespan=lifespan)

register_error_handlers(app)

app.include_router(auth_router, tags=["auth"])
app.include_router(conferences.router)
app.include_router(tracks.router)
app.include_router(articles.router)
app.include_router(requests.router)
app.include_router(questions.router)


def run():
    settings = get_settings()
    uvicorn.run(
        "conference_api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
    )


if __name__ == "__main__":
    run()
