import logging
import logging.config

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.errors import PostError
from app.routers.posts import get_settings, limiter, router as posts_router

logging.config.dictConfig(
    {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "json",
            },
        },
        "root": {"level": "INFO", "handlers": ["console"]},
    }
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Slugpress – Markdown Blog Renderer",
    description="Renders markdown posts with frontmatter into HTML pages.",
    version="1.0.0",
)

# Rate-limiting state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(PostError)
async def post_error_handler(request: Request, exc: PostError) -> PlainTextResponse:
    if exc.status_code >= 500:
        logger.error("%s for %s: %s", exc.message, request.url.path, exc)
    else:
        logger.warning("%s for %s: %s", exc.message, request.url.path, exc)
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception) -> PlainTextResponse:
    logger.exception("Unhandled exception for %s", request.url)
    return PlainTextResponse("An unexpected error occurred.", status_code=500)


app.include_router(posts_router)


@app.get("/", summary="Health check")
async def root() -> dict:
    return {"message": "Hello from Slugpress"}


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
