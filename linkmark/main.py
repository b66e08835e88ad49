"""App startup point"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse

from linkmark import icons
from linkmark.configs.app_configs.config_logging import configure_logging
from linkmark.configs.app_configs.config_sentry import configure_sentry
from linkmark.utils.metrics import configure_metrics, get_metrics_client
from linkmark.web import api_v1, dockerflow

tags_metadata = [
    {
        "name": "icons",
        "description": "Resolve the icons and metadata of bookmarked pages.",
    },
]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Set up various configurations at startup and handle shutdown clean up.
    See lifespan events in fastAPI docs https://fastapi.tiangolo.com/advanced/events/
    """
    # Setup methods run before `yield` and cleanup methods after.
    configure_logging()
    configure_sentry()
    await configure_metrics()
    icons.init_resolver()
    yield
    await icons.shutdown_resolver()
    await get_metrics_client().close()


app = FastAPI(openapi_tags=tags_metadata, lifespan=lifespan, default_response_class=ORJSONResponse)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> ORJSONResponse:
    """Use HTTP status code: 400 for all invalid requests."""
    logger.warning(f"HTTP 400: request validation error for path: {request.url.path}")
    return ORJSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({"detail": exc.errors()}),
    )


app.include_router(dockerflow.router)
app.include_router(api_v1.router, prefix="/api/v1")


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000, proxy_headers=True)
