"""Definition of FastAPI based web service."""

import os
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.routing import Mount, Route, WebSocketRoute

import constants
import metrics
import version
from app import routers
from app.state import app_state
from client import HttpSessionHolder
from configuration import configuration
from generation.generator import create_code_generator
from history.storage_error import HistoryStorageError
from log import get_logger
from metrics.utils import setup_provider_metrics

logger = get_logger(__name__)

logger.info("Initializing app")

# uvicorn workers import this module in new processes, configuration is
# passed to them through environment variable
if not configuration.is_loaded():
    configuration.load_configuration(os.environ[constants.CONFIGURATION_PATH_ENV_VAR])
app_state.mark_check_complete("configuration_loaded", True)

service_name = configuration.configuration.name


# running on FastAPI startup
@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """
    Initialize app resources.

    FastAPI lifespan context: initializes shared HTTP session, history
    store and code generator before serving requests and closes the session
    on shutdown.
    """
    await HttpSessionHolder().load()
    session = HttpSessionHolder().get_session()
    app_state.mark_check_complete("http_session_initialized", True)

    try:
        history_store = configuration.history_store
        app_state.mark_check_complete("history_loaded", True)
    except HistoryStorageError as e:
        app_state.mark_check_complete("history_loaded", False, str(e))
        raise

    app_state.code_generator = create_code_generator(
        configuration.configuration, session, history_store
    )
    app_state.mark_check_complete("code_generator_initialized", True)

    setup_provider_metrics(configuration.providers)
    app_state.mark_initialization_complete()
    logger.info("App startup complete")

    yield

    app_state.code_generator = None
    await HttpSessionHolder().close()
    logger.info("App shutdown complete")


app = FastAPI(
    title=f"{service_name} service - OpenAPI",
    summary=f"{service_name} service API specification.",
    description=f"{service_name} generates code in many languages using AI models.",
    version=version.__version__,
    license_info={
        "name": "Apache 2.0",
        "url": "https://www.apache.org/licenses/LICENSE-2.0.html",
    },
    servers=[
        {"url": "http://localhost:8080/", "description": "Locally running service"}
    ],
    lifespan=lifespan,
)

cors = configuration.service_configuration.cors

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.allow_origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)


@app.middleware("")
async def rest_api_metrics(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Middleware with REST API counter update logic."""
    path = request.url.path
    logger.debug("Received request for path: %s", path)

    # ignore paths that are not part of the app routes
    if path not in app_routes_paths:
        return await call_next(request)

    logger.debug("Processing API request for path: %s", path)

    # measure time to handle duration + update histogram
    with metrics.response_duration_seconds.labels(path).time():
        response = await call_next(request)

    # ignore /metrics endpoint that will be called periodically
    if not path.endswith("/metrics"):
        # just update metrics
        metrics.rest_api_calls_total.labels(path, response.status_code).inc()
    return response


logger.info("Including routers")
routers.include_routers(app)

app_routes_paths = [
    route.path
    for route in app.routes
    if isinstance(route, (Mount, Route, WebSocketRoute))
]
