"""FastAPI relay main application."""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nexflow.infra.config import config
from nexflow.infra.errors import RelayError
from nexflow.infra.logging import app_logger
from nexflow.services.tool_catalog import load_tool_catalog
from nexflow.services.relay import get_relay


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown."""
    # Startup: refuse to serve without credentials, then load the catalog
    # before the first request is accepted
    config.require_credentials()
    app_logger.info("Application starting up")

    relay = get_relay()
    await load_tool_catalog(relay.catalog, relay.tools)

    yield

    app_logger.info("Application shutting down")


app = FastAPI(
    title="NexFlow API",
    description="""
    NexFlow relays a natural-language question to a VeyraX tool.

    ## Flow

    - **Tool selection**: an OpenAI model picks a tool, method and parameters from the VeyraX catalog
    - **Tool execution**: the tool is called through the VeyraX REST API
    - **Explanation**: the model explains the raw tool result in plain language
    """,
    version="1.0.0",
    lifespan=lifespan,
    tags_metadata=[
        {
            "name": "Process",
            "description": "Answer questions through VeyraX tools",
        },
        {
            "name": "Health",
            "description": "Status, liveness and readiness endpoints",
        },
    ],
)

# Setup middleware
from nexflow.infra.middleware import RequestIDMiddleware, RequestLoggingMiddleware, setup_cors

app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(RequestIDMiddleware)
setup_cors(app)

# Import and register routers
from nexflow.api.routers import health, process

app.include_router(health.router)
app.include_router(process.router)


# Error handlers
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Map unusable request bodies to the relay's 400 shape."""
    if any("question" in err.get("loc", ()) for err in exc.errors()):
        message = process.QUESTION_REQUIRED
    else:
        message = "Invalid request body"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(RelayError)
async def relay_exception_handler(request: Request, exc: RelayError):
    """Handle relay errors with the status their kind maps to."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all other exceptions."""
    error_id = str(uuid.uuid4())
    app_logger.error(f"Unhandled exception: {exc}", exc_info=True, extra={"error_id": error_id})
    return JSONResponse(
        status_code=500,
        content={"error": str(exc)},
    )


def run():
    """Serve the app locally; in production the platform imports ``app`` instead."""
    config.require_credentials()
    if config.is_production:
        app_logger.info("APP_ENV=production, skipping local server")
        return

    import uvicorn

    uvicorn.run(
        app,
        host=config.HOST,
        port=config.PORT,
        timeout_keep_alive=30,
        timeout_graceful_shutdown=30,
    )


if __name__ == "__main__":
    run()
