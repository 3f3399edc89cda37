"""FastAPI application factory with lifespan management."""

import os
import time
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from alerts.dispatcher import AlertDispatcher
from api.routers import accounts, events, health
from auth import AuthGate
from config import Settings, configure_logging
from errors import ServiceError
from ingestion.pipeline import IngestionPipeline
from storage.events import EventStore
from storage.users import UserStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the stores, auth gate, dispatcher and pipeline from the app's settings."""
    settings: Settings = app.state.settings
    log = configure_logging("api", settings.log_level, settings.log_json)

    event_store = EventStore(settings.events_file, settings.log_level, settings.log_json)
    user_store = UserStore(settings.users_file, settings.log_level, settings.log_json)
    dispatcher = AlertDispatcher(settings, client=app.state.sms_client)

    # Store in app state for dependency injection
    app.state.auth_gate = AuthGate(settings, user_store)
    app.state.pipeline = IngestionPipeline(settings, event_store, dispatcher)
    app.state.dispatcher = dispatcher
    app.state.start_time = time.time()
    log.info(
        "api_started",
        port=settings.port,
        events_file=settings.events_file,
        ingestion_key_required=bool(settings.api_key),
    )

    yield

    # Let accepted alerts finish before the loop goes away
    await dispatcher.drain()
    log.info("api_stopped")


async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


def create_app(settings: Settings | None = None, sms_client=None) -> FastAPI:
    """``sms_client`` stands in for the Twilio client when given (tests, alternate gateways)."""
    settings = settings or Settings()

    app = FastAPI(
        title="Safety Event Alerts API",
        version="1.0.0",
        description="Device safety event ingestion with SMS fall alerts",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.sms_client = sms_client

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(events.router)
    app.include_router(accounts.router)

    # Front-end; mounted last so API routes take precedence
    if os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app


def run():
    settings = Settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


app = create_app()


if __name__ == "__main__":
    run()
