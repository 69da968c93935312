# /healthlens/utils/lifecycle.py

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from healthlens.config.settings import settings, validate_environment
from healthlens.flows.catalog import flow_registry
from healthlens.flows.runner import FlowRunner
from healthlens.services.model_client import GeminiModelClient
from healthlens.utils.logging import setup_logging

# This file manages the application's lifespan: logging setup, settings checks
# and building the model client and flow runner shared by every request.

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    setup_logging()

    logger.info("Application starting up...")

    # A runner installed before startup (tests) is kept as is
    if getattr(app.state, "flow_runner", None) is None:
        validate_environment(settings)
        client = GeminiModelClient.from_settings(settings)
        app.state.flow_runner = FlowRunner(client)
    app.state.flow_registry = flow_registry

    logger.info(f"Application startup complete. {len(flow_registry)} flows registered.")

    yield  # Application is now running

    logger.info("Application shutting down...")
