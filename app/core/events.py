"""
Application lifecycle events
Handles startup and shutdown tasks
"""

from fastapi import FastAPI
import logging
from contextlib import asynccontextmanager

from .logging import setup_logging

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager
    Handles startup and shutdown events
    """
    state = app.state.services

    # Startup
    try:
        setup_logging(state.settings.LOG_LEVEL)
        logger.info(f"Starting {state.settings.APP_NAME}...")

        if not state.settings.GEMINI_API_KEY:
            logger.warning("GEMINI_API_KEY not set, AI roast endpoint will return errors")

        logger.info(
            f"{state.settings.APP_NAME} started successfully "
            f"({len(state.catalog.list_partners())} partners, "
            f"{len(state.catalog.list_general_perks())} general perks)"
        )

        yield

    finally:
        # Shutdown
        logger.info(f"Shutting down {state.settings.APP_NAME}...")

        # Stop pending simulation ticks
        await state.simulation.shutdown()
        logger.info("Test simulations stopped")

        logger.info(f"{state.settings.APP_NAME} shutdown complete")
