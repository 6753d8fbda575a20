"""
Trip Planner Backend - FastAPI Application

Web-search-grounded travel chat:
- Regex extraction of destination/dates/budget (engine/)
- Tavily web search + Groq completion per turn
- Caller-held context; nothing is persisted between requests

Python 3.9 compatible.
"""

import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .chat_session import build_conversation_history
from .config import TripPlannerConfig, mask_key
from .errors import ProviderError
from .models import ErrorResponse, StatusResponse, TripPlannerRequest, TripPlannerResponse
from .trip_planner import TripPlanner

VERSION = "1.0.0"

REQUEST_ERROR_MESSAGE = "Failed to process your request. Please try again."
PROVIDER_ERROR_MESSAGE = "Failed to get travel information. Please try again."

# Load environment variables from the project .env
env_paths = [
    Path(__file__).parent.parent / ".env",  # project root
    Path.cwd() / ".env",  # current working directory
]
for env_path in env_paths:
    if env_path.exists():
        load_dotenv(env_path)
        break
else:
    load_dotenv()  # fallback to default behavior

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if os.getenv("DEBUG", "false").lower() == "true" else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

trip_planner: Optional[TripPlanner] = None


def _get_trip_planner() -> TripPlanner:
    """Return the shared planner, creating it from the environment on first use."""
    global trip_planner
    if trip_planner is None:
        trip_planner = TripPlanner(TripPlannerConfig.from_env())
    return trip_planner


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - initialize services."""
    global trip_planner

    logger.info("=" * 60)
    logger.info("Initializing Trip Planner Backend")
    logger.info("=" * 60)

    config = TripPlannerConfig.from_env()
    logger.info(f"TAVILY_API_KEY present: {config.tavily_configured} ({mask_key(config.tavily_api_key)})")
    logger.info(f"GROQ_API_KEY present: {config.groq_configured} ({mask_key(config.groq_api_key)})")
    logger.info(f"GROQ_MODEL: {config.groq_model}")

    # Missing keys do not stop start-up; each turn reports them as provider errors
    if not config.tavily_configured:
        logger.warning("Tavily search NOT configured - TAVILY_API_KEY missing")
    if not config.groq_configured:
        logger.warning("Groq completion NOT configured - GROQ_API_KEY missing")

    trip_planner = TripPlanner(config)
    logger.info("=" * 60)

    yield

    # Shutdown
    if trip_planner:
        await trip_planner.close()
    logger.info("Shutting down Trip Planner Backend")


app = FastAPI(
    title="Trip Planner Backend",
    description="Travel planning chat grounded on real-time web search",
    version=VERSION,
    lifespan=lifespan,
)

# CORS middleware for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request body => 400 with a generic message."""
    logger.warning(f"Request processing error on {request.url.path}: {exc.errors()}")
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    )
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error=REQUEST_ERROR_MESSAGE, details=details).model_dump(),
    )


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": VERSION}


@app.get("/api/trip-planner", response_model=StatusResponse)
async def trip_planner_status() -> StatusResponse:
    """Report whether both providers have API keys."""
    config = _get_trip_planner().config
    return StatusResponse(
        status="API is working!",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        tavilyConfigured=config.tavily_configured,
        groqConfigured=config.groq_configured,
    )


@app.post(
    "/api/trip-planner",
    response_model=TripPlannerResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def trip_planner_turn(request: TripPlannerRequest):
    """
    Process one chat turn.

    Returns 200 with reply/sources/context, or 500 with {error, details}
    when a provider fails. The context is only returned on success, so a
    failed turn can be retried with the context the client already holds.
    """
    planner = _get_trip_planner()
    context = request.context.model_dump() if request.context else {}
    history = request.conversationHistory or build_conversation_history(request.messageHistory)

    try:
        return await planner.process_turn(
            user_message=request.userMessage,
            context=context,
            conversation_history=history,
        )
    except ProviderError as e:
        logger.error(f"[TRIP] {e.provider} error: {e}", exc_info=True)
        details = str(e)
    except Exception as e:
        logger.error(f"[TRIP] Unexpected error: {type(e).__name__}: {e}", exc_info=True)
        details = str(e)

    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=PROVIDER_ERROR_MESSAGE, details=details).model_dump(),
    )
