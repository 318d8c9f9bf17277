# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the TeamManager API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import asyncio
import json
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.websocket import websocket_manager, WEBSOCKET_CHANNEL
from app.exceptions import TeamManagerException, team_manager_exception_handler
from app.auth import ProtectedRouteMiddleware
from app.routers import health, teams, players, events, dashboard, profile, email, tasks
from app.auth import routes as auth_routes
from app.websocket import routes as websocket_routes

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Global flag for Redis listener task
_redis_listener_task = None
_shutdown_event = None


async def redis_pubsub_listener():
    """
    Background task that listens to Redis pub/sub and broadcasts to WebSockets.

    Request handlers in any API process (and Celery workers) publish team
    messages to one Redis channel; each process relays them to the
    WebSocket clients connected to it.
    """
    import redis.asyncio as aioredis

    logger.info("Starting Redis pub/sub listener for WebSocket broadcasts")

    redis_client = None
    pubsub = None
    try:
        redis_client = aioredis.from_url(settings.REDIS_URL)
        pubsub = redis_client.pubsub()
        await pubsub.subscribe(WEBSOCKET_CHANNEL)

        async for message in pubsub.listen():
            if _shutdown_event and _shutdown_event.is_set():
                break

            if message["type"] == "message":
                try:
                    data = json.loads(message["data"])
                    team_id = data.pop("team_id", None)

                    if team_id:
                        await websocket_manager.broadcast(str(team_id).lower(), data)
                        logger.debug(f"Broadcast {data.get('type')} to team {team_id}")

                except json.JSONDecodeError as e:
                    logger.warning(f"Invalid JSON in Redis message: {e}")
                except Exception as e:
                    logger.error(f"Error processing Redis message: {e}")

    except asyncio.CancelledError:
        logger.info("Redis pub/sub listener cancelled")
    except Exception as e:
        logger.error(f"Redis pub/sub listener error: {e}")
    finally:
        try:
            if pubsub is not None:
                await pubsub.unsubscribe(WEBSOCKET_CHANNEL)
            if redis_client is not None:
                await redis_client.close()
        except Exception as e:
            logger.debug(f"Error closing Redis listener: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: Log config, start the Redis -> WebSocket bridge
    - Shutdown: Stop the bridge
    """
    global _redis_listener_task, _shutdown_event

    # Startup
    logger.info(f"Starting TeamManager API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Email delivery: {'enabled' if settings.email_enabled else 'simulated'}")

    _shutdown_event = asyncio.Event()
    _redis_listener_task = asyncio.create_task(redis_pubsub_listener())

    yield

    # Shutdown
    logger.info("Shutting down TeamManager API")

    if _shutdown_event:
        _shutdown_event.set()
    if _redis_listener_task:
        _redis_listener_task.cancel()
        try:
            await _redis_listener_task
        except asyncio.CancelledError:
            pass


# Create FastAPI application
app = FastAPI(
    title="TeamManager API",
    description="""
## Team Management API

Coaches manage teams, rosters and a schedule of trainings and matches.
Players see their upcoming events and answer invitations.

### How It Works

1. **Create a Team** - The creating user becomes the team admin
2. **Add Players** - In batches; players with an email get a welcome email
3. **Schedule Events** - Every player gets a pending invite and an email
4. **Players RSVP** - Accept or decline; counts update live over WebSocket

### Quick Start

```bash
# 1. Create team
curl -X POST http://localhost:8000/api/v1/teams \\
  -H "Authorization: Bearer $TOKEN" \\
  -d '{"name": "P14 Blue"}'

# 2. Schedule training
curl -X POST http://localhost:8000/api/v1/teams/{id}/events \\
  -H "Authorization: Bearer $TOKEN" \\
  -d '{"title": "Training", "date": "2025-03-04", "start_time": "18:00", "end_time": "19:30"}'
```
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Auth", "description": "Verify tokens and read the current user"},
        {"name": "Teams", "description": "Create and manage teams"},
        {"name": "Players", "description": "Team rosters and player invitations"},
        {"name": "Events", "description": "Schedules, the player event feed and RSVP"},
        {"name": "Dashboard", "description": "Coach overview"},
        {"name": "Profile", "description": "User profile and role"},
        {"name": "Email", "description": "Transactional email"},
        {"name": "Tasks", "description": "Track background email jobs"},
        {"name": "WebSocket", "description": "Real-time team updates"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# Page routes under the protected prefixes require a session
app.add_middleware(
    ProtectedRouteMiddleware,
    prefixes=settings.protected_prefixes_list,
    login_url=settings.LOGIN_URL,
)

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(TeamManagerException)
async def handle_team_manager_exception(request: Request, exc: TeamManagerException):
    """Handle custom TeamManager exceptions."""
    return await team_manager_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(auth_routes.router, prefix="/api/v1/auth", tags=["Auth"])

app.include_router(health.router, prefix="/api/v1", tags=["Health"])

app.include_router(teams.router, prefix="/api/v1/teams", tags=["Teams"])

app.include_router(players.router, prefix="/api/v1/teams", tags=["Players"])

# Coach schedule lives under the team; the player views under /events
app.include_router(events.team_router, prefix="/api/v1/teams", tags=["Events"])
app.include_router(events.router, prefix="/api/v1/events", tags=["Events"])

app.include_router(dashboard.router, prefix="/api/v1", tags=["Dashboard"])

app.include_router(profile.router, prefix="/api/v1", tags=["Profile"])

app.include_router(email.router, prefix="/api/v1", tags=["Email"])

app.include_router(tasks.router, prefix="/api/v1/tasks", tags=["Tasks"])

app.include_router(websocket_routes.router, tags=["WebSocket"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "TeamManager API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
