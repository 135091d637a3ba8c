"""Application entry point for the WellTrack API.

Defines the FastAPI app, middleware and exception handlers and includes
the API routers from the `api` package. The `lifespan` handler initializes
the DB on startup.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.config import CORS_ORIGINS
from core.error_handlers import register_exception_handlers
from core.exceptions import DatabaseError
from core.logger import get_logger
from database import init_db
from database.deps import get_db_read
from api.profile import router as profile_router
from api.health import router as health_router
from api.food import router as food_router
from api.exercise import router as exercise_router
from api.sleep import router as sleep_router
from api.diet_plans import router as diet_plans_router
from api.goals import router as goals_router
from api.reports import router as reports_router
from api.health_card import router as health_card_router
from api.insights import router as insights_router

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Fastapi lifespan context: initialize resources before serving requests."""
    init_db()
    yield


app = FastAPI(title="WellTrack API", version="1.0.0", lifespan=lifespan)

# Session cookies require credentialed CORS, so origins must be explicit.
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log incoming requests and their responses."""
    logger.info("%s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
    except Exception:
        logger.exception("Request error: %s %s", request.method, request.url.path)
        raise
    logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response


@app.get("/health")
def health(db: Session = Depends(get_db_read)):
    """Return basic health status and database connectivity.

    Raises:
        DatabaseError: If database connection fails.
    """
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.exception("Health check failed")
        raise DatabaseError("Database health check failed", operation="health_check") from e
    return {"status": "healthy", "database": "connected"}


app.include_router(profile_router)
app.include_router(health_router)
app.include_router(food_router)
app.include_router(exercise_router)
app.include_router(sleep_router)
app.include_router(diet_plans_router)
app.include_router(goals_router)
app.include_router(reports_router)
app.include_router(health_card_router)
app.include_router(insights_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
