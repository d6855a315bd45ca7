"""Application entry point for the AI Meal Plan API.

Defines the FastAPI app, middleware, exception handlers and includes API
routers from the `api` package. The `lifespan` handler creates the tables
and builds the meal plan pipeline once; startup aborts if it cannot.
"""

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.orm import Session
from contextlib import asynccontextmanager
import httpx

from core import config
from core.error_handlers import register_exception_handlers
from core.exceptions import PersistenceError
from core.logger import get_logger
from database import init_db
from database.deps import get_db_read
from services.factory import build_orchestrator
from api.meal_plans import router as meal_plans_router
from api.recipes import router as recipes_router
from api.users import router as users_router

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Fastapi lifespan context: initialize resources before serving requests."""
    init_db()
    with httpx.Client(timeout=config.MEALDB_TIMEOUT) as http_client:
        app.state.orchestrator = build_orchestrator(http_client)
        yield


app = FastAPI(title="AI Meal Plan API", version="1.0.0", lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log incoming requests and their responses."""
    logger.info("%s %s", request.method, request.url.path)
    try:
        response = await call_next(request)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response
    except Exception:
        logger.exception("Request error: %s %s", request.method, request.url.path)
        raise


@app.get("/health")
def health(db: Session = Depends(get_db_read)):
    """Return basic health status and database connectivity.

    Raises:
        PersistenceError: If database connection fails.
    """
    try:
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.exception("Health check failed")
        raise PersistenceError("Database health check failed", operation="health") from e


# include routers
app.include_router(meal_plans_router)
app.include_router(recipes_router)
app.include_router(users_router)


if __name__ == "__main__":
    # Allow starting the app via `python ./main.py`
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
