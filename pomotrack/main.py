from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pomotrack.config import CORS_ORIGINS, LOG_LEVEL

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

from pomotrack.api import dashboard, health, insights, metrics, schedule, templates, timer
from pomotrack.api.metrics import service_errors
from pomotrack.database import engine
from pomotrack.models.models import Base
from pomotrack.utils.errors import ServiceError


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create database tables; alembic owns migrations beyond the initial schema
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="Pomotrack API",
    description="Focus timer, streaks and reflection insights",
    version="1.0.0",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    logger.warning("%s %s rejected (%s): %s", request.method, request.url.path, exc.status_code, exc.message)
    service_errors.labels(status=str(exc.status_code)).inc()
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Include routers
app.include_router(health.router, prefix="/api")
app.include_router(metrics.router, prefix="/api")
app.include_router(timer.router, prefix="/api")
app.include_router(dashboard.router, prefix="/api")
app.include_router(insights.router, prefix="/api")
app.include_router(templates.router, prefix="/api")
app.include_router(schedule.router, prefix="/api")

@app.get("/")
async def root():
    return {"message": "Welcome to Pomotrack API"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("pomotrack.main:app", host="0.0.0.0", port=8000, reload=False)
