# app/main.py
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.core.logging_setup import setup_logging
from app.database import create_tables, reset_schema
from app.models.task import Task  # noqa: F401
from app.routers import health, task

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


app = FastAPI(title="Task Management System", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include Routers
app.include_router(task.router, prefix=settings.API_PREFIX)
app.include_router(health.router, prefix=settings.API_PREFIX)

@app.on_event("startup")
async def startup_event():
    if settings.should_reset_db:
        await reset_schema()
    else:
        if settings.DB_RESET:
            logger.warning("DB_RESET is set but APP_PROFILE is not 'reset-db'; skipping reset")
        else:
            logger.info("Database reset is disabled. Skipping reset operation.")
        await create_tables()

@app.get("/")
def read_root():
    return {"message": "Welcome to the Task Management API"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=9090, reload=True)
