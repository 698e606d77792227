"""
FastAPI application
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from config.settings import settings
from immidraft.utils.logger import setup_logging, get_logger
from immidraft.api.middleware import LoggingMiddleware
from immidraft.api.rate_limit_middleware import RateLimitMiddleware
from immidraft.api.error_handler import EXCEPTION_HANDLERS
from immidraft.api.routers import (
    cases,
    criteria,
    documents,
    evaluation_letters,
    evaluations,
    letters,
    orders,
    samples,
    translations,
    verifications,
)
from immidraft.db.connection import db_manager
from immidraft.services.criteria_service import criteria_service

setup_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="ImmiDraft API",
    description="Immigration petition preparation: case documents, expert letters, "
                "translations, credential evaluations and document verification",
    version="0.1.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RateLimitMiddleware)
app.add_middleware(LoggingMiddleware)

for exception_class, handler in EXCEPTION_HANDLERS:
    app.add_exception_handler(exception_class, handler)


@app.on_event("startup")
async def startup_event():
    logger.info("Application starting")
    db_manager.create_tables()
    seeded = criteria_service.seed_default_criteria()
    if seeded:
        logger.info(f"Seeded {seeded} default criteria")

    if db_manager.health_check():
        logger.info("Database connection OK")
    else:
        logger.warning("Database health check failed")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutting down")
    db_manager.close()


@app.get("/")
async def root():
    return {
        "message": "ImmiDraft API",
        "version": "0.1.0",
        "docs": "/docs"
    }


@app.get("/health")
async def health_check():
    db_healthy = db_manager.health_check()
    return {
        "status": "healthy" if db_healthy else "unhealthy",
        "database": "healthy" if db_healthy else "unhealthy"
    }


for router_module in (
    cases,
    documents,
    letters,
    evaluation_letters,
    translations,
    evaluations,
    verifications,
    orders,
    criteria,
    samples,
):
    app.include_router(router_module.router)
