from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

load_dotenv()

from heliolus.config import settings
from heliolus.core.exceptions import EntityNotFoundException, ScoringException
from heliolus.logging_config import configure_logging
from heliolus.routers.health import router as health_router
from heliolus.routers.scoring import router as scoring_router
from heliolus.routers.scoring import (
    not_found_exception_handler,
    scoring_exception_handler,
    validation_exception_handler,
)

configure_logging(settings)


# SWAGGER UI: tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Scoring"},
]

# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
)

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(ScoringException, scoring_exception_handler)
app.add_exception_handler(EntityNotFoundException, not_found_exception_handler)

# REGISTER ROUTERS
app.include_router(health_router)    # Health
app.include_router(scoring_router)   # Scoring


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
async def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "heliolus.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
