from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contactbook.api.error_handlers import register_error_handlers
from contactbook.api.v1.api import api_router
from contactbook.core.config import get_settings
from contactbook.core.metrics import instrument_app
from contactbook.core.logging import get_logger
from contactbook.db.session import create_tables
from contactbook.utils.decorators import log_request

logger = get_logger(__name__)

settings = get_settings()
app = FastAPI(
    title=settings.API_TITLE,
    description="A web API for managing a contact book of customers.",
    version="1.0.0",
)

# The frontend runs on a different origin; lock CORS_ORIGINS_STR down per environment.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Instrument the app with Prometheus metrics
instrument_app(app)

app.include_router(api_router, prefix="/api")

@app.on_event("startup")
async def startup_event():
    if settings.CREATE_TABLES_ON_STARTUP:
        create_tables()
    logger.info("Application startup")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/")
@log_request
async def read_root():
    return {"message": "Welcome to the Contact Book API"}
