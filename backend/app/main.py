# CareBill backend entrypoint: resident billing API for a care facility.

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from backend.app.core.logging_config import configure_logging
from backend.app.core.settings import get_settings
from backend.app.api import register
from backend.app.api import login
from backend.app.api import customers
from backend.app.api import invoices
from backend.app.api import settings as facility_settings
from backend.app.api import dashboard
from backend.app.core.dev_seed import ensure_default_dev_data
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine

configure_logging()
logger = logging.getLogger(__name__)
Base.metadata.create_all(bind=engine)

settings = get_settings()
app = FastAPI(title=settings.app_name, version=settings.api_version)

origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(register.router)
app.include_router(login.router)
app.include_router(customers.router)
app.include_router(invoices.router)
app.include_router(facility_settings.router)
app.include_router(dashboard.router)


@app.exception_handler(SQLAlchemyError)
async def storage_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/")
def read_root():
    return {"app": "CareBill backend", "status": "ok"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.on_event("startup")
def seed_default_dev_data():
    db = SessionLocal()
    try:
        ensure_default_dev_data(db)
    finally:
        db.close()
