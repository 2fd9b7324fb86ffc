# barberqueue/main.py

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import CORS_ORIGINS, ENVIRONMENT, LOG_LEVEL
from .data import list_services
from .db import create_db_and_tables
from .errors import QueueAppError
from .routers import barbers_routes, payments_routes, users_routes
from .schemas import ServicePublic

VERSION = "2.0.0"

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    logger.info("barberqueue API started (environment=%s)", ENVIRONMENT)
    yield


app = FastAPI(title="barberqueue API", version=VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "X-Requested-With", "Accept", "Origin"],
)


@app.exception_handler(QueueAppError)
async def queue_app_error_handler(request: Request, exc: QueueAppError):
    return JSONResponse(status_code=exc.status_code, content={"msg": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"msg": "Internal server error"})


@app.get("/")
def root():
    return {
        "status": "OK",
        "message": "barberqueue API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": ENVIRONMENT,
        "version": VERSION,
    }


@app.get("/health")
def health_check():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/services", response_model=List[ServicePublic])
def services():
    return list_services()


app.include_router(users_routes.router)
app.include_router(barbers_routes.router)
app.include_router(payments_routes.router)
