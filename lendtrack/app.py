#!/usr/bin/env python3

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from lendtrack.core import database
from lendtrack.routes import api
from lendtrack.configs import OPTIONS, LOG_LEVEL, CORS_ORIGINS
from lendtrack import __version__ as VERSION

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Tables managed by alembic already exist; create_all only fills gaps
    database.init()
    yield
    database.session.remove()

app = FastAPI(
    lifespan=lifespan,
    title="LendTrack API",
    description="LendTrack: a small inventory & lending tracker",
    version=VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RequestValidationError)
async def request_validation_error(request: Request, exc: RequestValidationError):
    # Malformed bodies get the same envelope as every other failure
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"ok": False, "message": "Action and payload are required."},
    )

app.include_router(api.router, prefix="/v1/api")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("lendtrack.app:app", **OPTIONS)
