from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.core.config import settings
from app.core.logging_config import configure_logging
from app.db.mongo import connect_to_mongo, disconnect_from_mongo
from app.api.v1.api import api_router
from app.utils.ledger_validation import LedgerValidationError

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await connect_to_mongo()
    yield
    await disconnect_from_mongo()


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.PROJECT_VERSION,
    description=settings.DESCRIPTION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(LedgerValidationError)
async def ledger_validation_handler(request: Request, exc: LedgerValidationError):
    return JSONResponse(
        status_code=422,
        content={"detail": str(exc)}
    )

@app.get("/")
async def root():
    return {"message": "Welcome to Tabby API"}

app.include_router(api_router, prefix=settings.API_V1_STR)
