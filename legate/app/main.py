from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from legate.app.api.v1.api import api_router
from legate.app.core.config import settings
from legate.app.core.logging_config import configure_logging

configure_logging()

app = FastAPI(title="LegatePro Billing")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["Authorization", "Content-Type", "Accept"],
    expose_headers=["Content-Disposition"],
)

app.include_router(api_router)
