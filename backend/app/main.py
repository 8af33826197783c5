"""FastAPI application entry point."""

import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api import analysis
from app.config import CORS_ORIGINS

logger = logging.getLogger(__name__)


app = FastAPI(
    title="Lending Intelligence",
    description="Borrower profile aggregation, risk scoring and loan decisioning",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis.router, prefix="/api/analyze", tags=["Analysis"])


@app.get("/api/health")
async def health():
    return {"status": "operational", "platform": "Lending Intelligence"}
