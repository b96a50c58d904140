"""
BlowerDoor — FastAPI application entry point.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blowerdoor.api.router import router
from blowerdoor.config import CORS_ORIGINS

app = FastAPI(
    title="BlowerDoor API",
    description="Multi-point blower-door airtightness calculation engine",
    version="0.1.0",
)

# CORS — allow local frontend dev server
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "blower-door"}
