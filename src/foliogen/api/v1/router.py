"""Main API router aggregating all v1 endpoints."""

from fastapi import APIRouter

from foliogen.api.v1 import analyze, chat, feedback, generate, ingest, share

api_router = APIRouter()

# Include sub-routers
api_router.include_router(analyze.router, prefix="/analyze", tags=["Analyze"])
api_router.include_router(generate.router, prefix="/generate", tags=["Generate"])
api_router.include_router(ingest.router, prefix="/ingest", tags=["Ingest"])
api_router.include_router(share.router, prefix="/share", tags=["Share"])
api_router.include_router(feedback.router, prefix="/feedback", tags=["Feedback"])
api_router.include_router(chat.router, prefix="/chat", tags=["Chat"])
