from fastapi import APIRouter

from app.api.chat import router as chat_router
from app.api.publications import router as publications_router

api_router = APIRouter(prefix="/api")
api_router.include_router(chat_router, prefix="/chat", tags=["chat"])
api_router.include_router(publications_router, prefix="/publications", tags=["publications"])
