"""Portfolio chat assistant endpoint."""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from foliogen.api.deps import ChatService
from foliogen.schemas.profile import GeneratedProfile
from foliogen.services.ai.chat import ChatTurn

router = APIRouter()


class ChatRequest(BaseModel):
    """Visitor message plus the conversation so far."""

    message: str = ""
    profile: GeneratedProfile | None = None
    history: list[ChatTurn] = []


class ChatResponse(BaseModel):
    """Assistant reply."""

    reply: str


@router.post("", response_model=ChatResponse)
async def chat_with_agent(request: ChatRequest, service: ChatService) -> ChatResponse:
    """Answer a visitor's question using only the given profile."""
    if request.profile is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Profile is required",
        )

    reply = await service.reply(request.profile, request.message, request.history)
    return ChatResponse(reply=reply)
