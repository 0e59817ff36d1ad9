"""Feedback inbox endpoints."""

from fastapi import APIRouter, HTTPException, status

from foliogen.api.deps import FeedbackRepo, GenerationService
from foliogen.exceptions import NotFoundError
from foliogen.schemas.feedback import Feedback, FeedbackCreate, ReplyDraftRequest

router = APIRouter()

DEFAULT_OWNER_NAME = "the portfolio owner"


@router.post("", response_model=Feedback)
async def submit_feedback(request: FeedbackCreate, repo: FeedbackRepo, service: GenerationService) -> Feedback:
    """Store a visitor message, classified by category and sentiment."""
    if not request.name or not request.name.strip() or not request.message or not request.message.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name and message are required",
        )

    analysis = await service.analyze_feedback(request.message)
    return repo.create(
        name=request.name.strip(),
        message=request.message.strip(),
        analysis=analysis,
        email=request.email,
    )


@router.get("", response_model=list[Feedback])
async def list_feedback(repo: FeedbackRepo) -> list[Feedback]:
    """List received feedback, newest first."""
    return repo.list_feedback()


@router.post("/{feedback_id}/reply", response_model=Feedback)
async def draft_feedback_reply(
    feedback_id: str,
    request: ReplyDraftRequest,
    repo: FeedbackRepo,
    service: GenerationService,
) -> Feedback:
    """Draft a reply to a feedback message and attach it."""
    feedback = repo.get(feedback_id)
    if feedback is None:
        raise NotFoundError("Feedback not found")

    draft = await service.draft_reply(
        feedback.message,
        owner_name=(request.owner_name or "").strip() or DEFAULT_OWNER_NAME,
        sender_name=feedback.name,
        sender_email=feedback.email,
        category=feedback.category.value,
        sentiment=feedback.sentiment.value,
    )
    return repo.attach_reply(feedback_id, draft)
