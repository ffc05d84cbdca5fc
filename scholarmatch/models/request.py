"""
Request/response models for the advisor handler.
"""
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator


ADVISOR_ACTIONS = (
    "chat",
    "analyze_deal",
    "recommend_brands",
    "schedule_advice",
    "score_tips",
    "career_guidance",
)


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class AdvisorRequest(BaseModel):
    """JSON body identifying an athlete and the action to run for them."""
    action: str = "chat"
    athlete_id: str = ""
    message: Optional[str] = None
    deal_id: Optional[str] = None
    brand_id: Optional[str] = None
    context: dict[str, Any] = Field(default_factory=dict)
    conversation_history: list[ChatMessage] = Field(default_factory=list)

    @field_validator("action", mode="before")
    @classmethod
    def normalize_action(cls, v: Any) -> str:
        """Unknown or missing actions are routed to chat."""
        action = str(v or "chat").strip().lower()
        return action if action in ADVISOR_ACTIONS else "chat"


class ActionItem(BaseModel):
    type: Literal["accept", "negotiate", "decline", "review", "schedule", "research", "improve"]
    title: str
    description: str
    priority: Literal["high", "medium", "low"]


class AdvisorResponse(BaseModel):
    """Structured advisor reply serialized back to the caller."""
    success: bool
    message: str
    data: Optional[dict[str, Any]] = None
    suggestions: list[str] = Field(default_factory=list)
    action_items: list[ActionItem] = Field(default_factory=list)
    confidence: Optional[float] = Field(default=None, ge=0, le=1)
    error: Optional[str] = None
