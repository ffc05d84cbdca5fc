"""
Deal models - offers under review and the brands behind them.
"""
from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .athlete import parse_day


class DealType(str, Enum):
    """Kinds of NIL deals with their own market rates."""
    SOCIAL_POST = "social_post"
    APPEARANCE = "appearance"
    ENDORSEMENT = "endorsement"
    AUTOGRAPH = "autograph"
    CAMP = "camp"
    MERCHANDISE = "merchandise"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> "DealType":
        """Map a raw deal type to a DealType, using OTHER for anything unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


class BrandProfile(BaseModel):
    """Brand track record as seen on a deal."""
    id: Optional[str] = None
    company_name: str = "This brand"
    industry: Optional[str] = None
    is_verified: bool = False
    total_spent: float = Field(default=0, ge=0)
    deals_completed: int = Field(default=0, ge=0)
    avg_deal_rating: float = Field(default=0, ge=0, le=5, description="0 means not yet rated")


class OpportunityRequirements(BaseModel):
    """Requirements of the opportunity a deal came from."""
    title: Optional[str] = None
    compensation_type: Optional[str] = None
    min_gpa: Optional[float] = None
    min_followers: Optional[int] = None


class Deliverable(BaseModel):
    type: str
    description: str = ""
    deadline: Optional[str] = None


class DealOffer(BaseModel):
    """A deal proposed to an athlete."""
    id: Optional[str] = None
    title: str = ""
    description: Optional[str] = None
    deal_type: DealType = DealType.OTHER
    amount: float = Field(ge=0, description="Proposed compensation in dollars")
    status: str = "pending"
    payment_terms: Optional[str] = None
    deliverables: list[Deliverable] = Field(default_factory=list)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    brand: Optional[BrandProfile] = None
    opportunity: Optional[OpportunityRequirements] = None

    @field_validator("deal_type", mode="before")
    @classmethod
    def parse_deal_type(cls, v: Any) -> DealType:
        return DealType.parse(v)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def parse_dates(cls, v: Any) -> Any:
        return parse_day(v)

    @field_validator("deliverables", mode="before")
    @classmethod
    def default_deliverables(cls, v: Any) -> Any:
        return v or []
