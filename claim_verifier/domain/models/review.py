"""Domain models for fact-check database results."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class Review(BaseModel):
    """A single fact-checker's review of a claim."""

    publisher_name: str = Field(default="Unknown", description="Fact-checking organisation")
    url: Optional[str] = Field(None, description="Link to the published review")
    title: Optional[str] = Field(None, description="Title of the review article")
    rating_text: Optional[str] = Field(None, description="Textual rating such as 'False' or 'Mostly true'")
    review_date: Optional[datetime] = Field(None, description="When the review was published")
    language_code: Optional[str] = Field(None, description="Language of the review")

    class Config:
        """Pydantic model configuration."""
        frozen = True


class FactCheckClaim(BaseModel):
    """A previously fact-checked claim matched by the database."""

    text: Optional[str] = Field(None, description="The claim as recorded by the database")
    claimant: Optional[str] = Field(None, description="Who made the claim")
    claim_date: Optional[datetime] = Field(None, description="When the claim was made")
    reviews: List[Review] = Field(default_factory=list, description="Reviews of this claim")

    class Config:
        """Pydantic model configuration."""
        frozen = True
