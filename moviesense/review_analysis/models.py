# moviesense/review_analysis/models.py
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from config import SentimentConfig


class ReviewSubmission(BaseModel):
    # Any, so a non-string review reaches the handler's own check instead of a 422
    review: Any = None


class SentimentAnalysis(BaseModel):
    model_config = ConfigDict(strict=True)

    sentiment: SentimentConfig.SentimentType = Field(
        ..., description="Exactly one of Positive, Negative, Neutral"
    )
    explanation: str = Field(
        ..., min_length=1, description="One-sentence reason for the sentiment"
    )


class SentimentRecord(BaseModel):
    id: int
    text: str
    sentiment: SentimentConfig.SentimentType
    explanation: str
    created_at: Optional[datetime] = None


class AnalyzeResponse(BaseModel):
    sentiment: SentimentConfig.SentimentType
    explanation: str
    reviewText: str
    id: int


class ReviewResponse(BaseModel):
    id: int
    text: str
    sentiment: SentimentConfig.SentimentType
    explanation: str
    createdAt: Optional[datetime] = None


class ErrorResponse(BaseModel):
    error: str
