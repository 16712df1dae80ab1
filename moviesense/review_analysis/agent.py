# moviesense/review_analysis/agent.py
import logging
from typing import Any, get_args

from fastapi.concurrency import run_in_threadpool

from config import SentimentConfig
from moviesense.db import ReviewStore
from moviesense.errors import ReconcileError, ReviewValidationError, UpstreamFormatError
from moviesense.llm import GeminiCompletionClient
from moviesense.review_analysis.models import SentimentRecord
from moviesense.review_analysis.utils import reconcile

logger = logging.getLogger(__name__)


def build_prompt(review: str) -> str:
    allowed = ", ".join(f'"{s}"' for s in get_args(SentimentConfig.SentimentType))

    return f"""
Your task is to perform sentiment analysis on a movie review.
Your response MUST be a single, valid JSON object and nothing else.
The JSON object must have two keys: "sentiment" and "explanation".

"sentiment" must be one of these three exact strings: {allowed}.
- Classify as "Neutral" if the review is mixed, purely factual, a question, or nonsensical.

"explanation" must be a concise, one-sentence string justifying the sentiment.

Example:
{{"sentiment": "Positive", "explanation": "The reviewer praises the acting and calls the film a masterpiece."}}

Analyze this review: "{review}"
"""


def review_length(text: str) -> int:
    """Length in UTF-16 code units, the unit browser clients count in."""
    return len(text.encode("utf-16-le")) // 2


def validate_review(review: Any) -> str:
    """Return the trimmed review, or raise ReviewValidationError."""
    if not isinstance(review, str) or review_length(review.strip()) < SentimentConfig.MIN_REVIEW_LENGTH:
        raise ReviewValidationError("review missing, not a string, or too short")
    return review.strip()


async def analyze_review(
    review: Any,
    client: GeminiCompletionClient,
    store: ReviewStore,
) -> SentimentRecord:
    text = validate_review(review)

    raw_response = await client.complete(build_prompt(text))
    logger.debug(f"Raw AI response text: {raw_response!r}")

    try:
        analysis = reconcile(raw_response)
    except ReconcileError as e:
        logger.error(f"Unusable model reply ({type(e).__name__}): {e}")
        raise UpstreamFormatError(str(e), message=e.message) from e

    return await run_in_threadpool(
        store.create,
        text=text,
        sentiment=analysis.sentiment,
        explanation=analysis.explanation,
    )
