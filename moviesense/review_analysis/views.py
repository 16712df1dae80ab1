# moviesense/review_analysis/views.py
from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool

from config import SentimentConfig
from moviesense.db import ReviewStore, get_store
from moviesense.llm import GeminiCompletionClient, get_completion_client
from .models import AnalyzeResponse, ErrorResponse, ReviewResponse, ReviewSubmission
from .agent import analyze_review

router = APIRouter(prefix="/api", tags=["Review Sentiment"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.post("/analyze", response_model=AnalyzeResponse, responses=ERROR_RESPONSES)
async def analyze(
    req: ReviewSubmission,
    client: GeminiCompletionClient = Depends(get_completion_client),
    store: ReviewStore = Depends(get_store),
):
    record = await analyze_review(req.review, client, store)

    return AnalyzeResponse(
        sentiment=record.sentiment,
        explanation=record.explanation,
        reviewText=record.text,
        id=record.id,
    )


@router.get("/reviews/{review_id}", response_model=ReviewResponse, responses={404: {"model": ErrorResponse}})
async def get_review(review_id: int, store: ReviewStore = Depends(get_store)):
    record = await run_in_threadpool(store.get, review_id)
    if record is None:
        raise HTTPException(status_code=404, detail=SentimentConfig.MSG_NOT_FOUND)

    return ReviewResponse(
        id=record.id,
        text=record.text,
        sentiment=record.sentiment,
        explanation=record.explanation,
        createdAt=record.created_at,
    )
