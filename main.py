# main.py
import logging
import sys

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from config import settings, SentimentConfig
from moviesense.errors import AnalysisError, UpstreamFormatError
from moviesense.review_analysis.views import router as review_router


logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format=settings.LOG_FORMAT,
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

app = FastAPI(title="MovieSense Review Sentiment", docs_url="/docs")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(review_router)


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError):
    if isinstance(exc, UpstreamFormatError):
        logger.warning(f"{request.url.path}: invalid AI output ({exc})")
    elif exc.status_code >= 500:
        logger.error(f"{request.url.path}: {type(exc).__name__}: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    logger.info(f"{request.url.path}: rejected request: {errors}")
    # Only the analyze body is validated by pydantic; path/query errors get the generic message
    if errors and all(error.get("loc", ("",))[0] == "body" for error in errors):
        return JSONResponse(status_code=400, content={"error": SentimentConfig.MSG_TOO_SHORT})
    return JSONResponse(status_code=400, content={"error": SentimentConfig.MSG_BAD_REQUEST})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"{request.url.path}: unhandled server error")
    return JSONResponse(status_code=500, content={"error": SentimentConfig.MSG_INTERNAL})


@app.get("/health", tags=["Health"])
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=True)
