# config.py
from pathlib import Path
from dotenv import load_dotenv
import os
from typing import Literal


BASE_DIR = Path(__file__).resolve().parent
load_dotenv(BASE_DIR / ".env")

class Settings:
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
    GEMINI_TEMPERATURE: float = float(os.getenv("GEMINI_TEMPERATURE", "0.2"))
    DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'reviews.db'}")

    HOST: str = os.getenv("HOST", "127.0.0.1")
    PORT: int = int(os.getenv("PORT", "8000"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class SentimentConfig:
    SentimentType = Literal["Positive", "Negative", "Neutral"]

    MIN_REVIEW_LENGTH = 10

# ────────────────────── PUBLIC ERROR MESSAGES ──────────────────────
    MSG_TOO_SHORT = f"Review text must be at least {MIN_REVIEW_LENGTH} characters long."
    MSG_UPSTREAM = "The AI service is currently unavailable."
    MSG_REFUSED = "The AI service declined to analyze this review."
    MSG_NO_JSON = "The AI failed to generate a valid response."
    MSG_MALFORMED = "The AI response format was unreadable."
    MSG_INVALID_SHAPE = "The AI response was missing required fields."
    MSG_PERSISTENCE = "Failed to save the analysis."
    MSG_LOAD_FAILED = "Failed to load the review."
    MSG_BAD_REQUEST = "The request was not valid."
    MSG_NOT_FOUND = "Review not found."
    MSG_INTERNAL = "An internal server error occurred."


settings = Settings()
