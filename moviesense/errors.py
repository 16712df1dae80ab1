# moviesense/errors.py
from config import SentimentConfig


class AnalysisError(Exception):
    """Base for every failure that ends a review analysis request."""

    status_code = 500
    message = SentimentConfig.MSG_INTERNAL

    def __init__(self, detail: str = None, message: str = None):
        super().__init__(detail or message or self.message)
        if message:
            self.message = message


class ReviewValidationError(AnalysisError):
    status_code = 400
    message = SentimentConfig.MSG_TOO_SHORT


class UpstreamError(AnalysisError):
    message = SentimentConfig.MSG_UPSTREAM


class UpstreamRefusalError(UpstreamError):
    message = SentimentConfig.MSG_REFUSED


class UpstreamFormatError(AnalysisError):
    message = SentimentConfig.MSG_NO_JSON


class PersistenceError(AnalysisError):
    message = SentimentConfig.MSG_PERSISTENCE


# ────────────────────── RECONCILER ──────────────────────
# Raised by the reconciler only; the handler wraps them in UpstreamFormatError.

class ReconcileError(Exception):
    message = SentimentConfig.MSG_NO_JSON


class NoJsonFound(ReconcileError):
    message = SentimentConfig.MSG_NO_JSON


class MalformedJson(ReconcileError):
    message = SentimentConfig.MSG_MALFORMED

    def __init__(self, detail: str, span: str):
        super().__init__(detail)
        self.span = span


class InvalidShape(ReconcileError):
    message = SentimentConfig.MSG_INVALID_SHAPE
