# moviesense/review_analysis/utils.py
import json
import re
import logging
from typing import Optional

from pydantic import ValidationError

from moviesense.errors import InvalidShape, MalformedJson, NoJsonFound
from moviesense.review_analysis.models import SentimentAnalysis

logger = logging.getLogger(__name__)

FENCED_JSON = re.compile(r"```json\s*(\{.*?\})\s*```", re.DOTALL | re.IGNORECASE)
BARE_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def extract_json_span(text: Optional[str]) -> Optional[str]:
    """Return the fenced ```json object if there is one, else the outermost {...} span."""
    if not text:
        return None

    match = FENCED_JSON.search(text)
    if match:
        return match.group(1)

    match = BARE_OBJECT.search(text)
    if match:
        return match.group(0)

    return None


def reconcile(raw_text: Optional[str]) -> SentimentAnalysis:
    """
    Turn a raw model reply into a validated SentimentAnalysis.

    Raises NoJsonFound, MalformedJson or InvalidShape. Values are returned
    exactly as the model wrote them.
    """
    span = extract_json_span(raw_text)
    if span is None:
        logger.warning(f"No JSON object in model reply: {raw_text!r}")
        raise NoJsonFound("no JSON object in model reply")

    try:
        data = json.loads(span)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse extracted JSON: {e} | span: {span!r}")
        raise MalformedJson(str(e), span) from e

    try:
        return SentimentAnalysis(
            sentiment=data.get("sentiment"),
            explanation=data.get("explanation"),
        )
    except ValidationError as e:
        logger.warning(f"Model reply failed validation: {e} | data: {data}")
        raise InvalidShape(str(e)) from e
