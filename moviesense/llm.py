# moviesense/llm.py
import logging
from functools import lru_cache
from typing import Any, Dict

from google import generativeai as genai
from google.generativeai.types import HarmBlockThreshold, HarmCategory

from config import settings
from moviesense.errors import UpstreamError, UpstreamRefusalError

logger = logging.getLogger(__name__)

# Strongly negative reviews get refused under the default thresholds.
RELAXED_SAFETY: Dict[Any, Any] = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_NONE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_NONE,
}


class GeminiCompletionClient:
    """Sends one prompt to Gemini and returns the reply text."""

    def __init__(self, api_key: str, model_name: str, temperature: float = 0.2):
        self.api_key = api_key
        if api_key:
            genai.configure(api_key=api_key)
        self.model_name = model_name
        self.model = genai.GenerativeModel(
            model_name=model_name,
            safety_settings=RELAXED_SAFETY,
        )
        self.generation_config = genai.GenerationConfig(temperature=temperature)

    async def complete(self, prompt: str) -> str:
        if not self.api_key:
            logger.error("GOOGLE_API_KEY required in .env")
            raise UpstreamError("GOOGLE_API_KEY is not set")

        try:
            response = await self.model.generate_content_async(
                prompt,
                generation_config=self.generation_config,
            )
        except Exception as e:
            logger.error(f"Gemini call failed ({self.model_name}): {e}")
            raise UpstreamError(str(e)) from e

        # .text raises ValueError when the reply was blocked or has no parts
        try:
            text = response.text
        except ValueError as e:
            feedback = getattr(response, "prompt_feedback", None)
            logger.error(f"Gemini declined to respond: {e} | feedback: {feedback}")
            raise UpstreamRefusalError(str(e)) from e

        if not text or not text.strip():
            logger.error("Gemini returned an empty reply.")
            raise UpstreamRefusalError("empty reply")

        return text.strip()


@lru_cache(maxsize=1)
def get_completion_client() -> GeminiCompletionClient:
    return GeminiCompletionClient(
        api_key=settings.GOOGLE_API_KEY,
        model_name=settings.GEMINI_MODEL,
        temperature=settings.GEMINI_TEMPERATURE,
    )
