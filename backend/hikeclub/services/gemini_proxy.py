from typing import Any, Dict, Optional

from google.api_core.exceptions import ResourceExhausted
from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from hikeclub.core.config import Settings, logger
from hikeclub.core.errors import ErrorKind, TrailFinderError

GENERIC_UPSTREAM_MESSAGE = "Failed to generate content from the AI service."
MISCONFIGURED_MESSAGE = "Server configuration error: The API key is not configured."

def create_gemini_llm(settings: Settings) -> ChatGoogleGenerativeAI:
    """Builds the Gemini chat model used by the proxy. One attempt per call, no retries."""
    return ChatGoogleGenerativeAI(
        model=settings.GEMINI_MODEL,
        google_api_key=settings.GOOGLE_API_KEY,
        temperature=settings.GEMINI_TEMPERATURE,
        timeout=settings.GEMINI_TIMEOUT_SECONDS,
        max_retries=1,
    )

class GeminiProxyService:
    """
    Stateless mediator between the trail finder and the Gemini model.

    The credential is checked once, when the service is built. An unconfigured
    service never builds a model and fails every request with
    ServerMisconfigured.
    """

    def __init__(self, llm: Optional[BaseChatModel] = None, model_name: str = ""):
        self._llm = llm
        self.model_name = model_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiProxyService":
        if not settings.GOOGLE_API_KEY:
            logger.error("GOOGLE_API_KEY is not set; Gemini proxy starts unconfigured.")
            return cls(llm=None, model_name=settings.GEMINI_MODEL)
        logger.info(f"Gemini proxy configured with model '{settings.GEMINI_MODEL}'.")
        return cls(llm=create_gemini_llm(settings), model_name=settings.GEMINI_MODEL)

    @property
    def is_configured(self) -> bool:
        return self._llm is not None

    def ensure_configured(self) -> None:
        if not self.is_configured:
            raise TrailFinderError(ErrorKind.SERVER_MISCONFIGURED, MISCONFIGURED_MESSAGE)

    async def handle(self, prompt: str, schema: Dict[str, Any]) -> str:
        """
        Sends the prompt to the model with a JSON response constrained to
        `schema` and returns the model's text untouched.
        """
        self.ensure_configured()
        structured_llm = self._llm.bind(
            response_mime_type="application/json",
            response_schema=schema,
        )

        logger.info(f"Forwarding trail prompt to {self.model_name or 'the AI model'} ({len(prompt)} chars).")
        try:
            response = await structured_llm.ainvoke(prompt)
        except ResourceExhausted as e:
            logger.error(f"Google API rate limit exceeded in Gemini proxy: {e}")
            raise TrailFinderError(
                ErrorKind.UPSTREAM_FAILURE, GENERIC_UPSTREAM_MESSAGE, details=type(e).__name__
            ) from e
        except Exception as e:
            logger.error(f"Error in Gemini proxy call: {e}", exc_info=True)
            raise TrailFinderError(
                ErrorKind.UPSTREAM_FAILURE, GENERIC_UPSTREAM_MESSAGE, details=type(e).__name__
            ) from e

        text = response.content
        if not isinstance(text, str) or not text.strip():
            logger.error(f"Gemini returned no usable text: {text!r}")
            raise TrailFinderError(
                ErrorKind.UPSTREAM_FAILURE, GENERIC_UPSTREAM_MESSAGE, details="EmptyResponse"
            )
        return text
