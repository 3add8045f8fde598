"""
Text generation service backed by the Anthropic Messages API.

One long-lived async client is shared by every request; each call is a
single outbound request with no retries.
"""

from typing import Optional
import anthropic
import structlog

from config import settings
from exceptions import AINotConfiguredError, GenerationError

logger = structlog.get_logger(__name__)


class TextGenerationService:
    """
    Turn a prompt into free text.

    configured is False when no API key is set; callers check it before
    generating and fall back to canned answers.
    """

    SYSTEM_PROMPT = (
        "You are a home cooking and grocery advisor for a smart fridge app. "
        "Follow the output format the user message asks for exactly."
    )

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None
    ):
        """Initialize from settings; explicit arguments win."""
        api_key = api_key if api_key is not None else settings.anthropic_api_key
        self.model = model or settings.ai_model
        self.max_tokens = max_tokens or settings.ai_max_tokens
        self.timeout = timeout or settings.ai_timeout_seconds

        if api_key:
            self.client = anthropic.AsyncAnthropic(
                api_key=api_key,
                timeout=self.timeout,
                max_retries=0
            )
        else:
            self.client = None
            logger.info("generation_not_configured")

    @property
    def configured(self) -> bool:
        """Whether a model credential was provided."""
        return self.client is not None

    async def generate(self, prompt: str) -> str:
        """
        Send a prompt and return the generated text.

        Args:
            prompt: Full user message

        Returns:
            Concatenated text blocks of the reply

        Raises:
            AINotConfiguredError: If no API key is set
            GenerationError: On provider/network failure or an empty reply
        """
        if not self.configured:
            raise AINotConfiguredError()

        logger.info("generation_started", model=self.model, prompt_length=len(prompt))

        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=self.SYSTEM_PROMPT,
                messages=[{
                    "role": "user",
                    "content": prompt
                }]
            )
        except anthropic.APIError as e:
            logger.error("anthropic_api_error", error=str(e), error_type=type(e).__name__)
            raise GenerationError(f"Anthropic API error: {e}") from e
        except Exception as e:
            logger.error("generation_request_failed", error=str(e), error_type=type(e).__name__)
            raise GenerationError(f"Generation failed: {e}") from e

        text = "".join(
            block.text
            for block in response.content
            if getattr(block, "type", None) == "text"
        )

        if not text.strip():
            logger.warning("generation_empty_response", stop_reason=getattr(response, "stop_reason", None))
            raise GenerationError("Model returned an empty response")

        logger.info("generation_completed", response_length=len(text))
        return text


# Singleton instance
_text_generation_service: Optional[TextGenerationService] = None


def get_text_generation_service() -> TextGenerationService:
    """Get or create TextGenerationService instance."""
    global _text_generation_service
    if _text_generation_service is None:
        _text_generation_service = TextGenerationService()
    return _text_generation_service
