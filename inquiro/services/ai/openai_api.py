"""
Helper for interacting with the OpenAI API.

Sends a chat completion that must come back as a JSON object and returns the
raw JSON text for the caller to validate.
"""
import logging

from openai import AsyncOpenAI, OpenAIError

from inquiro.config import get_settings

__all__ = ["OpenAIAPIError", "generate_json"]

logger = logging.getLogger(__name__)


class OpenAIAPIError(RuntimeError):
    """Raised when the OpenAI API cannot be contacted or returns an error."""


async def generate_json(
        system_prompt: str,
        user_prompt: str,
        model: str | None = None,
        timeout: int | None = None,
) -> str:
    """
    Run a JSON-mode chat completion.

    Args:
        system_prompt: Instructions for the system role
        user_prompt: The request itself
        model: OpenAI model to use (default: settings.ai_model)
        timeout: Request timeout in seconds (default: settings.ai_timeout_seconds)

    Returns:
        The completion content, expected to be a JSON object

    Raises:
        OpenAIAPIError: If API key is missing or API call fails
    """
    settings = get_settings()
    if not settings.openai_api_key:
        raise OpenAIAPIError("OPENAI_API_KEY environment variable must be set")

    model = model or settings.ai_model
    try:
        client = AsyncOpenAI(
            api_key=settings.openai_api_key,
            timeout=timeout or settings.ai_timeout_seconds,
        )
        response = await client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            response_format={"type": "json_object"},
        )

        if not response.choices:
            raise OpenAIAPIError("OpenAI API returned no choices")

        choice = response.choices[0]
        output_text = choice.message.content if choice.message else None
        if not output_text or not output_text.strip():
            logger.warning(f"OpenAI returned empty content. Model: {model}, "
                           f"Finish reason: {choice.finish_reason}")
            raise OpenAIAPIError("OpenAI API returned empty response content")

        return output_text.strip()

    except OpenAIError as exc:
        raise OpenAIAPIError(f"OpenAI API error: {exc}") from exc
