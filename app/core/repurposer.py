"""Language model client that performs content transformations."""

import json
from typing import Any, Dict, List, Optional

import openai
import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.config import settings
from app.core.exceptions import MissingAPIKeyError, ProcessingError
from app.core.prompts import build_system_prompt
from app.schemas.job import ProcessingOptions

logger = structlog.get_logger()


API_KEY_NOT_CONFIGURED = (
    "OpenAI API key is not configured. Please add it in the project settings."
)
API_KEY_INVALID = (
    "OpenAI API key is missing or invalid. Please check your project settings."
)
PROCESSING_FAILED = "Failed to process content. Please try again later."

# Errors worth another attempt; everything else fails immediately
TRANSIENT_ERRORS = (openai.APIConnectionError, openai.RateLimitError)


class ContentRepurposer:
    """
    Sends a source text and an assembled system prompt to a chat model.

    One transformation is one completion call: the system message carries
    the instructions built from ``ProcessingOptions`` and the user message
    carries the source content verbatim.
    """

    def __init__(
        self,
        api_key: str = None,
        model: str = None,
        temperature: float = None,
        max_retries: int = None
    ):
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.model = model or settings.openai_model
        self.temperature = temperature if temperature is not None else settings.openai_temperature
        self.max_retries = max_retries or settings.openai_max_retries
        self._client = None

    @property
    def client(self) -> openai.AsyncOpenAI:
        """Lazy initialize OpenAI client."""
        if self._client is None:
            # Retries are driven by tenacity below
            self._client = openai.AsyncOpenAI(api_key=self.api_key, max_retries=0)
        return self._client

    def _ensure_api_key(self):
        if not self.api_key:
            logger.warning("OpenAI API key is missing")
            raise MissingAPIKeyError(API_KEY_NOT_CONFIGURED)

    async def _complete(self, messages: List[Dict[str, str]]) -> str:
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(TRANSIENT_ERRORS),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(min=1, max=10),
            reraise=True
        ):
            with attempt:
                response = await self.client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    temperature=self.temperature
                )
        return response.choices[0].message.content or ""

    async def process_text(self, content: str, options: ProcessingOptions) -> str:
        """
        Transform ``content`` according to ``options``.

        Raises:
            MissingAPIKeyError: no key configured, or the key was rejected
            ProcessingError: any other model failure
        """
        self._ensure_api_key()

        system_prompt = build_system_prompt(options)
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": content},
        ]

        try:
            result = await self._complete(messages)
        except openai.AuthenticationError as e:
            logger.error("OpenAI rejected the API key", error=str(e))
            raise MissingAPIKeyError(API_KEY_INVALID) from e
        except openai.OpenAIError as e:
            logger.error(
                "Error processing content with OpenAI",
                error=str(e),
                target_format=options.target_format
            )
            raise ProcessingError(PROCESSING_FAILED) from e

        logger.info(
            "Content transformed",
            model=self.model,
            target_format=options.target_format,
            input_chars=len(content),
            output_chars=len(result)
        )
        return result


def parse_social_posts(text: str) -> Optional[List[Dict[str, Any]]]:
    """
    Decode a social-posts result into a list of post objects.

    Returns None when the model did not answer with a JSON array.
    """
    cleaned = (text or "").strip()
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`").strip()
        if cleaned.lower().startswith("json"):
            cleaned = cleaned[4:].strip()

    try:
        posts = json.loads(cleaned)
    except json.JSONDecodeError:
        return None

    if not isinstance(posts, list):
        return None
    return [post for post in posts if isinstance(post, dict)]
