"""Text-to-Speech service for audio podcast outputs."""

from typing import Optional
from dataclasses import dataclass
import hashlib

import openai
import structlog

from app.config import settings
from app.core.exceptions import MissingAPIKeyError, ProcessingError
from app.core.repurposer import API_KEY_INVALID, API_KEY_NOT_CONFIGURED
from app.core.storage import ObjectStorage, get_storage

logger = structlog.get_logger()


# The speech endpoint rejects longer inputs
MAX_TTS_INPUT_CHARS = 4096

AUDIO_GENERATION_FAILED = "Failed to generate audio. Please try again later."


@dataclass
class TTSResult:
    """Result of TTS generation."""
    audio_url: str = ""
    storage_path: str = ""
    text: str = ""
    truncated: bool = False


class TTSService:
    """
    Narrates generated scripts with the OpenAI speech endpoint.

    Audio is written to object storage under ``audio/`` with a key derived
    from the text and voice, so identical requests reuse the stored file.
    """

    def __init__(
        self,
        storage: Optional[ObjectStorage] = None,
        api_key: str = None,
        model: str = None,
        voice: str = None
    ):
        self.storage = storage or get_storage()
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.model = model or settings.openai_tts_model
        self.voice = voice or settings.openai_tts_voice
        self._client = None

    @property
    def client(self) -> openai.AsyncOpenAI:
        if self._client is None:
            self._client = openai.AsyncOpenAI(api_key=self.api_key)
        return self._client

    def _get_cache_key(self, text: str) -> str:
        content = f"{text}_{self.model}_{self.voice}"
        return hashlib.md5(content.encode()).hexdigest()

    async def generate_audio(self, text: str) -> TTSResult:
        """
        Synthesize ``text`` and return the stored audio's public URL.

        Raises:
            MissingAPIKeyError: no key configured, or the key was rejected
            ProcessingError: the speech call or upload failed
        """
        if not self.api_key:
            raise MissingAPIKeyError(API_KEY_NOT_CONFIGURED)

        truncated = len(text) > MAX_TTS_INPUT_CHARS
        speech_text = text[:MAX_TTS_INPUT_CHARS]
        key = f"audio/{self._get_cache_key(speech_text)}.mp3"

        try:
            response = await self.client.audio.speech.create(
                model=self.model,
                voice=self.voice,
                input=speech_text,
                response_format="mp3"
            )
        except openai.AuthenticationError as e:
            raise MissingAPIKeyError(API_KEY_INVALID) from e
        except openai.OpenAIError as e:
            logger.error("Error generating audio", error=str(e))
            raise ProcessingError(AUDIO_GENERATION_FAILED) from e

        stored = await self.storage.upload(response.content, key, content_type="audio/mpeg")

        logger.info(
            "Generated audio",
            key=key,
            chars=len(speech_text),
            truncated=truncated
        )
        return TTSResult(
            audio_url=stored.public_url,
            storage_path=stored.path,
            text=speech_text,
            truncated=truncated
        )
