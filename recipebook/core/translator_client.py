import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import httpx
from google import genai
from google.genai import types

from ..settings import settings

logger = logging.getLogger("recipebook.translation")

AZURE_API_VERSION = "3.0"

LANGUAGE_CODES = {
    "zh": "zh-Hans",  # Simplified Chinese
    "cn": "zh-Hans",
    "chinese": "zh-Hans",
    "en": "en",
    "english": "en",
}

LANGUAGE_NAMES = {
    "zh-Hans": "Simplified Chinese",
    "en": "English",
}


def map_language_code(code: str) -> str:
    return LANGUAGE_CODES.get(code.lower(), code)


@dataclass(frozen=True)
class TranslationResult:
    """Outcome of a single text translation.

    ``text`` is None when nothing usable came back; ``error`` says why.
    """
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return bool(self.text and self.text.strip())

    @classmethod
    def failed(cls, error: str) -> "TranslationResult":
        return cls(text=None, error=error)


class TranslatorClient:
    """Best-effort text translation through the configured provider.

    Providers:
    - azure: Azure Translator Text REST API (needs key + region)
    - gemini: Google GenAI text model (needs API key)

    Anything else, or missing credentials, leaves the client unconfigured and
    every call returns a failed result without touching the network.
    """
    _instance = None

    def __init__(self, http_client: Optional[httpx.Client] = None):
        self.provider = settings.translation_provider.lower()
        self.last_error: Optional[str] = None
        self.last_error_at: Optional[datetime] = None
        self._http: Optional[httpx.Client] = None
        self._genai: Optional[genai.Client] = None

        if self.provider == "azure":
            if settings.azure_translator_key and settings.azure_translator_region:
                self._http = http_client or httpx.Client(
                    base_url=settings.azure_translator_endpoint.rstrip("/"),
                    timeout=settings.translation_timeout_seconds,
                    headers={
                        "Ocp-Apim-Subscription-Key": settings.azure_translator_key,
                        "Ocp-Apim-Subscription-Region": settings.azure_translator_region,
                        "Content-Type": "application/json",
                    },
                )
                logger.info("Azure Translator configured")
            else:
                logger.warning("Azure Translator not configured - missing key or region")
        elif self.provider == "gemini":
            if settings.gemini_api_key:
                self._genai = genai.Client(api_key=settings.gemini_api_key)
                logger.info("Gemini translation configured")
            else:
                logger.warning("Gemini translation not configured - missing API key")
        else:
            logger.info(f"Translation disabled (provider={self.provider})")

    @classmethod
    def get_instance(cls):
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def is_available(self) -> bool:
        return self._http is not None or self._genai is not None

    def translate(self, text: Optional[str], from_language: str, to_language: str) -> TranslationResult:
        if not self.is_available():
            return TranslationResult.failed("not_configured")
        if not text or not text.strip():
            return TranslationResult.failed("empty_text")

        source = map_language_code(from_language)
        target = map_language_code(to_language)

        try:
            if self._http is not None:
                translated = self._translate_azure(text, source, target)
            else:
                translated = self._translate_gemini(text, source, target)
        except Exception as e:
            self.last_error = f"{e.__class__.__name__}: {str(e)}"
            self.last_error_at = datetime.now(timezone.utc)
            logger.error(f"Translation failed from {source} to {target}: {e}")
            return TranslationResult.failed(self.last_error)

        if not translated or not translated.strip():
            logger.warning(f"Translation from {source} to {target} returned no text")
            return TranslationResult.failed("empty_response")
        return TranslationResult(text=translated)

    def _translate_azure(self, text: str, source: str, target: str) -> Optional[str]:
        response = self._http.post(
            "/translate",
            params={"api-version": AZURE_API_VERSION, "from": source, "to": target},
            json=[{"Text": text}],
        )
        response.raise_for_status()
        body = response.json()
        # [{"translations": [{"text": "...", "to": "zh-Hans"}]}]
        if isinstance(body, list) and body:
            translations = body[0].get("translations") or []
            if translations:
                return translations[0].get("text")
        return None

    def _translate_gemini(self, text: str, source: str, target: str) -> Optional[str]:
        source_name = LANGUAGE_NAMES.get(source, source)
        target_name = LANGUAGE_NAMES.get(target, target)
        response = self._genai.models.generate_content(
            model=settings.gemini_text_model,
            contents=text,
            config=types.GenerateContentConfig(
                response_mime_type="text/plain",
                system_instruction=(
                    f"Translate the user's recipe text from {source_name} to {target_name}. "
                    "Keep line breaks, numbering and quantities. Reply with the translation only."
                ),
            ),
        )
        return response.text


def get_translator() -> TranslatorClient:
    return TranslatorClient.get_instance()
