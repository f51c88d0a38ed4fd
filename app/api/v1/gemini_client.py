import json
import logging

import requests
from fastapi import Depends

from app.api.v1.profiles import GenerationProfile
from app.core.config import Settings, get_settings
from app.core.errors import InvalidUpstreamResponse, UpstreamError

logger = logging.getLogger(__name__)

EMPTY_ANALYSIS = "Analiz yapılamadı"


def extract_candidate_text(data) -> str:
    """
    Pull candidates[0].content.parts[0].text out of a generateContent reply.
    Every level is checked; a missing one raises InvalidUpstreamResponse.
    """
    try:
        candidate = data["candidates"][0]
        part = candidate["content"]["parts"][0]
        text = part["text"]
    except (KeyError, IndexError, TypeError):
        logger.error("Unexpected Gemini response: %s", json.dumps(data, ensure_ascii=False))
        raise InvalidUpstreamResponse()

    if not isinstance(text, str):
        raise InvalidUpstreamResponse()
    return text or EMPTY_ANALYSIS


class GeminiClient:
    """Submits one prompt to Gemini's generateContent endpoint."""

    def __init__(self, api_key: str | None, model: str, base_url: str, timeout: float = 30.0):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def build_payload(self, prompt: str, profile: GenerationProfile) -> dict:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": profile.sampling.to_generation_config(),
            "safetySettings": [s.model_dump() for s in profile.safety_settings],
        }

    def generate(self, prompt: str, profile: GenerationProfile) -> str:
        if not self.api_key:
            raise UpstreamError("GEMINI_API_KEY not configured in environment or Settings")

        try:
            r = requests.post(
                self.url,
                params={"key": self.api_key},
                headers={"Content-Type": "application/json"},
                json=self.build_payload(prompt, profile),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamError(f"Gemini API request failed: {e}") from e

        if not r.ok:
            logger.error("Gemini API error: %s - %s", r.status_code, r.text)
            raise UpstreamError(f"Gemini API error: {r.status_code}", upstream_status=r.status_code)

        try:
            data = r.json()
        except ValueError:
            logger.error("Gemini returned a non-JSON body: %s", r.text)
            raise InvalidUpstreamResponse()

        return extract_candidate_text(data)


def get_generative_client(settings: Settings = Depends(get_settings)) -> GeminiClient:
    return GeminiClient(
        api_key=settings.gemini_api_key,
        model=settings.gemini_model,
        base_url=settings.gemini_base_url,
        timeout=settings.gemini_timeout_seconds,
    )
