"""Best-effort AI text for work logs (summary on check-out, place names).

Nothing here may block a check-in or check-out: every failure is logged and
turned into a fallback value.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from ..core.constants import DEFAULT_GEMINI_MODEL

logger = logging.getLogger(__name__)

MISSING_KEY_SUMMARY = "AI Summary not available (Missing Key)."
EMPTY_SUMMARY = "Work completed successfully."
FAILED_SUMMARY = "Work completed."


class GeminiEnrichmentService:
    def __init__(
        self,
        *,
        api_key: Optional[str] = None,
        model: str = DEFAULT_GEMINI_MODEL,
        client: Any = None,
    ):
        self._model = model
        self._client = client
        if self._client is None and api_key:
            self._client = genai.Client(api_key=api_key)

    @property
    def enabled(self) -> bool:
        return self._client is not None

    def generate_work_summary(self, job_name: str, duration_hours: str) -> str:
        if not self.enabled:
            logger.warning("Gemini API key missing; skipping AI summary")
            return MISSING_KEY_SUMMARY

        prompt = (
            "Generate a very short, professional one-sentence summary for a timesheet log.\n"
            f'Job: "{job_name}".\n'
            f"Duration: {duration_hours}.\n"
            'Format: "Completed [Task] in [Duration]. [Encouraging remark]"'
        )
        try:
            response = self._client.models.generate_content(model=self._model, contents=prompt)
        except Exception:
            logger.warning("Gemini summary request failed", exc_info=True)
            return FAILED_SUMMARY

        text = (getattr(response, "text", None) or "").strip()
        return text or EMPTY_SUMMARY

    def get_location_name(self, lat: float, lng: float) -> Optional[str]:
        if not self.enabled:
            return None

        try:
            config = types.GenerateContentConfig(
                tools=[types.Tool(google_maps=types.GoogleMaps())],
                tool_config=types.ToolConfig(
                    retrieval_config=types.RetrievalConfig(
                        lat_lng=types.LatLng(latitude=lat, longitude=lng),
                    )
                ),
            )
            response = self._client.models.generate_content(
                model=self._model,
                contents=(
                    f"What is the specific address or place name at latitude {lat} and longitude {lng}? "
                    "Return only the address/place name concisely."
                ),
                config=config,
            )
        except Exception:
            logger.warning("Gemini place lookup failed for %s,%s", lat, lng, exc_info=True)
            return None

        text = (getattr(response, "text", None) or "").strip()
        return text or None


def format_hours(seconds: float) -> str:
    return f"{seconds / 3600:.2f} hours"
