import asyncio
import json
import logging
import math

from google import genai
from google.genai import types as genai_types

from src.config import settings
from src.models.review import ModerationOutcome, ModerationResult

LOGGER = logging.getLogger("review_moderation")

_DEFAULTS = ModerationResult()


class ReviewModerationClient:
    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
        client: genai.Client | None = None,
    ) -> None:
        self.model_name = model_name or settings.gemini_model
        resolved_key = settings.gemini_api_key if api_key is None else api_key
        if client is not None:
            self.client = client
        else:
            self.client = genai.Client(api_key=resolved_key) if resolved_key else None

    async def classify(self, content: str) -> ModerationOutcome:
        if not self.client:
            return self._defaulted("Gemini API key is not configured.")

        prompt = self._build_prompt(content)
        try:
            response_text = await asyncio.to_thread(self._generate_content, prompt)
        except Exception as exc:
            return self._defaulted(f"Moderation request failed: {exc}")

        try:
            result = self._parse_result(response_text)
        except Exception as exc:
            return self._defaulted(f"Moderation response could not be parsed: {exc!r}")

        return ModerationOutcome(result=result)

    def _build_prompt(self, content: str) -> str:
        return (
            "Analyze this review for inappropriate or harmful content.\n"
            "Respond ONLY in this exact JSON structure:\n"
            "{\n"
            '  "safety_score": number, // 0 safe, 1 very unsafe\n'
            '  "sentiment_score": number, // -1 to +1 (negative to positive)\n'
            '  "action": "allow" | "flag" | "block"\n'
            "}\n"
            f'Review: "{content}"'
        )

    def _generate_content(self, prompt: str) -> str:
        response = self.client.models.generate_content(
            model=self.model_name,
            contents=[
                genai_types.Content(role="user", parts=[genai_types.Part(text=prompt)]),
            ],
        )
        return self._extract_text(response) or "{}"

    def _extract_text(self, response: object) -> str:
        candidates = getattr(response, "candidates", None) or []
        if not candidates:
            return ""
        content = getattr(candidates[0], "content", None)
        parts = getattr(content, "parts", None) or []
        if not parts:
            return ""
        return str(getattr(parts[0], "text", None) or "")

    def _parse_result(self, response_text: str) -> ModerationResult:
        normalized = response_text.strip()
        if normalized.startswith("```"):
            normalized = normalized.strip("`").strip()
            if normalized.lower().startswith("json"):
                normalized = normalized[4:].strip()

        data = json.loads(normalized)
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")

        action = data.get("action")
        return ModerationResult(
            safety_score=self._coerce_score(data.get("safety_score"), _DEFAULTS.safety_score),
            sentiment_score=self._coerce_score(data.get("sentiment_score"), _DEFAULTS.sentiment_score),
            action=_DEFAULTS.action if action is None else str(action),
        )

    def _coerce_score(self, value: object, default: float) -> float:
        if value is None:
            return default
        if isinstance(value, (bool, int, float)):
            try:
                return float(value)
            except OverflowError:
                return math.copysign(math.inf, value)
        # A present but unreadable score is NaN so neither threshold passes.
        try:
            return float(str(value).strip())
        except ValueError:
            LOGGER.warning("Non-numeric moderation score %r treated as NaN", value)
            return math.nan

    def _defaulted(self, reason: str) -> ModerationOutcome:
        LOGGER.warning("Moderation defaults applied: %s", reason)
        return ModerationOutcome(result=ModerationResult(), defaulted=True, reason=reason)
