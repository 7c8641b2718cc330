import json
import re

import httpx
from pydantic import ValidationError

from app.schemas.ai import AnalysisPayload


class LLMProviderError(RuntimeError):
    """Raised when LLM provider calls fail or return invalid output."""


def _extract_json_block(text: str) -> str:
    fenced_match = re.search(r"```(?:json)?\s*(\{.*\})\s*```", text, flags=re.DOTALL)
    if fenced_match:
        return fenced_match.group(1)

    brace_match = re.search(r"\{.*\}", text, flags=re.DOTALL)
    if brace_match:
        return brace_match.group(0)

    return text


def _string_list(value: object, field: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise LLMProviderError(f"LLM response field '{field}' is not a list")
    return [str(item).strip() for item in value if str(item).strip()]


class OpenAICompatibleLLM:
    def __init__(self, base_url: str, api_key: str | None, model: str, timeout_seconds: int = 20):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.timeout_seconds = timeout_seconds

    def _request(self, system_prompt: str, user_prompt: str) -> str:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": 0.7,
            "max_tokens": 1000,
        }

        url = f"{self.base_url}/v1/chat/completions"

        try:
            response = httpx.post(url, headers=headers, json=payload, timeout=self.timeout_seconds)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as exc:
            raise LLMProviderError(f"LLM request failed: {exc}") from exc
        except ValueError as exc:
            raise LLMProviderError("LLM response body was not JSON") from exc

        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise LLMProviderError("LLM response missing choices/message content") from exc

        if not isinstance(content, str) or not content.strip():
            raise LLMProviderError("LLM response content is empty")

        return content

    def _parse_analysis(self, content: str) -> AnalysisPayload:
        json_text = _extract_json_block(content)
        try:
            parsed = json.loads(json_text)
        except json.JSONDecodeError as exc:
            raise LLMProviderError("LLM response was not valid JSON") from exc

        if not isinstance(parsed, dict):
            raise LLMProviderError("LLM response is not a JSON object")

        health_score = parsed.get("healthScore")
        if isinstance(health_score, bool) or not isinstance(health_score, (int, float)):
            raise LLMProviderError("LLM response missing numeric healthScore")

        try:
            return AnalysisPayload(
                health_score=round(health_score),
                analysis=str(parsed.get("analysis", "")).strip(),
                recommendations=_string_list(parsed.get("recommendations"), "recommendations"),
                alerts=_string_list(parsed.get("alerts"), "alerts"),
            )
        except (ValidationError, ValueError, OverflowError) as exc:
            raise LLMProviderError(f"LLM analysis payload is invalid: {exc}") from exc

    def analyze(self, *, system_prompt: str, user_prompt: str) -> AnalysisPayload:
        content = self._request(system_prompt=system_prompt, user_prompt=user_prompt)
        return self._parse_analysis(content)
