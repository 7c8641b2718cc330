import httpx
import pytest

from app.services import llm_provider
from app.services.llm_provider import LLMProviderError, OpenAICompatibleLLM


@pytest.fixture
def client() -> OpenAICompatibleLLM:
    return OpenAICompatibleLLM(base_url="https://example.com/", api_key="secret", model="x")


def test_parse_analysis_from_json_content(client: OpenAICompatibleLLM) -> None:
    content = (
        '{"healthScore": 82, "analysis": "Healthy acidification.", '
        '"recommendations": ["Taste in two days", " "], "alerts": []}'
    )

    result = client._parse_analysis(content)  # noqa: SLF001

    assert result.health_score == 82
    assert result.analysis == "Healthy acidification."
    assert result.recommendations == ["Taste in two days"]
    assert result.alerts == []


def test_parse_analysis_from_markdown_fence(client: OpenAICompatibleLLM) -> None:
    content = """
Here is my assessment:
```json
{
  "healthScore": 70.4,
  "analysis": "Slow start.",
  "recommendations": ["Move somewhere warmer"]
}
```
"""

    result = client._parse_analysis(content)  # noqa: SLF001

    assert result.health_score == 70
    assert result.alerts == []


def test_parse_analysis_raises_for_invalid_json(client: OpenAICompatibleLLM) -> None:
    with pytest.raises(LLMProviderError):
        client._parse_analysis("not json")  # noqa: SLF001


@pytest.mark.parametrize(
    "content",
    [
        '{"analysis": "No score"}',
        '{"healthScore": "high", "analysis": "Text score"}',
        '{"healthScore": 140, "analysis": "Out of range"}',
        '{"healthScore": 80, "analysis": ""}',
        '{"healthScore": 80, "analysis": "ok", "recommendations": "one"}',
    ],
)
def test_parse_analysis_rejects_bad_shapes(client: OpenAICompatibleLLM, content: str) -> None:
    with pytest.raises(LLMProviderError):
        client._parse_analysis(content)  # noqa: SLF001


def test_analyze_posts_chat_completion(client: OpenAICompatibleLLM, monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}

    def fake_post(url: str, **kwargs: object) -> httpx.Response:
        captured["url"] = url
        captured.update(kwargs)
        return httpx.Response(
            200,
            json={"choices": [{"message": {"content": '{"healthScore": 90, "analysis": "Great."}'}}]},
            request=httpx.Request("POST", url),
        )

    monkeypatch.setattr(llm_provider.httpx, "post", fake_post)

    result = client.analyze(system_prompt="system", user_prompt="user")

    assert result.health_score == 90
    assert captured["url"] == "https://example.com/v1/chat/completions"
    assert captured["headers"] == {"Content-Type": "application/json", "Authorization": "Bearer secret"}


def test_analyze_wraps_http_errors(client: OpenAICompatibleLLM, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_post(url: str, **_: object) -> httpx.Response:
        return httpx.Response(503, json={"error": "overloaded"}, request=httpx.Request("POST", url))

    monkeypatch.setattr(llm_provider.httpx, "post", fake_post)

    with pytest.raises(LLMProviderError):
        client.analyze(system_prompt="system", user_prompt="user")


def test_analyze_rejects_missing_choices(client: OpenAICompatibleLLM, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_post(url: str, **_: object) -> httpx.Response:
        return httpx.Response(200, json={"choices": []}, request=httpx.Request("POST", url))

    monkeypatch.setattr(llm_provider.httpx, "post", fake_post)

    with pytest.raises(LLMProviderError):
        client.analyze(system_prompt="system", user_prompt="user")
