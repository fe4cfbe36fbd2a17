"""End-to-end tests for the relay endpoints with a mocked AI gateway."""
from __future__ import annotations

import json

import httpx
from fastapi.testclient import TestClient

from ..api.deps import get_gateway_client
from ..core.config import AppSettings
from ..main import app
from ..services.gateway import AIGatewayClient

CORS_HEADERS = {
    "access-control-allow-origin": "*",
    "access-control-allow-headers": "authorization, x-client-info, apikey, content-type",
}

VERDICT = {
    "toxicityScore": 55,
    "issues": [
        {
            "harmType": "abuse",
            "severity": "medium",
            "content": "nobody likes you",
            "reason": "Bullying language",
            "explanation": "Saying this can make someone feel left out.",
        }
    ],
    "overallSafe": False,
    "friendlyMessage": "Let's try a kinder way to say this.",
}


def _client_with_upstream(handler) -> tuple[TestClient, list[httpx.Request]]:
    calls: list[httpx.Request] = []

    async def recording_handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return await handler(request)

    def override() -> AIGatewayClient:
        transport = httpx.MockTransport(recording_handler)
        return AIGatewayClient(
            AppSettings(ai_gateway_api_key="test-key"),
            client=httpx.AsyncClient(transport=transport),
        )

    app.dependency_overrides[get_gateway_client] = override
    return TestClient(app), calls


def _completion(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


def _assert_cors(response: httpx.Response) -> None:
    for header, value in CORS_HEADERS.items():
        assert response.headers[header] == value


def teardown_function() -> None:
    app.dependency_overrides.clear()


def test_analyze_text_returns_verdict() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return _completion(json.dumps(VERDICT))

    client, calls = _client_with_upstream(handler)
    response = client.post("/analyze-text", json={"text": "nobody likes you"})

    assert response.status_code == 200
    assert response.json() == VERDICT
    _assert_cors(response)

    sent = json.loads(calls[0].content)
    assert sent["messages"][0]["role"] == "system"
    assert "child-safety content analyzer" in sent["messages"][0]["content"]
    assert sent["messages"][1] == {
        "role": "user",
        "content": "Analyze this text for child safety:\n\nnobody likes you",
    }


def test_analyze_image_attaches_image_part() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return _completion("```json\n" + json.dumps(VERDICT) + "\n```")

    client, calls = _client_with_upstream(handler)
    data_url = "data:image/png;base64,iVBORw0KGgo="
    response = client.post("/analyze-image", json={"imageBase64": data_url})

    assert response.status_code == 200
    assert response.json()["toxicityScore"] == 55
    user_message = json.loads(calls[0].content)["messages"][1]
    assert user_message["content"] == [
        {"type": "text", "text": "Analyze this image for child safety:"},
        {"type": "image_url", "image_url": {"url": data_url}},
    ]
    assert "child-safety image analyzer" in json.loads(calls[0].content)["messages"][0]["content"]


def test_empty_body_is_rejected_without_upstream_call() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover
        return _completion("{}")

    client, calls = _client_with_upstream(handler)

    for path, body in (
        ("/analyze-text", {}),
        ("/analyze-text", {"text": ""}),
        ("/analyze-text", {"text": 42}),
        ("/analyze-image", {}),
        ("/analyze-image", {"imageUrl": 7}),
        ("/analyze-image", {"imageUrl": "https://a/b.png", "imageBase64": "data:x"}),
    ):
        response = client.post(path, json=body)
        assert response.status_code == 400, (path, body)
        assert "error" in response.json()
        _assert_cors(response)

    malformed = client.post(
        "/analyze-text", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert malformed.status_code == 400
    assert calls == []


def test_rate_limit_and_quota_pass_through() -> None:
    statuses = iter([429, 402, 500])

    async def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(next(statuses), text="upstream says no")

    client, _ = _client_with_upstream(handler)

    limited = client.post("/analyze-text", json={"text": "hi"})
    assert limited.status_code == 429
    assert "Rate limit" in limited.json()["error"]
    _assert_cors(limited)

    quota = client.post("/analyze-text", json={"text": "hi"})
    assert quota.status_code == 402
    assert "usage limit" in quota.json()["error"]

    generic = client.post("/analyze-text", json={"text": "hi"})
    assert generic.status_code == 500
    assert generic.json() == {"error": "AI Gateway error: 500"}


def test_unparseable_reply_fails_open() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return _completion("not json at all")

    client, _ = _client_with_upstream(handler)
    response = client.post("/analyze-text", json={"text": "hello"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["toxicityScore"] == 0
    assert payload["issues"] == []
    assert payload["overallSafe"] is True


def test_unexpected_exception_becomes_500() -> None:
    class ExplodingGateway(AIGatewayClient):
        async def complete(self, messages):  # type: ignore[override]
            raise RuntimeError("boom")

    app.dependency_overrides[get_gateway_client] = lambda: ExplodingGateway(
        AppSettings(ai_gateway_api_key="test-key")
    )
    response = TestClient(app).post("/analyze-text", json={"text": "hello"})

    assert response.status_code == 500
    assert response.json() == {"error": "boom"}
    _assert_cors(response)


def test_preflight_returns_empty_200() -> None:
    client = TestClient(app)

    for path in ("/analyze-text", "/analyze-image"):
        response = client.options(path)
        assert response.status_code == 200
        assert response.content == b""
        _assert_cors(response)


def test_deeply_nested_reply_returns_fallback_verdict() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        return _completion("[" * 100_000 + "]" * 100_000)

    client, _ = _client_with_upstream(handler)
    response = client.post("/analyze-text", json={"text": "hello"})

    assert response.status_code == 200
    assert response.json()["overallSafe"] is True
    assert response.json()["issues"] == []
