import json

import httpx
import pytest

from app.core.config import Settings
from app.core.exceptions import UpstreamUnavailableException
from app.services.ai_proxy import (
    FALLBACK_RESOURCES,
    GeminiClient,
    summarize_transactions,
)


def gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def make_client(handler, api_key="test-key") -> GeminiClient:
    settings = Settings(_env_file=None, GEMINI_API_KEY=api_key)
    return GeminiClient(settings, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_generate_roast_request_shape():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=gemini_reply("You spent how much on takeaway? 🍕"))

    client = make_client(handler)
    roast = await client.generate_roast(12.5, 4.2, [{"merchant": "Deliveroo", "amount": 45}])

    assert roast == "You spent how much on takeaway? 🍕"
    assert "gemini-2.5-flash:generateContent" in seen["url"]
    assert "key=test-key" in seen["url"]
    prompt = seen["body"]["contents"][0]["parts"][0]["text"]
    assert "£12.50" in prompt
    assert "Deliveroo (£45)" in prompt
    assert "sarcastic" in seen["body"]["systemInstruction"]["parts"][0]["text"]


@pytest.mark.asyncio
@pytest.mark.parametrize("upstream,expected", [(429, 429), (403, 402), (500, 500), (404, 500)])
async def test_roast_upstream_errors(upstream, expected):
    client = make_client(lambda request: httpx.Response(upstream, json={"error": "nope"}))
    with pytest.raises(UpstreamUnavailableException) as exc:
        await client.generate_roast(0, 0, [])
    assert exc.value.status_code == expected


@pytest.mark.asyncio
async def test_roast_without_api_key():
    client = make_client(lambda request: httpx.Response(200, json=gemini_reply("unused")), api_key=None)
    with pytest.raises(UpstreamUnavailableException) as exc:
        await client.generate_roast(0, 0, [])
    assert exc.value.status_code == 500
    assert exc.value.detail == "GEMINI_API_KEY is not configured"


@pytest.mark.asyncio
async def test_roast_unexpected_payload():
    client = make_client(lambda request: httpx.Response(200, json={"candidates": []}))
    with pytest.raises(UpstreamUnavailableException):
        await client.generate_roast(0, 0, [])


@pytest.mark.asyncio
async def test_wellbeing_parses_model_json():
    analysis = {
        "summary": "Lots of late nights.",
        "concerns": ["Frequent late-night spending"],
        "resources": [{"title": "Nightline", "description": "Student listening service", "url": "https://nightline.ac.uk"}],
        "riskLevel": "moderate",
    }

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert body["generationConfig"] == {"responseMimeType": "application/json"}
        return httpx.Response(200, json=gemini_reply(json.dumps(analysis)))

    result = await make_client(handler).analyze_wellbeing([{"amount": 20, "date": "2025-01-01T23:30:00Z"}])
    assert result == analysis


@pytest.mark.asyncio
async def test_wellbeing_fills_missing_resources():
    reply = json.dumps({"summary": "Fine.", "concerns": [], "resources": [], "riskLevel": "low"})
    client = make_client(lambda request: httpx.Response(200, json=gemini_reply(reply)))
    result = await client.analyze_wellbeing([])
    assert result["summary"] == "Fine."
    assert result["resources"] == FALLBACK_RESOURCES


@pytest.mark.asyncio
@pytest.mark.parametrize("handler", [
    lambda request: httpx.Response(429),
    lambda request: httpx.Response(200, json=gemini_reply("not json at all")),
    lambda request: httpx.Response(200, json=gemini_reply('{"riskLevel": "extreme"}')),
    lambda request: httpx.Response(200, json=gemini_reply('{"summary": "ok", "resources": 5}')),
    lambda request: httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": None}]}}]}),
])
async def test_wellbeing_falls_back(handler):
    result = await make_client(handler).analyze_wellbeing([{"amount": 5}])
    assert result["riskLevel"] == "low"
    assert len(result["resources"]) == 3
    assert result["concerns"] == []


@pytest.mark.asyncio
async def test_wellbeing_without_api_key_falls_back():
    client = make_client(lambda request: httpx.Response(500), api_key=None)
    result = await client.analyze_wellbeing([])
    assert [r["title"] for r in result["resources"]] == [r["title"] for r in FALLBACK_RESOURCES]


def test_summarize_transactions_flags_late_night():
    transactions = [
        {"amount": 10, "date": "2025-01-01T23:15:00Z", "merchant": "Offie"},
        {"amount": 12, "date": "2025-01-02T03:00:00+00:00", "description": "Taxi"},
        {"amount": 8, "date": "2025-01-02T13:00:00Z", "type": "bills"},
        {"amount": 1},
    ] + [{"amount": i, "date": "2025-02-01T12:00:00Z"} for i in range(30)]

    summary = summarize_transactions(transactions)

    assert len(summary) == 20
    assert [s["isLateNight"] for s in summary[:4]] == [True, True, False, False]
    assert summary[1]["merchant"] == "Taxi"
    assert summary[2]["type"] == "bills"
    assert summary[3]["hour"] is None
    assert summary[3]["type"] == "unknown"
