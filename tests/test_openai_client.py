"""완료 요청 래퍼와 오류 분류 테스트."""
from types import SimpleNamespace

import pytest

from openapi_agent.errors import ErrorCategory
from openapi_agent.llm.openai_client import build_openai_client, classify_error, complete, describe_error
from openapi_agent.models import ChatMessage
from tests.conftest import FakeClient


@pytest.mark.parametrize(
    "message, category",
    [
        ("Error code: 401 - Incorrect API key provided", ErrorCategory.AUTH),
        ("invalid_api_key", ErrorCategory.AUTH),
        ("Error code: 429 - too many requests", ErrorCategory.RATE_LIMIT),
        ("Rate limit reached for gpt-4o-mini", ErrorCategory.RATE_LIMIT),
        ("Connection error.", ErrorCategory.GENERIC),
    ],
)
def test_classify_error(message, category):
    assert classify_error(RuntimeError(message)) is category


def test_describe_error():
    assert "API key" in describe_error(ErrorCategory.AUTH, "401")
    assert "Rate limited" in describe_error(ErrorCategory.RATE_LIMIT, "429")
    assert describe_error(ErrorCategory.GENERIC, "boom") == "boom"
    assert describe_error(ErrorCategory.GENERIC, "") == "Unknown error"


def test_complete_maps_response():
    client = FakeClient("hello")

    c = complete(client, "m", [ChatMessage(role="user", content="hi")], max_tokens=10, temperature=0)

    assert c.text == "hello"
    assert c.usage.total_tokens == 100
    assert client.calls[0]["messages"] == [{"role": "user", "content": "hi"}]


def test_complete_tolerates_missing_usage_and_content():
    resp = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=None))], usage=None)
    client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=lambda **kw: resp)))

    c = complete(client, "m", [])

    assert c.text == ""
    assert c.usage.total_tokens == 0


def test_build_client_disables_retries():
    client = build_openai_client("sk-test", base_url="http://localhost:8080/v1/")

    assert client.max_retries == 0
    assert str(client.base_url).rstrip("/") == "http://localhost:8080/v1"
