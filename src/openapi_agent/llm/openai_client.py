from __future__ import annotations
import logging
from typing import Any, Sequence

from openapi_agent.errors import ErrorCategory
from openapi_agent.models import ChatMessage, Completion, Usage

log = logging.getLogger(__name__)

MAX_OUTPUT_TOKENS = 16000
TEMPERATURE = 0.2

_AUTH_MARKERS = ("401", "invalid api key", "incorrect api key", "invalid_api_key")
_RATE_LIMIT_MARKERS = ("429", "rate limit")


def build_openai_client(api_key: str, base_url: str | None = None):
    """
    OpenAI 클라이언트 생성.
    - base_url 이 있으면 OpenAI 호환 엔드포인트로 호출
    - SDK 자동 재시도는 끈다 (실패는 호출자에게 그대로 보고)
    """
    from openai import OpenAI

    kwargs: dict[str, Any] = {"api_key": api_key, "max_retries": 0}
    if base_url:
        kwargs["base_url"] = base_url.rstrip("/")
    return OpenAI(**kwargs)


def complete(
    client,
    model: str,
    messages: Sequence[ChatMessage],
    max_tokens: int = MAX_OUTPUT_TOKENS,
    temperature: float = TEMPERATURE,
) -> Completion:
    log.debug("chat.completions.create model=%s messages=%d", model, len(messages))
    resp = client.chat.completions.create(
        model=model,
        messages=[m.to_api() for m in messages],
        max_tokens=max_tokens,
        temperature=temperature,
    )
    text = resp.choices[0].message.content or ""
    u = getattr(resp, "usage", None)
    usage = Usage(
        prompt_tokens=getattr(u, "prompt_tokens", 0) or 0,
        completion_tokens=getattr(u, "completion_tokens", 0) or 0,
        total_tokens=getattr(u, "total_tokens", 0) or 0,
    )
    return Completion(text=text, usage=usage)


def classify_error(exc: BaseException) -> ErrorCategory:
    """오류 메시지 문자열만 보고 사용자 안내용 분류를 정한다."""
    msg = str(exc).lower()
    if any(m in msg for m in _AUTH_MARKERS):
        return ErrorCategory.AUTH
    if any(m in msg for m in _RATE_LIMIT_MARKERS):
        return ErrorCategory.RATE_LIMIT
    return ErrorCategory.GENERIC


def describe_error(category: ErrorCategory, message: str) -> str:
    if category is ErrorCategory.AUTH:
        return "Invalid API key. Check OPENAI_API_KEY or the --api-key flag."
    if category is ErrorCategory.RATE_LIMIT:
        return "Rate limited by the API. Wait a moment and try again."
    return message or "Unknown error"
