"""Pytest 공용 fixture: 네트워크/터미널 없이 쓰는 가짜 LLM 클라이언트와 프롬프터."""
from __future__ import annotations
from types import SimpleNamespace
from typing import Any

import pytest


class FakeCompletions:
    def __init__(self, replies: list[Any]):
        self.replies = list(replies)
        self.calls: list[dict[str, Any]] = []

    def create(self, **kwargs):
        # messages 는 호출 시점의 스냅샷으로 저장
        kwargs["messages"] = [dict(m) for m in kwargs["messages"]]
        self.calls.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=reply))],
            usage=SimpleNamespace(prompt_tokens=60, completion_tokens=40, total_tokens=100),
        )


class FakeClient:
    def __init__(self, *replies: Any):
        self.chat = SimpleNamespace(completions=FakeCompletions(list(replies)))

    @property
    def calls(self) -> list[dict[str, Any]]:
        return self.chat.completions.calls


class FakePrompter:
    """
    미리 정한 응답을 순서대로 돌려준다. None 은 취소(Ctrl-C)로 취급.
    준비된 응답보다 많이 물으면 AssertionError.
    """

    def __init__(self, confirms: list[bool | None] | None = None, texts: list[str | None] | None = None):
        self.confirms = list(confirms or [])
        self.texts = list(texts or [])
        self.calls: list[tuple[str, str]] = []

    def confirm(self, message: str, default: bool = True) -> bool | None:
        self.calls.append(("confirm", message))
        if not self.confirms:
            raise AssertionError(f"unexpected confirm: {message}")
        return self.confirms.pop(0)

    def text(self, message: str, default: str | None = None) -> str | None:
        self.calls.append(("text", message))
        if not self.texts:
            raise AssertionError(f"unexpected text prompt: {message}")
        return self.texts.pop(0)


@pytest.fixture
def api_dir(tmp_path):
    d = tmp_path / "api"
    d.mkdir()
    (d / "users.py").write_text("@app.get('/users')\ndef list_users(): ...", encoding="utf-8")
    return d
