"""실행 단위 데이터 모델."""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

# 1K 토큰당 USD (gpt-4o-mini 입력 단가 기준 추정치)
COST_PER_1K_TOKENS = 0.00015


@dataclass(frozen=True)
class SourceFile:
    path: str       # 스캔 루트 기준 상대 경로 (POSIX)
    content: str


class SessionParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    consent_given: bool
    target_path: Path
    output_path: Path
    base_url: str
    model: str


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str

    def to_api(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


class Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    @property
    def estimated_cost(self) -> float:
        return self.total_tokens * COST_PER_1K_TOKENS / 1000


class Completion(BaseModel):
    text: str = ""
    usage: Usage = Field(default_factory=Usage)


class GenerationResult(BaseModel):
    output_path: Path
    document: str
    usage: Usage = Field(default_factory=Usage)
