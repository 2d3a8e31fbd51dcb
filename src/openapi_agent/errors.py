"""CLI 계층에서 종료 코드로 변환되는 오류들."""
from __future__ import annotations
from enum import Enum


class ErrorCategory(str, Enum):
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    GENERIC = "generic"


class OpenApiAgentError(Exception):
    pass


class ConfigurationError(OpenApiAgentError):
    """API 키 등 실행 설정 누락."""


class PreconditionError(OpenApiAgentError):
    """네트워크 호출 전 검출되는 치명적 오류 (대상 경로 없음, 스캔 결과 없음)."""


class GenerationError(OpenApiAgentError):
    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.GENERIC):
        super().__init__(message)
        self.category = category
