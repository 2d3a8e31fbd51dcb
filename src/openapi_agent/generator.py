"""LLM 기반 OpenAPI 스펙 생성: 컨텍스트 → 1회 요청 → YAML 파일."""
from __future__ import annotations
import logging
import re
from pathlib import Path
from typing import Sequence

from openapi_agent.context import assemble_context
from openapi_agent.errors import GenerationError, PreconditionError
from openapi_agent.llm.openai_client import classify_error, complete
from openapi_agent.models import ChatMessage, GenerationResult, SessionParameters, SourceFile

log = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an expert at generating OpenAPI 3.0 specifications.
Analyze the provided backend code and generate a complete, valid OpenAPI 3.0.3 YAML spec.
Include: all endpoints, HTTP methods, path/query parameters, request bodies, response schemas with properties.
Use descriptive summaries. Infer types from the code. Return ONLY valid YAML, no markdown or explanation.
"""

USER_PROMPT_TEMPLATE = "Generate an OpenAPI spec for this backend code. Base URL: {base_url}\n\n{context}"

_FENCE_OPEN_RE = re.compile(r"^```[\w+-]*[ \t]*\n?", re.IGNORECASE)
_FENCE_CLOSE_RE = re.compile(r"\n?```$")


def strip_code_fence(text: str) -> str:
    text = _FENCE_OPEN_RE.sub("", text.strip())
    text = _FENCE_CLOSE_RE.sub("", text)
    return text.strip()


def build_messages(context: str, base_url: str) -> list[ChatMessage]:
    return [
        ChatMessage(role="system", content=SYSTEM_PROMPT),
        ChatMessage(role="user", content=USER_PROMPT_TEMPLATE.format(base_url=base_url, context=context)),
    ]


def write_document(document: str, out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(document, encoding="utf-8")
    return out_path


def generate_spec(
    client,
    files: Sequence[SourceFile],
    params: SessionParameters,
    context: str | None = None,
) -> GenerationResult:
    """
    스펙을 한 번 생성해 params.output_path 에 덮어쓴다.
    - 재시도 없음. 원격 호출 실패는 분류된 GenerationError 로 올린다.
    """
    if not files:
        raise PreconditionError("No source files found")

    if context is None:
        context = assemble_context(files)
    messages = build_messages(context, params.base_url)

    try:
        completion = complete(client, params.model, messages)
    except Exception as e:
        log.debug("generation failed", exc_info=True)
        raise GenerationError(str(e), classify_error(e)) from e

    document = strip_code_fence(completion.text)
    write_document(document, params.output_path)
    log.debug("wrote %d chars to %s", len(document), params.output_path)
    return GenerationResult(output_path=params.output_path, document=document, usage=completion.usage)
