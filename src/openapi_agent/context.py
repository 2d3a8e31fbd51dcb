"""수집된 파일들을 하나의 프롬프트 컨텍스트 블록으로 합친다."""
from __future__ import annotations
from typing import Iterable

from openapi_agent.models import SourceFile


def _file_block(f: SourceFile) -> str:
    # 파일 내용 안의 ``` 는 이스케이프하지 않는다
    return f"### {f.path}\n```\n{f.content}\n```"


def assemble_context(files: Iterable[SourceFile]) -> str:
    return "\n\n".join(_file_block(f) for f in files)
