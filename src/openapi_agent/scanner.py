"""백엔드 소스 파일 스캐너 — LLM 컨텍스트 입력용."""
from __future__ import annotations
import logging
import os
from pathlib import Path

from openapi_agent.models import SourceFile

log = logging.getLogger(__name__)

EXTENSIONS = {".ts", ".js", ".tsx", ".jsx", ".py", ".rb", ".go", ".java", ".kt", ".rs"}

IGNORE = {"node_modules", ".git", "dist", "build", "__pycache__", ".next", "coverage"}

# 이 크기 "미만"인 파일만 포함
MAX_FILE_BYTES = 100_000


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def _skip(name: str) -> bool:
    return name.startswith(".") or name in IGNORE


def collect_files(root: Path) -> list[SourceFile]:
    """
    root 아래를 깊이 우선으로 순회하며 소스 파일을 수집한다.
    - 숨김 항목, IGNORE 이름은 디렉터리/파일 모두 제외
    - 파일은 확장자가 EXTENSIONS 에 있고 크기가 MAX_FILE_BYTES 미만일 때만 포함
    - 매칭이 없으면 빈 리스트 (빈 결과 처리는 호출자 책임)
    """
    root = Path(root)
    files: list[SourceFile] = []

    def _walk(d: Path):
        try:
            with os.scandir(d) as it:
                entries = list(it)
        except OSError as e:
            log.debug("skip dir %s (%s)", d, e)
            return
        for entry in entries:
            if _skip(entry.name):
                continue
            p = Path(entry.path)
            # 디렉터리 심볼릭 링크는 따라가지 않는다 (순환 방지)
            if entry.is_dir(follow_symlinks=False):
                _walk(p)
                continue
            if p.suffix not in EXTENSIONS:
                continue
            try:
                size = entry.stat().st_size
                if size >= MAX_FILE_BYTES:
                    log.debug("skip %s (%d bytes)", p, size)
                    continue
                content = _read_text(p)
            except OSError as e:
                # 깨진 링크, 권한 없음 등
                log.debug("skip %s (%s)", p, e)
                continue
            files.append(SourceFile(path=p.relative_to(root).as_posix(), content=content))

    _walk(root)
    log.debug("collected %d files under %s", len(files), root)
    return files


def collect_target(target: Path) -> list[SourceFile]:
    """대상이 파일이면 필터 없이 그 파일 하나, 디렉터리면 collect_files."""
    target = Path(target)
    if target.is_file():
        return [SourceFile(path=target.name, content=_read_text(target))]
    return collect_files(target)
