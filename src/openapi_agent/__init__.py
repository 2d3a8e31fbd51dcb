"""AI 기반 OpenAPI 스펙 생성기: 소스 스캔 → LLM → YAML."""
from openapi_agent.scanner import collect_files, collect_target
from openapi_agent.context import assemble_context
from openapi_agent.generator import generate_spec

__all__ = ["collect_files", "collect_target", "assemble_context", "generate_spec"]
__version__ = "1.0.0"
