"""프롬프트 컨텍스트 조립 테스트."""
from openapi_agent.context import assemble_context
from openapi_agent.models import SourceFile

A = SourceFile(path="a.py", content="print('a')")
B = SourceFile(path="pkg/b.ts", content="export const b = 1;")


def test_block_format():
    assert assemble_context([A]) == "### a.py\n```\nprint('a')\n```"


def test_blocks_joined_by_blank_line():
    assert assemble_context([A, B]) == (
        "### a.py\n```\nprint('a')\n```\n\n### pkg/b.ts\n```\nexport const b = 1;\n```"
    )


def test_deterministic_and_order_sensitive():
    assert assemble_context([A, B]) == assemble_context([A, B])
    assert assemble_context([A, B]) != assemble_context([B, A])


def test_fence_inside_content_is_not_escaped():
    f = SourceFile(path="doc.py", content='"""\n```\ncode\n```\n"""')
    assert "```\ncode\n```" in assemble_context([f])


def test_empty_list():
    assert assemble_context([]) == ""
