"""
crowgent-openapi CLI.

  crowgent-openapi ./src
  crowgent-openapi ./src --yes -o openapi.yaml --base-url https://api.example.com
  crowgent-openapi ./routes --chat
"""
from __future__ import annotations
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from openapi_agent.config import Settings, load_settings
from openapi_agent.context import assemble_context
from openapi_agent.errors import ConfigurationError, GenerationError, PreconditionError
from openapi_agent.generator import generate_spec
from openapi_agent.llm.openai_client import build_openai_client, describe_error
from openapi_agent.qa import QASession, build_qa_system_prompt
from openapi_agent.scanner import collect_target
from openapi_agent.session import Aborted, RichPrompter, SessionController

console = Console()
log = logging.getLogger("openapi_agent")

FOLLOW_UP_MESSAGE = "Ask follow-up questions about your API?"
API_KEY_HINT = "Set OPENAI_API_KEY environment variable or use --api-key flag"

app = typer.Typer(
    name="crowgent-openapi",
    add_completion=False,
    help="백엔드 코드를 AI로 분석해 OpenAPI 스펙(YAML) 생성",
)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


def _fail(message: str, hint: str | None = None) -> None:
    console.print(f"[bold red]✖[/bold red] {message}")
    if hint:
        console.print(f"[dim]{hint}[/dim]")
    console.print("[red]Failed[/red]")
    raise typer.Exit(code=1)


def resolve_api_key(flag_value: str | None, settings: Settings) -> str:
    """--api-key 가 우선, 없으면 설정(OPENAI_API_KEY). 둘 다 없으면 ConfigurationError."""
    key = flag_value or settings.openai_api_key
    if not key:
        raise ConfigurationError("Missing OpenAI API key")
    return key


def _cancelled() -> None:
    console.print("[yellow]Cancelled[/yellow]")
    raise typer.Exit(code=0)


@app.command()
def main(
    target: Optional[str] = typer.Argument(None, help="스캔할 백엔드 디렉터리 또는 파일"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="출력 파일 (기본 openapi.yaml)"),
    api_key: Optional[str] = typer.Option(None, "--api-key", "-k", help="OpenAI API 키 (또는 OPENAI_API_KEY)"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="사용할 모델 (기본 gpt-4o-mini)"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="API base URL (기본 http://localhost:3000)"),
    yes: bool = typer.Option(False, "--yes", help="프롬프트 없이 기본값 사용"),
    chat: bool = typer.Option(False, "--chat", help="생성 후 바로 질의응답 시작"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="디버그 로그 출력"),
):
    """소스 스캔 → LLM 1회 호출 → OpenAPI YAML 저장 (선택: 후속 질의응답)."""
    setup_logging(verbose)
    console.print()
    console.rule("[bold cyan]🐦 Crowgent OpenAPI Generator[/bold cyan]")

    settings = load_settings()
    try:
        key = resolve_api_key(api_key, settings)
    except ConfigurationError as e:
        _fail(str(e), hint=API_KEY_HINT)

    prompter = RichPrompter(console)
    controller = SessionController(prompter, yes=yes, console=console)
    try:
        outcome = controller.resolve(target, output, base_url, model or settings.openai_model)
    except PreconditionError as e:
        _fail(str(e))
    if isinstance(outcome, Aborted):
        log.debug("aborted at %s", outcome.state.value)
        _cancelled()
    params = outcome.params

    with console.status("Scanning files..."):
        files = collect_target(params.target_path)
    console.print(f"Found [green]{len(files)}[/green] source files")
    if not files:
        _fail("No source files found")

    client = build_openai_client(key, settings.openai_base_url)
    context = assemble_context(files)
    try:
        with console.status("Generating OpenAPI spec with AI..."):
            result = generate_spec(client, files, params, context=context)
    except GenerationError as e:
        console.print("[red]Generation failed[/red]")
        _fail(describe_error(e.category, str(e)))

    console.print(f"[bold green]Saved to[/bold green] [cyan]{result.output_path}[/cyan]")
    console.print(f"{result.usage.total_tokens} tokens used (~${result.usage.estimated_cost:.4f})")

    if chat or (not yes and prompter.confirm(FOLLOW_UP_MESSAGE, default=False)):
        qa = QASession(
            client,
            params.model,
            build_qa_system_prompt(result.document, context),
            prompter,
            console=console,
        )
        qa.run()

    console.print("[bold green]✨ Done![/bold green]")


if __name__ == "__main__":
    app()
