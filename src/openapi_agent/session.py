"""
대화형 세션 상태 기계.

AwaitConsent → AwaitDirectory → AwaitOutputPath → AwaitBaseUrl → Ready
각 단계는 Supplied / Resolved / Skipped / Cancelled 중 하나를 돌려주고,
Cancelled 는 어느 단계에서든 즉시 Aborted 로 끝난다 (오류 아님, exit 0).
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Protocol, Union

from rich.console import Console
from rich.prompt import Confirm, Prompt

from openapi_agent.config import DEFAULT_BASE_URL, DEFAULT_OUTPUT, DEFAULT_TARGET
from openapi_agent.errors import PreconditionError
from openapi_agent.models import SessionParameters

log = logging.getLogger(__name__)

CONSENT_MESSAGE = "This will send your code to OpenAI to generate an API spec. Continue?"
DIRECTORY_MESSAGE = "Which directory contains your backend code?"
OUTPUT_MESSAGE = "Where should we save the OpenAPI spec?"
BASE_URL_MESSAGE = "What is your API base URL?"


class SessionState(str, Enum):
    AWAIT_CONSENT = "await_consent"
    AWAIT_DIRECTORY = "await_directory"
    AWAIT_OUTPUT_PATH = "await_output_path"
    AWAIT_BASE_URL = "await_base_url"
    READY = "ready"
    ABORTED = "aborted"


@dataclass(frozen=True)
class Supplied:
    value: Any


@dataclass(frozen=True)
class Resolved:
    value: Any


@dataclass(frozen=True)
class Skipped:
    value: Any


@dataclass(frozen=True)
class Cancelled:
    pass


StepResult = Union[Supplied, Resolved, Skipped, Cancelled]


@dataclass(frozen=True)
class Ready:
    params: SessionParameters


@dataclass(frozen=True)
class Aborted:
    state: SessionState


SessionOutcome = Union[Ready, Aborted]


class Prompter(Protocol):
    """취소(Ctrl-C / EOF)는 None 으로 돌려준다."""

    def confirm(self, message: str, default: bool = True) -> bool | None: ...

    def text(self, message: str, default: str | None = None) -> str | None: ...


class RichPrompter:
    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def confirm(self, message: str, default: bool = True) -> bool | None:
        try:
            return Confirm.ask(message, default=default, console=self.console)
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return None

    def text(self, message: str, default: str | None = None) -> str | None:
        try:
            if default is None:
                return Prompt.ask(message, console=self.console)
            return Prompt.ask(message, default=default, console=self.console)
        except (KeyboardInterrupt, EOFError):
            self.console.print()
            return None


class SessionController:
    def __init__(self, prompter: Prompter, yes: bool = False, console: Console | None = None):
        self.prompter = prompter
        self.yes = yes
        self.console = console or Console(stderr=True)
        self.state = SessionState.AWAIT_CONSENT

    # ----- 단계별 처리 -----

    def await_consent(self) -> StepResult:
        if self.yes:
            return Supplied(True)
        answer = self.prompter.confirm(CONSENT_MESSAGE, default=True)
        if not answer:
            return Cancelled()
        return Resolved(True)

    def await_directory(self, supplied: str | Path | None) -> StepResult:
        if supplied is not None:
            p = Path(supplied).expanduser()
            if p.exists():
                return Supplied(p)
            if self.yes:
                raise PreconditionError(f"Directory not found: {supplied}")
            self.console.print(f"[yellow]Directory not found: {supplied}, please pick another.[/yellow]")
        elif self.yes:
            return Skipped(Path(DEFAULT_TARGET))

        while True:
            value = self.prompter.text(DIRECTORY_MESSAGE, default=DEFAULT_TARGET)
            if value is None:
                return Cancelled()
            p = Path(value or DEFAULT_TARGET).expanduser()
            if p.exists():
                return Resolved(p)
            self.console.print(f"[red]Directory not found:[/red] {value}")

    def await_output_path(self, supplied: str | Path | None) -> StepResult:
        if supplied:
            return Supplied(Path(supplied))
        if self.yes:
            return Skipped(Path(DEFAULT_OUTPUT))
        value = self.prompter.text(OUTPUT_MESSAGE, default=DEFAULT_OUTPUT)
        if value is None:
            return Cancelled()
        return Resolved(Path(value or DEFAULT_OUTPUT))

    def await_base_url(self, supplied: str | None) -> StepResult:
        if supplied:
            return Supplied(supplied)
        if self.yes:
            return Skipped(DEFAULT_BASE_URL)
        value = self.prompter.text(BASE_URL_MESSAGE, default=DEFAULT_BASE_URL)
        if value is None:
            return Cancelled()
        return Resolved(value or DEFAULT_BASE_URL)

    # ----- 전체 흐름 -----

    def _step(self, state: SessionState, result: StepResult) -> StepResult:
        log.debug("%s -> %s", state.value, type(result).__name__)
        if isinstance(result, Cancelled):
            self.state = SessionState.ABORTED
        return result

    def resolve(
        self,
        target: str | Path | None,
        output: str | Path | None,
        base_url: str | None,
        model: str,
    ) -> SessionOutcome:
        """
        네 가지 파라미터를 확정한다.
        - 사용자가 취소/거절하면 Aborted(취소한 단계)
        - --yes 모드에서 대상 경로가 없으면 PreconditionError
        """
        self.state = SessionState.AWAIT_CONSENT
        consent = self._step(self.state, self.await_consent())
        if isinstance(consent, Cancelled):
            return Aborted(SessionState.AWAIT_CONSENT)

        self.state = SessionState.AWAIT_DIRECTORY
        directory = self._step(self.state, self.await_directory(target))
        if isinstance(directory, Cancelled):
            return Aborted(SessionState.AWAIT_DIRECTORY)

        self.state = SessionState.AWAIT_OUTPUT_PATH
        output_path = self._step(self.state, self.await_output_path(output))
        if isinstance(output_path, Cancelled):
            return Aborted(SessionState.AWAIT_OUTPUT_PATH)

        self.state = SessionState.AWAIT_BASE_URL
        url = self._step(self.state, self.await_base_url(base_url))
        if isinstance(url, Cancelled):
            return Aborted(SessionState.AWAIT_BASE_URL)

        self.state = SessionState.READY
        target_path = directory.value
        # 플래그만으로 들어온 경우까지 한 번 더 확인
        if not target_path.exists():
            raise PreconditionError(f"Directory not found: {target_path}")

        return Ready(
            SessionParameters(
                consent_given=consent.value,
                target_path=target_path,
                output_path=output_path.value,
                base_url=url.value,
                model=model,
            )
        )
