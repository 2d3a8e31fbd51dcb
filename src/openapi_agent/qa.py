"""생성된 스펙/코드에 대한 후속 질의응답 루프."""
from __future__ import annotations
import logging

from rich.console import Console
from rich.markdown import Markdown

from openapi_agent.llm.openai_client import classify_error, complete, describe_error
from openapi_agent.models import ChatMessage
from openapi_agent.session import Prompter

log = logging.getLogger(__name__)

DONE_MARKER = "done"
QUESTION_MESSAGE = "Ask a question (or 'done' to finish)"

QA_SYSTEM_PROMPT_TEMPLATE = """You are a senior backend engineer answering questions about an API.
Use the backend source code and the generated OpenAPI spec below. Be concise and concrete.

OPENAPI SPEC:
{document}

SOURCE CODE:
{context}
"""


def build_qa_system_prompt(document: str, context: str) -> str:
    return QA_SYSTEM_PROMPT_TEMPLATE.format(document=document, context=context)


def is_termination(answer: str | None) -> bool:
    return answer is None or not answer.strip() or answer.strip().lower() == DONE_MARKER


class QASession:
    def __init__(
        self,
        client,
        model: str,
        system_prompt: str,
        prompter: Prompter,
        console: Console | None = None,
    ):
        self.client = client
        self.model = model
        self.prompter = prompter
        self.console = console or Console()
        self.history: list[ChatMessage] = [ChatMessage(role="system", content=system_prompt)]

    def ask(self, question: str) -> str:
        """한 턴 처리. 실패하면 방금 넣은 질문을 history 에서 되돌리고 예외를 올린다."""
        self.history.append(ChatMessage(role="user", content=question))
        try:
            completion = complete(self.client, self.model, self.history)
        except Exception:
            self.history.pop()
            raise
        self.history.append(ChatMessage(role="assistant", content=completion.text))
        return completion.text

    def run(self) -> int:
        """종료 신호(취소, 빈 입력, 'done')까지 반복. 완료된 턴 수를 돌려준다."""
        turns = 0
        while True:
            question = self.prompter.text(QUESTION_MESSAGE)
            if is_termination(question):
                break
            try:
                answer = self.ask(question.strip())
            except Exception as e:
                log.debug("qa turn failed", exc_info=True)
                self.console.print(f"[red]Error:[/red] {describe_error(classify_error(e), str(e))}")
                continue
            turns += 1
            self.console.print(Markdown(answer))
        log.debug("qa session finished after %d turns", turns)
        return turns
