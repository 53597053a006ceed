"""Question/answer prompts with validation retry and transient-line redraw."""

from __future__ import annotations

import logging

from rich.markup import escape

from create_kapp.cli._terminal import Terminal
from create_kapp.cli._types import PromptKind, PromptSpec, Validator

logger = logging.getLogger(__name__)

INVALID_INPUT = "× Invalid input. Try again."
INVALID_CONFIRM = "× Please answer with 'y' or 'n'."


def _final_line(terminal: Terminal, question: str, answer: str) -> None:
    terminal.write_line(
        f"[success]√[/] [primary]{escape(question)}[/] [muted]»[/] [primary]{escape(answer)}[/]"
    )


def _accepts(validator: Validator | None, answer: str) -> bool:
    if validator is None:
        return True
    try:
        return bool(validator(answer))
    except Exception:
        logger.debug("Validator raised on %r, treating as rejection", answer, exc_info=True)
        return False


def read_line(terminal: Terminal, prompt_text: str) -> str:
    """Show *prompt_text*, read one line and erase it from the screen.

    Closing the input stream ends the process, there is no answer to return.
    """
    terminal.write(f"[info]?[/] [primary]{escape(prompt_text)}[/] [muted]»[/] ")
    try:
        raw = terminal.read()
    except EOFError:
        terminal.write_line()
        raise SystemExit(1) from None
    terminal.erase_line()
    return raw.strip()


def ask(
    terminal: Terminal,
    kind: PromptKind,
    question: str,
    validator: Validator | None = None,
    keep: bool = True,
) -> str:
    """Ask *question* until an acceptable answer is given.

    ``PromptKind.INPUT`` returns the trimmed answer once *validator* (if any)
    accepts it. ``PromptKind.CONFIRM`` ignores *validator* and returns exactly
    ``"y"`` or ``"n"``. With *keep*, the accepted answer is echoed as a
    permanent ``√ question » answer`` line.
    """
    while True:
        if kind == PromptKind.CONFIRM:
            answer = read_line(terminal, f"{question} (y/n)").lower()
            accepted = answer in ("y", "n")
            error = INVALID_CONFIRM
        else:
            answer = read_line(terminal, question)
            accepted = _accepts(validator, answer)
            error = INVALID_INPUT

        if accepted:
            break
        terminal.write_line(f"[error]{escape(error)}[/]")

    if keep:
        _final_line(terminal, question, answer)
    return answer


def ask_spec(terminal: Terminal, kind: PromptKind, spec: PromptSpec) -> str:
    return ask(terminal, kind, spec.question, spec.validator, spec.keep)
