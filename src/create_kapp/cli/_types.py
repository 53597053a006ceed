"""Enums and value types shared by the prompt engine and the workflow."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

Validator = Callable[[str], bool]


class PromptKind(str, Enum):
    """How an answer is validated and normalized."""

    INPUT = "input"
    CONFIRM = "confirm"


@dataclass(frozen=True)
class PromptSpec:
    """
    A single question.

    Attributes:
        question: Text shown to the user.
        validator: Optional predicate over the trimmed answer.
        keep: Echo the accepted answer as a permanent line.
    """

    question: str
    validator: Validator | None = None
    keep: bool = True


class Template(str, Enum):
    """Known scaffolds. The first member is the fallback for unknown choices."""

    TEMPLATE = "template"
    API_TEMPLATE = "apitemplate"
    DJS14_TEMPLATE = "DJS14Template"

    @classmethod
    def default(cls) -> Template:
        return next(iter(cls))

    @property
    def label(self) -> str:
        labels: dict[Template, str] = {
            Template.TEMPLATE: "Default project template",
            Template.API_TEMPLATE: "API server template",
            Template.DJS14_TEMPLATE: "discord.js v14 bot template",
        }
        return labels[self]
