"""Scripted prompter for driving flows without a terminal."""

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

from src.selene_cli.core.enums import MenuAction
from src.selene_cli.core.interfaces import Prompter

# Sentinel answer meaning "abort this prompt"
ABORT = None


class ScriptedPrompter(Prompter):
    """Prompter answering from pre-recorded scripts.

    Selections are scripted as option indexes (or ABORT). Running out of
    script fails the test loudly.
    """

    def __init__(
        self,
        token_choices: Sequence[int | None] = (),
        decimals: Sequence[str | None] = (),
        confirms: Sequence[bool] = (),
        order_choices: Sequence[int | None] = (),
        actions: Sequence[MenuAction] = (),
    ) -> None:
        self.token_choices = list(token_choices)
        self.decimals = list(decimals)
        self.confirms = list(confirms)
        self.order_choices = list(order_choices)
        self.actions = list(actions)

        # Track calls for testing
        self.messages: list[str] = []
        self.warnings: list[str] = []
        self.progress_messages: list[str] = []
        self.offered_tokens: list[list[Any]] = []

    def choose_token(self, message: str, tokens: Sequence[Any]) -> Any | None:
        self.messages.append(message)
        self.offered_tokens.append(list(tokens))
        index = self.token_choices.pop(0)
        return None if index is None else tokens[index]

    def ask_decimal(self, message: str) -> str | None:
        self.messages.append(message)
        return self.decimals.pop(0)

    def choose_order(self, message: str, orders: Sequence[Any]) -> Any | None:
        self.messages.append(message)
        index = self.order_choices.pop(0)
        return None if index is None else orders[index]

    def confirm(self, message: str) -> bool:
        self.messages.append(message)
        return self.confirms.pop(0)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    @contextmanager
    def progress(self, message: str) -> Iterator[None]:
        self.progress_messages.append(message)
        yield

    def choose_action(self, actions: Sequence[MenuAction]) -> MenuAction:
        if not self.actions:
            return MenuAction.QUIT
        return self.actions.pop(0)
