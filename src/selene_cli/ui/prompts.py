"""Terminal prompts built on click."""

import re
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import TypeVar

import click

from src.selene_cli.core.enums import MenuAction
from src.selene_cli.core.interfaces import Prompter
from src.selene_cli.models.order import OrderRecord
from src.selene_cli.models.token import Token
from src.selene_cli.ui.console import format_menu

T = TypeVar("T")

# ASCII digits only
CHOICE_PATTERN = re.compile(r"[0-9]+")


def parse_choice(answer: str, count: int) -> int | None:
    """Zero-based index for a 1-based menu answer, None if out of range."""
    answer = answer.strip()
    if CHOICE_PATTERN.fullmatch(answer) is None or not 1 <= int(answer) <= count:
        return None
    return int(answer) - 1


class ClickPrompter(Prompter):
    """Prompter reading answers from the terminal.

    Ctrl-C or EOF aborts the current prompt. At a selection, a blank line
    aborts too. Aborting only ends the current flow, never the session.
    """

    def _read(self, message: str) -> str | None:
        """Read one line, None on Ctrl-C / EOF."""
        try:
            return click.prompt(message, default="", show_default=False)
        except click.exceptions.Abort:
            click.echo()
            return None

    def _choose(
        self, message: str, options: Sequence[T], label: Callable[[T], str]
    ) -> T | None:
        click.echo(message)
        for i, option in enumerate(options, start=1):
            click.echo(f"  {i}. {label(option)}")

        while True:
            answer = self._read("Choice (blank to go back)")
            if answer is None or not answer.strip():
                return None
            index = parse_choice(answer, len(options))
            if index is not None:
                return options[index]
            self.warn(f"Enter a number between 1 and {len(options)}")

    def choose_token(self, message: str, tokens: Sequence[Token]) -> Token | None:
        return self._choose(message, tokens, lambda t: f"{t.symbol} ({t.human_balance})")

    def ask_decimal(self, message: str) -> str | None:
        """Ask for an amount or price. A blank answer is returned as "" for validation."""
        return self._read(message)

    def choose_order(self, message: str, orders: Sequence[OrderRecord]) -> OrderRecord | None:
        return self._choose(
            message,
            orders,
            lambda o: f"{o.side.value} {o.quantity} at {o.price} (market {o.market_id})",
        )

    def confirm(self, message: str) -> bool:
        try:
            return click.confirm(message, default=False)
        except click.exceptions.Abort:
            click.echo()
            return False

    def warn(self, message: str) -> None:
        click.echo(click.style(message, fg="yellow"))

    @contextmanager
    def progress(self, message: str) -> Iterator[None]:
        click.echo(click.style(f"{message}...", fg="red"))
        yield

    def choose_action(self, actions: Sequence[MenuAction]) -> MenuAction:
        """Show the main menu. Aborting here means Quit."""
        click.echo("What do you want to do?")
        click.echo(format_menu(actions))
        while True:
            answer = self._read("Action")
            if answer is None:
                return MenuAction.QUIT
            index = parse_choice(answer, len(actions))
            if index is not None:
                return actions[index]
            self.warn(f"Enter a number between 1 and {len(actions)}")
