"""Console rendering for balances, orders, books and transactions."""

from collections.abc import Sequence

import click

from src.selene_cli.config.constants import explorer_tx_link
from src.selene_cli.core.enums import MenuAction
from src.selene_cli.models.market import MarketInfo
from src.selene_cli.models.order import MarketBook, OrderRecord, TxReceipt
from src.selene_cli.models.token import Token

MENU_LABELS: dict[MenuAction, str] = {
    MenuAction.LIMIT_SELL: "Place a sell order (Sell HEUR for HUSD)",
    MenuAction.LIMIT_BUY: "Place a buy order (Buy HEUR with HUSD)",
    MenuAction.MARKET_SELL: "Send a market sell order (Sell HEUR for HUSD)",
    MenuAction.MARKET_BUY: "Send a market buy order (Buy HEUR with HUSD)",
    MenuAction.REMOVE: "Remove an order",
    MenuAction.GET_MARKET: "Get topmost orders from the market",
    MenuAction.GET_BIDS: "Get my currently placed bid orders",
    MenuAction.GET_ASKS: "Get my currently placed ask orders",
    MenuAction.GET_ORDERS: "Get all my currently placed orders",
    MenuAction.LIST_MARKETS: "List markets",
    MenuAction.FAUCET: "Ask faucet for HUSD & HEUR tokens",
    MenuAction.QUIT: "Quit",
}


def format_table(headers: Sequence[str], rows: Sequence[Sequence[object]]) -> str:
    """Render rows as a left-aligned text table.

    Args:
        headers: Column titles
        rows: Cell values, one sequence per row

    Returns:
        str: Table text without trailing newline
    """
    cells = [[str(h) for h in headers]] + [[str(c) for c in row] for row in rows]
    widths = [max(len(row[i]) for row in cells) for i in range(len(headers))]

    def line(row: list[str]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip()

    separator = "  ".join("-" * width for width in widths)
    return "\n".join([line(cells[0]), separator] + [line(row) for row in cells[1:]])


def info(message: str) -> None:
    click.echo(click.style(message, fg="cyan"))


def notice(message: str) -> None:
    """Expected, non-error condition (e.g. nothing found)."""
    click.echo(click.style(message, fg="yellow"))


def error(message: str) -> None:
    click.echo(click.style(message, fg="red"), err=True)


def show_balances(
    tokens: Sequence[Token], fee_balance: int | None = None, fee_denom: str = ""
) -> None:
    """Print the token balance table and the native fee balance."""
    info("Your available tokens are:")
    click.echo(
        format_table(
            ["symbol", "name", "balance", "humanBalance", "decimals", "address"],
            [
                [t.symbol, t.name, t.raw_balance, t.human_balance, t.decimals, t.address]
                for t in tokens
            ],
        )
    )
    if fee_balance is not None:
        click.echo(f"Fee balance: {fee_balance} {fee_denom}")


def show_orders(title: str, orders: Sequence[OrderRecord]) -> None:
    """Print resting orders as a price/quantity table."""
    click.echo(click.style(title, fg="bright_black"))
    click.echo(
        format_table(
            ["market", "side", "price", "quantity"],
            [[o.market_id, o.side.value, o.price, o.quantity] for o in orders],
        )
    )


def show_book(book: MarketBook) -> None:
    """Print both sides of a market book, best price first."""
    click.echo(click.style("Current open buy orders", fg="bright_black"))
    click.echo(format_table(["price", "quantity"], [[o.price, o.quantity] for o in book.bids]))
    click.echo(click.style("Current open sell orders", fg="bright_black"))
    click.echo(format_table(["price", "quantity"], [[o.price, o.quantity] for o in book.asks]))


def show_markets(markets: Sequence[MarketInfo]) -> None:
    click.echo(
        format_table(
            ["market", "base", "quote", "pair"],
            [
                [
                    m.market_id,
                    m.base_currency.identifier,
                    m.quote_currency.identifier,
                    "cw20" if m.is_cw20_pair else "native",
                ]
                for m in markets
            ],
        )
    )


def show_transaction(receipt: TxReceipt, explorer_template: str) -> None:
    """Print the explorer link of a successful transaction."""
    link = explorer_tx_link(receipt.transaction_hash, explorer_template)
    click.echo(click.style(f"transaction successful: {link}", fg="green"))


def format_menu(actions: Sequence[MenuAction]) -> str:
    """Numbered menu text for the given actions."""
    return "\n".join(f"  {i}. {MENU_LABELS[action]}" for i, action in enumerate(actions, start=1))
