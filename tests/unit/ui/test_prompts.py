"""Tests for the click-based prompter."""

from unittest.mock import patch

import click
import pytest

from src.selene_cli.core.enums import MenuAction, OrderSide
from src.selene_cli.models.order import OrderRecord
from src.selene_cli.ui.prompts import ClickPrompter


@pytest.fixture
def click_prompter():
    return ClickPrompter()


class TestSelection:
    """Test numbered selections."""

    def test_choose_token(self, click_prompter, heur_token, husd_token, capsys):
        """A valid number should select the matching token."""
        with patch("click.prompt", return_value="2"):
            token = click_prompter.choose_token("Select a token to sell", [heur_token, husd_token])

        assert token == husd_token
        out = capsys.readouterr().out
        assert "1. HEUR (500.0)" in out

    def test_invalid_choice_reprompts(self, click_prompter, heur_token, capsys):
        """Out-of-range answers should warn and ask again."""
        with patch("click.prompt", side_effect=["7", "x", "1"]) as mock_prompt:
            token = click_prompter.choose_token("Select a token to sell", [heur_token])

        assert token == heur_token
        assert mock_prompt.call_count == 3
        assert "Enter a number between 1 and 1" in capsys.readouterr().out

    @pytest.mark.parametrize("answer", ["²", "١", "+1", "1.0"])
    def test_non_ascii_digits_reprompt(self, click_prompter, heur_token, answer, capsys):
        """Unicode digits and signs should warn instead of raising."""
        with patch("click.prompt", side_effect=[answer, "1"]) as mock_prompt:
            token = click_prompter.choose_token("Select a token to sell", [heur_token])

        assert token == heur_token
        assert mock_prompt.call_count == 2
        assert "Enter a number between 1 and 1" in capsys.readouterr().out

    @pytest.mark.parametrize("answer", ["", "   "])
    def test_blank_choice_aborts(self, click_prompter, answer):
        """A blank line should abort the selection."""
        order = OrderRecord(market_id=0, side=OrderSide.BUY, price="2.4", quantity="1")

        with patch("click.prompt", return_value=answer):
            assert click_prompter.choose_order("Which order?", [order]) is None

    def test_interrupt_aborts(self, click_prompter, heur_token):
        """Ctrl-C should abort the selection."""
        with patch("click.prompt", side_effect=click.exceptions.Abort()):
            assert click_prompter.choose_token("Select a token to sell", [heur_token]) is None


class TestInput:
    """Test free-form answers and confirmation."""

    def test_ask_decimal_returns_raw_answer(self, click_prompter):
        """Answers should be returned for validation unchanged."""
        with patch("click.prompt", return_value="1.2.3"):
            assert click_prompter.ask_decimal("How many HEUR?") == "1.2.3"

    def test_ask_decimal_blank_is_empty_string(self, click_prompter):
        """A blank answer should reach validation as an empty string."""
        with patch("click.prompt", return_value=""):
            assert click_prompter.ask_decimal("Set a price") == ""

    def test_ask_decimal_abort(self, click_prompter):
        """EOF should abort."""
        with patch("click.prompt", side_effect=click.exceptions.Abort()):
            assert click_prompter.ask_decimal("Set a price") is None

    def test_confirm_defaults_to_no(self, click_prompter):
        """Confirmation should default to No."""
        with patch("click.confirm", return_value=False) as mock_confirm:
            assert click_prompter.confirm("Place order?") is False

        mock_confirm.assert_called_once_with("Place order?", default=False)

    def test_confirm_abort_is_decline(self, click_prompter):
        """Ctrl-C at confirmation should decline."""
        with patch("click.confirm", side_effect=click.exceptions.Abort()):
            assert click_prompter.confirm("Place order?") is False

    def test_progress_prints_message(self, click_prompter, capsys):
        """Progress should announce the running step."""
        with click_prompter.progress("Cancelling order"):
            pass

        assert "Cancelling order..." in capsys.readouterr().out


class TestMenu:
    """Test main menu selection."""

    def test_choose_action(self, click_prompter, capsys):
        """The numbered entry should be returned."""
        actions = [MenuAction.LIMIT_SELL, MenuAction.GET_MARKET, MenuAction.QUIT]

        with patch("click.prompt", return_value="2"):
            assert click_prompter.choose_action(actions) == MenuAction.GET_MARKET

        assert "What do you want to do?" in capsys.readouterr().out

    def test_abort_at_menu_quits(self, click_prompter):
        """Ctrl-C at the menu should quit."""
        with patch("click.prompt", side_effect=click.exceptions.Abort()):
            assert click_prompter.choose_action([MenuAction.QUIT]) == MenuAction.QUIT

    def test_superscript_digit_at_menu_reprompts(self, click_prompter, capsys):
        """A superscript digit should warn and ask again."""
        with patch("click.prompt", side_effect=["²", "1"]) as mock_prompt:
            assert click_prompter.choose_action([MenuAction.QUIT]) == MenuAction.QUIT

        assert mock_prompt.call_count == 2
        assert "Enter a number between 1 and 1" in capsys.readouterr().out
