"""Unit tests for the Result type."""

from src.selene_cli.core.enums import ErrorKind
from src.selene_cli.core.result import Err, Ok


class TestResult:
    """Test Ok / Err composition."""

    def test_ok_feeds_next_stage(self):
        """and_then should pass the value to the next stage."""
        result = Ok(2).and_then(lambda v: Ok(v * 10))

        assert result == Ok(20)
        assert result.is_ok

    def test_err_short_circuits(self):
        """Later stages should never run after an Err."""
        calls = []

        def stage(value):
            calls.append(value)
            return Ok(value)

        err = Err(ErrorKind.QUERY_FAILED, "boom")
        result = err.and_then(stage)

        assert result is err
        assert not result.is_ok
        assert calls == []

    def test_err_from_middle_stage_propagates(self):
        """An Err returned mid-chain should be the final result."""
        result = (
            Ok("1")
            .and_then(lambda v: Err(ErrorKind.INVALID_AMOUNT, f"bad {v}"))
            .and_then(lambda v: Ok(v + "never"))
        )

        assert result == Err(ErrorKind.INVALID_AMOUNT, "bad 1")
