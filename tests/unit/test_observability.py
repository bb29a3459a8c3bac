import logging
from typing import Any

import pytest

from matchlens.core.observability import (
    clear_correlation_id,
    configure_stdlib_json_logging,
    debug_wrapper,
    set_correlation_id,
    trace_adapter,
    trace_performance,
)


def test_sync_wrapper_logs_entry_and_result(recorder: Any) -> None:
    @debug_wrapper(log_level="INFO")
    def add(a: int, b: int) -> int:
        return a + b

    assert add(2, 3) == 5
    levels = [level for level, _, _ in recorder.events]
    assert levels == ["info", "info"]
    entry, success = recorder.events[0][2], recorder.events[1][2]
    assert entry["args"] == [2, 3]
    assert success["result"] == 5
    assert "execution_id" in entry


@pytest.mark.asyncio
async def test_async_wrapper_reraises_and_logs_error(recorder: Any) -> None:
    @debug_wrapper(capture_args=False)
    async def boom() -> None:
        raise RuntimeError("nope")

    with pytest.raises(RuntimeError):
        await boom()

    level, _, fields = recorder.events[-1]
    assert level == "error"
    assert fields["error_type"] == "RuntimeError"
    assert fields["error_message"] == "nope"


def test_sensitive_kwargs_are_masked(recorder: Any) -> None:
    @debug_wrapper()
    def lookup(*, puuid: str, region: str) -> str:
        return region

    lookup(puuid="abcdefghijklmnopqrstuvwxyz", region="na1")

    kwargs = recorder.events[0][2]["kwargs"]
    assert kwargs["region"] == "na1"
    assert "abcdefghijklmnopqrstuvwxyz" not in str(kwargs["puuid"])


def test_trace_performance_skips_arguments(recorder: Any) -> None:
    @trace_performance
    def work(x: int) -> int:
        return x * 2

    assert work(4) == 8
    assert recorder.events[0][0] == "debug"
    assert recorder.events[0][2]["args"] is None
    assert recorder.events[1][2]["result"] is None


@pytest.mark.asyncio
async def test_trace_adapter_tags_layer(recorder: Any) -> None:
    @trace_adapter
    async def fetch() -> str:
        return "ok"

    assert await fetch() == "ok"
    assert recorder.events[0][2]["layer"] == "adapter"


def test_wrapper_preserves_metadata() -> None:
    @debug_wrapper()
    def documented() -> None:
        """Docs."""

    assert documented.__name__ == "documented"
    assert documented.__doc__ == "Docs."


def test_correlation_id_bind_and_clear() -> None:
    set_correlation_id("cid-1")
    clear_correlation_id()


def test_configure_stdlib_json_logging_sets_root_level() -> None:
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    try:
        configure_stdlib_json_logging(level="debug")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert root.handlers[0].formatter is not None
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
