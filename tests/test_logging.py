import logging

import pytest
from loguru import logger as loguru_logger

from customer_map.core.logging import InterceptHandler, ProgressReporter


def test_progress_reporter_counts_steps():
    with ProgressReporter(3, label="Test", enabled=False) as reporter:
        reporter.step("one")
        reporter.step("two")
        reporter.step("three")
        reporter.step("extra")
        assert reporter._current == 3
    assert reporter._finished


def test_progress_reporter_with_bar():
    with ProgressReporter(2, label="Bar") as reporter:
        reporter.step("one")
    assert reporter._finished
    assert reporter._tqdm.n == 2


def test_progress_reporter_propagates_errors():
    with pytest.raises(KeyError):
        with ProgressReporter(2, enabled=False) as reporter:
            raise KeyError("boom")
    assert not reporter._finished


def test_intercept_handler_forwards_to_loguru():
    messages = []
    sink_id = loguru_logger.add(messages.append, level="DEBUG", format="{level} {message}")
    std = logging.getLogger("customer_map.tests.intercept")
    std.propagate = False
    std.setLevel(logging.DEBUG)
    handler = InterceptHandler()
    std.addHandler(handler)
    try:
        std.warning("resolved %d customers", 3)
    finally:
        std.removeHandler(handler)
        loguru_logger.remove(sink_id)
    assert any("WARNING resolved 3 customers" in m for m in messages)
