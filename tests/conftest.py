from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Callable

import pytest

from depgraph.pipeline import GraphConverter

FIXED_TIME = datetime(2024, 5, 17, 12, 30, 45, 123456, tzinfo=UTC)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock pinned to FIXED_TIME so convertedAt is predictable."""
    return lambda: FIXED_TIME


@pytest.fixture
def graph_converter(fixed_clock: Callable[[], datetime]) -> GraphConverter:
    return GraphConverter(clock=fixed_clock)


@pytest.fixture(autouse=True)
def reset_depgraph_logger():
    """Drop handlers that configure_logging attached during a test."""
    yield
    logger = logging.getLogger("depgraph")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
