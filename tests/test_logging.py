"""Tests for depgraph's logging helpers."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import List

from depgraph.converters import ComponentConverter
from depgraph.logging import (
    SKIPPED,
    ScopedFormatter,
    configure_logging,
    converter_logger,
    get_logger,
    log_skipped,
)
from tests._fixtures.payloads import component_export


class _Collector(logging.Handler):
    def __init__(self) -> None:
        super().__init__(level=logging.NOTSET)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)


def test_loggers_live_under_the_depgraph_hierarchy() -> None:
    assert get_logger().name == "depgraph"
    assert get_logger("pipeline").name == "depgraph.pipeline"
    assert converter_logger("orm").name == "depgraph.converters.orm"


def test_scoped_formatter_names_the_component() -> None:
    formatter = ScopedFormatter()
    record = logging.makeLogRecord(
        {"name": "depgraph.converters.classes", "levelno": SKIPPED, "levelname": "SKIP", "msg": "dropped"}
    )
    root_record = logging.makeLogRecord({"name": "depgraph", "levelno": logging.INFO, "levelname": "INFO", "msg": "done"})

    assert formatter.format(record) == "[depgraph converters.classes] SKIP dropped"
    assert formatter.format(root_record) == "[depgraph] INFO done"


def test_skip_level_sits_between_debug_and_info() -> None:
    assert logging.DEBUG < SKIPPED < logging.INFO
    assert logging.getLevelName(SKIPPED) == "SKIP"


def test_converters_report_unresolved_references_at_skip_level() -> None:
    converter = ComponentConverter()
    collector = _Collector()
    converter.logger.addHandler(collector)
    converter.logger.setLevel(logging.DEBUG)
    try:
        converter.convert(component_export(), converted_at="2024-05-17T12:30:45.123Z")
    finally:
        converter.logger.removeHandler(collector)
        converter.logger.setLevel(logging.NOTSET)

    skipped = [record.getMessage() for record in collector.records if record.levelno == SKIPPED]
    assert "dependency edge from App dropped: 'React' is not in the graph" in skipped
    assert "renders edge from BookList dropped: 'BookCard' is not in the graph" in skipped


def test_console_hides_skipped_references_unless_verbose() -> None:
    stream = io.StringIO()
    configure_logging(stream=stream)
    log_skipped(converter_logger("orm"), "uses", "BookListView", "Missing")
    get_logger("pipeline").info("converted")

    assert stream.getvalue() == "[depgraph pipeline] INFO converted\n"

    verbose_stream = io.StringIO()
    configure_logging(verbose=True, stream=verbose_stream)
    log_skipped(converter_logger("orm"), "uses", "BookListView", "Missing")

    assert "SKIP uses edge from BookListView dropped: 'Missing'" in verbose_stream.getvalue()
    assert stream.getvalue() == "[depgraph pipeline] INFO converted\n"


def test_log_file_keeps_skipped_references(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "depgraph.log"
    configure_logging(log_file=log_file, stream=io.StringIO())

    log_skipped(converter_logger("classes"), "inheritance", "a.Child", "x.Parent")

    content = log_file.read_text(encoding="utf-8")
    assert "SKIP depgraph.converters.classes: inheritance edge from a.Child dropped" in content
