"""Detection and dispatch of dependency exports to converters."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from .config import DepGraphConfig
from .converters import Converter, discover_converters
from .detect import InputFormat, detect_format
from .io import load_input
from .logging import get_logger
from .models import Graph

Clock = Callable[[], datetime]


class UnsupportedFormatError(ValueError):
    """Raised when an input matches no known export shape or no enabled converter."""

    def __init__(self, message: str, input_format: InputFormat = InputFormat.UNKNOWN) -> None:
        super().__init__(message)
        self.input_format = input_format


def _utc_now() -> datetime:
    return datetime.now(UTC)


def format_timestamp(moment: datetime) -> str:
    """Render ``moment`` as ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class GraphConverter:
    """Coordinates format detection and converter dispatch.

    Holds the converter list, settings and a dispatch table with one entry
    per recognised ``InputFormat`` (``None`` when no enabled converter handles
    it). Every ``convert`` call builds its graph from scratch.
    """

    def __init__(
        self,
        converters: Optional[Iterable[Converter]] = None,
        *,
        config: DepGraphConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = config
        if converters is None:
            enabled = config.converters.enabled if config is not None else []
            root_classes = config.classes.root_classes if config is not None else None
            converters = discover_converters(enabled or None, root_classes=root_classes)
        self.converters: List[Converter] = list(converters)
        self.dispatch: Dict[InputFormat, Optional[Converter]] = {
            input_format: next((c for c in self.converters if c.supports(input_format)), None)
            for input_format in InputFormat
            if input_format is not InputFormat.UNKNOWN
        }
        self.clock = clock or _utc_now
        self.logger = get_logger("pipeline")

    def detect(self, data: Any) -> InputFormat:
        return detect_format(data)

    def converter_for(self, input_format: InputFormat) -> Converter:
        if input_format is InputFormat.UNKNOWN:
            raise UnsupportedFormatError("Unknown dependency data format")
        converter = self.dispatch[input_format]
        if converter is not None:
            return converter
        raise UnsupportedFormatError(
            f"No enabled converter handles the '{input_format.value}' format",
            input_format,
        )

    def convert(self, data: Any) -> Graph:
        """Detect the shape of ``data`` and convert it into a Graph."""
        input_format = self.detect(data)
        self.logger.debug("Detected %s input", input_format.value)
        converter = self.converter_for(input_format)
        project_name = self.config.project_name if self.config is not None else None
        graph = converter.convert(
            data,
            converted_at=format_timestamp(self.clock()),
            project_name=project_name,
        )
        self.logger.info(
            "Converted %s export with %s: %d nodes, %d edges",
            input_format.value,
            converter.name,
            len(graph.nodes),
            len(graph.edges),
        )
        return graph

    def convert_file(self, path: Path | str) -> Graph:
        """Load an export from disk and convert it; I/O errors propagate."""
        source = Path(path)
        self.logger.debug("Loading %s", source)
        return self.convert(load_input(source))


def convert(data: Any, *, config: DepGraphConfig | None = None) -> Graph:
    return GraphConverter(config=config).convert(data)


def convert_file(path: Path | str, *, config: DepGraphConfig | None = None) -> Graph:
    return GraphConverter(config=config).convert_file(path)


__all__ = [
    "GraphConverter",
    "UnsupportedFormatError",
    "convert",
    "convert_file",
    "format_timestamp",
]
