"""Checks on the project metadata in pyproject.toml."""

from __future__ import annotations

import importlib
import tomllib
from pathlib import Path

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def _project() -> dict:
    with PYPROJECT.open("rb") as handle:
        return tomllib.load(handle)["project"]


def test_long_description_is_not_taken_from_design_notes() -> None:
    assert _project().get("readme") != "DESIGN.md"


def test_console_script_points_at_the_cli() -> None:
    module_name, _, attribute = _project()["scripts"]["depgraph"].partition(":")

    assert callable(getattr(importlib.import_module(module_name), attribute))
