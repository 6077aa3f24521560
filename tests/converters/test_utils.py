"""Tests for converter helper utilities."""

from __future__ import annotations

from depgraph.converters.base import IdAllocator
from depgraph.converters.utils import as_list, as_records, as_str, as_str_list, make_id, simple_name


def test_make_id_replaces_non_alphanumerics() -> None:
    assert make_id("field", "Book_title") == "field_Book_title"
    assert make_id("java", "com.sample.Book$Inner") == "java_com_sample_Book_Inner"
    assert make_id("dep", "@scope/pkg-name") == "dep__scope_pkg_name"


def test_make_id_is_deterministic() -> None:
    assert make_id("field", "Book_title") == make_id("field", "Book_title")


def test_make_id_accepts_non_string_names() -> None:
    assert make_id("item", 42) == "item_42"


def test_simple_name() -> None:
    assert simple_name("com.sample.book.Book") == "Book"
    assert simple_name("int") == "int"


def test_id_allocator_suffixes_repeats() -> None:
    ids = IdAllocator()

    assert ids.allocate("method", "Book_get") == "method_Book_get"
    assert ids.allocate("method", "Book.get") == "method_Book_get_2"
    assert ids.allocate("method", "Book_get") == "method_Book_get_3"
    assert "method_Book_get_2" in ids


def test_id_allocator_skips_literal_suffix_collisions() -> None:
    ids = IdAllocator()

    assert ids.allocate("x", "a_2") == "x_a_2"
    assert ids.allocate("x", "a") == "x_a"
    assert ids.allocate("x", "a") == "x_a_3"


def test_coercion_helpers_treat_mistyped_values_as_empty() -> None:
    assert as_list(None) == []
    assert as_list("abc") == []
    assert as_list({"a": 1}) == []
    assert as_records([{"a": 1}, "b", None]) == [{"a": 1}]
    assert as_str(None) is None
    assert as_str(True) == "true"
    assert as_str(3) == "3"
    assert as_str_list("single") == ["single"]
    assert as_str_list(["a", 1, None, {"x": 1}]) == ["a", "1"]
