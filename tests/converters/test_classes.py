"""Tests for the class-hierarchy converter."""

from __future__ import annotations

from depgraph.converters.classes import ClassHierarchyConverter, iter_classes
from depgraph.models import Graph
from tests._fixtures.payloads import book_class, package_tree_export, simple_class

BOOK = "java_com_sample_book_Book"
PUBLICATION = "java_com_sample_book_Publication"
BORROWABLE = "java_com_sample_book_Borrowable"
AUTHOR = "java_com_sample_book_model_Author"


def _convert(payload: object, **kwargs: object) -> Graph:
    return ClassHierarchyConverter(**kwargs).convert(payload, converted_at="2024-05-17T12:30:45.123Z")


def _tree(*classes: dict) -> dict:
    return {"name": "com.sample", "package": True, "elements": list(classes)}


def test_walks_nested_packages_depth_first() -> None:
    graph = _convert(package_tree_export())

    assert [node.id for node in graph.nodes] == [BOOK, PUBLICATION, BORROWABLE, AUTHOR]
    assert [node.title for node in graph.nodes] == ["Book", "Publication", "Borrowable", "Author"]
    assert graph.get_node(BORROWABLE).type == "interface"
    assert graph.get_node(BOOK).type == "class"


def test_class_sections_are_rendered() -> None:
    graph = _convert(package_tree_export())

    book = graph.get_node(BOOK)
    assert [section.name for section in book.sections] == ["Class Info", "Fields", "Methods", "Imports"]
    assert [item.value for item in book.section("Class Info").items] == [
        "extends Publication",
        "implements Serializable, Borrowable",
    ]
    assert [item.value for item in book.section("Fields").items] == [
        "private final String title",
        "public static int COUNT",
    ]
    methods = book.section("Methods").items
    assert [item.value for item in methods] == ["public Book(String)", "public getAuthor(): Author"]
    assert methods[0].icon == "constructor"
    assert methods[0].metadata == {"returnType": "void", "isConstructor": True}
    assert [item.value for item in book.section("Imports").items] == ["java.util"]


def test_node_metadata_keeps_qualified_names() -> None:
    graph = _convert(package_tree_export())

    metadata = graph.get_node(BOOK).metadata
    assert metadata["fullName"] == "com.sample.book.Book"
    assert metadata["packageName"] == "com.sample.book"
    assert metadata["isAbstract"] is False
    assert metadata["superClassName"] == "com.sample.book.Publication"
    assert graph.get_node(PUBLICATION).metadata["isAbstract"] is True


def test_edges_resolve_inheritance_interfaces_and_dependencies() -> None:
    graph = _convert(package_tree_export())

    edges = [(edge.source, edge.target, edge.type) for edge in graph.edges]
    assert edges == [
        (BOOK, PUBLICATION, "inheritance"),
        (BOOK, BORROWABLE, "implementation"),
        (BOOK, AUTHOR, "dependency"),
    ]
    assert graph.edges[0].metadata == {"relationship": "extends"}
    assert graph.edges[1].metadata == {"relationship": "implements"}
    assert graph.edges[2].metadata == {"direction": "outgoing"}


def test_universal_root_superclass_is_not_an_edge() -> None:
    graph = _convert(_tree(book_class(superClassName="java.lang.Object", interfaces=[])))

    book = graph.nodes[0]
    assert book.section("Class Info") is None
    assert not [edge for edge in graph.edges if edge.type == "inheritance"]


def test_extends_present_class_yields_one_inheritance_edge() -> None:
    graph = _convert(_tree(book_class(interfaces=[]), simple_class("com.sample.book.Publication")))

    inheritance = [edge for edge in graph.edges if edge.type == "inheritance"]
    assert [(edge.source, edge.target) for edge in inheritance] == [(BOOK, PUBLICATION)]


def test_configured_root_classes_replace_the_default() -> None:
    graph = _convert(
        package_tree_export(),
        root_classes=["com.sample.book.Publication"],
    )

    assert not [edge for edge in graph.edges if edge.type == "inheritance"]
    assert graph.get_node(BOOK).section("Class Info").items[0].value.startswith("implements")


def test_qualified_reference_only_matches_its_exact_class() -> None:
    payload = _tree(
        simple_class("a.Item"),
        simple_class("b.Item"),
        simple_class("c.Cart", outGoingDependencies=["x.Item", "b.Item", "Item"]),
    )

    graph = _convert(payload)

    assert [(edge.source, edge.target) for edge in graph.edges] == [
        ("java_c_Cart", "java_b_Item"),
        ("java_c_Cart", "java_a_Item"),
    ]


def test_external_classes_sharing_a_simple_name_produce_no_edges() -> None:
    payload = _tree(
        simple_class(
            "com.app.Exception",
            superClassName="java.lang.Exception",
            interfaces=["org.slf4j.Logger"],
            outGoingDependencies=["java.util.Date"],
        ),
        simple_class("com.app.Logger", interface=True, **{"class": False}),
        simple_class("com.app.Date"),
    )

    graph = _convert(payload)

    assert graph.edges == []


def test_declared_self_reference_is_kept() -> None:
    payload = _tree(simple_class("com.app.Node", outGoingDependencies=["com.app.Node"]))

    graph = _convert(payload)

    assert [(edge.source, edge.target, edge.type) for edge in graph.edges] == [
        ("java_com_app_Node", "java_com_app_Node", "dependency"),
    ]


def test_overloaded_methods_get_unique_item_ids() -> None:
    method = {"accessModifier": "PUBLIC", "name": "add", "parameters": ["int"], "returnType": "void"}
    payload = _tree(simple_class("a.Calc", methods=[method, dict(method, parameters=["double"])]))

    graph = _convert(payload)

    items = graph.nodes[0].section("Methods").items
    assert [item.id for item in items] == ["method_a_Calc_add", "method_a_Calc_add_2"]
    assert [item.value for item in items] == ["public add(int): void", "public add(double): void"]


def test_missing_modifiers_do_not_leave_leading_spaces() -> None:
    field = {"name": "count", "type": "int"}
    graph = _convert(_tree(simple_class("a.Counter", fields=[field])))

    assert graph.nodes[0].section("Fields").items[0].value == "int count"


def test_iter_classes_ignores_unflagged_records() -> None:
    tree = _tree(simple_class("a.One"), {"name": "stray"}, {"name": "a.sub", "package": True, "elements": []})

    assert [record["name"] for record in iter_classes(tree)] == ["a.One"]


def test_graph_metadata() -> None:
    graph = _convert(package_tree_export())

    assert graph.metadata.project_type == "java"
    assert graph.metadata.project_name == "Java Project"
    assert graph.metadata.original_format == {}
