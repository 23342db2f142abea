"""
Tests for RepositoryRdfTools: writing RDF into nodes, the managed-predicate
guard, and type inspection.
"""

import pytest
from rdflib import Literal, URIRef

from fixtures import BASE_URI, EX
from repository_rdf.constants import Namespaces
from repository_rdf.core import (
    InvalidValueShape,
    MalformedInput,
    ManagedPropertyViolation,
    ValueFormatError,
)
from repository_rdf.core.lexicon import LDP, PREMIS, REPOSITORY
from repository_rdf.formats.rdf import RepositoryRdfTools
from repository_rdf.shared.models import NodeType, PropertyDefinition, PropertyType, Value


@pytest.fixture
def book_type(registry, session):
    """Mixin declaring a single-valued LONG and a REFERENCE property."""
    registry.register_namespace("ex", str(EX))
    return session.node_type_manager.register_node_type(NodeType(
        "ex:Book",
        is_mixin=True,
        property_definitions=(
            PropertyDefinition("ex:pages", PropertyType.LONG),
            PropertyDefinition("ex:cites", PropertyType.REFERENCE),
        ),
    ))


@pytest.fixture
def book(node, book_type):
    node.add_mixin(book_type.name)
    return node


@pytest.mark.unit
class TestConstruction:

    def test_with_context_requires_identifier_converter(self, session):
        with pytest.raises(ValueError, match="non-null identifier converter"):
            RepositoryRdfTools.with_context(None, session)

    def test_session_operations_need_a_session(self, id_converter):
        tools = RepositoryRdfTools(id_converter)
        with pytest.raises(ValueError):
            tools.get_namespace_triples()

    def test_problems_graph_starts_empty(self, tools):
        assert len(tools.problems_graph()) == 0


@pytest.mark.unit
class TestAddProperty:

    def test_add_then_remove(self, tools, node, hints):
        tools.add_property(node, EX.title, Literal("Hello"), hints)
        assert node.get_property("ex:title").values == [Value(PropertyType.STRING, "Hello")]
        tools.remove_property(node, EX.title, Literal("Hello"), hints)
        assert not node.has_property("ex:title")

    def test_undeclared_property_appends(self, tools, node, hints):
        tools.add_property(node, EX.title, Literal("A"), hints)
        tools.add_property(node, EX.title, Literal("B"), hints)
        prop = node.get_property("ex:title")
        assert prop.is_multiple
        assert [v.raw for v in prop.values] == ["A", "B"]

    def test_duplicate_value_is_not_appended(self, tools, node, hints):
        tools.add_property(node, EX.title, Literal("A"), hints)
        tools.add_property(node, EX.title, Literal("A"), hints)
        assert len(node.get_property("ex:title").values) == 1

    def test_remove_one_of_several(self, tools, node, hints):
        tools.add_property(node, EX.title, Literal("A"), hints)
        tools.add_property(node, EX.title, Literal("B"), hints)
        tools.remove_property(node, EX.title, Literal("A"), hints)
        assert [v.raw for v in node.get_property("ex:title").values] == ["B"]

    def test_remove_absent_property(self, tools, node, hints):
        tools.remove_property(node, EX.title, Literal("A"), hints)
        assert not node.has_property("ex:title")

    def test_declared_single_valued_property_is_replaced(self, tools, book):
        tools.add_property(book, EX.pages, Literal("10"))
        tools.add_property(book, EX.pages, Literal("12"))
        prop = book.get_property("ex:pages")
        assert not prop.is_multiple
        assert prop.values == [Value(PropertyType.LONG, 12)]

    def test_declared_type_parses_literal(self, tools, book):
        tools.add_property(book, EX.pages, Literal("10"))
        assert book.get_property("ex:pages").value == Value(PropertyType.LONG, 10)

    def test_unconvertible_literal_names_property_and_node(self, tools, book):
        with pytest.raises(ValueFormatError) as exc_info:
            tools.add_property(book, EX.pages, Literal("many"))
        assert exc_info.value.property_name == "ex:pages"
        assert exc_info.value.node_path == "/books/1"
        assert "ex:pages" in str(exc_info.value)
        assert "/books/1" in str(exc_info.value)
        assert not book.has_property("ex:pages")

    def test_uri_object(self, tools, node, hints):
        tools.add_property(node, EX.seeAlso, URIRef("http://other.org/page"), hints)
        assert node.get_property("ex:seeAlso").values == [Value(PropertyType.URI, "http://other.org/page")]


@pytest.mark.unit
class TestReferenceProperties:

    def test_reference_is_stored_under_suffixed_name(self, tools, session, book):
        target = session.add_node("/books/2")
        tools.add_property(book, EX.cites, URIRef(BASE_URI + "/books/2"))
        assert not book.has_property("ex:cites")
        assert book.get_property("ex:cites_ref").values == [Value(PropertyType.REFERENCE, target.identifier)]

    def test_remove_reference(self, tools, session, book):
        session.add_node("/books/2")
        tools.add_property(book, EX.cites, URIRef(BASE_URI + "/books/2"))
        tools.remove_property(book, EX.cites, URIRef(BASE_URI + "/books/2"))
        assert not book.has_property("ex:cites_ref")

    def test_missing_reference_target(self, tools, book):
        with pytest.raises(MalformedInput):
            tools.add_property(book, EX.cites, URIRef(BASE_URI + "/books/404"))
        assert not book.has_property("ex:cites_ref")

    def test_literal_for_reference(self, tools, book):
        with pytest.raises(InvalidValueShape):
            tools.add_property(book, EX.cites, Literal("/books/2"))


@pytest.mark.unit
class TestManagedPredicates:
    """Managed predicates are rejected before anything is touched."""

    @pytest.mark.parametrize("predicate", [
        REPOSITORY.created,
        REPOSITORY.primaryType,
        LDP.contains,
        PREMIS.hasSize,
        URIRef(Namespaces.JCR + "data"),
        URIRef(Namespaces.JCR + "created"),
    ])
    def test_add_is_rejected(self, tools, node, predicate):
        with pytest.raises(ManagedPropertyViolation) as exc_info:
            tools.add_property(node, predicate, Literal("x"))
        assert exc_info.value.predicate == str(predicate)
        assert exc_info.value.action == "persist"
        assert list(node.get_properties()) == []

    def test_guard_runs_before_namespace_registration(self, tools, registry, node):
        with pytest.raises(ManagedPropertyViolation):
            tools.add_property(node, PREMIS.hasSize, Literal(10))
        assert not registry.is_registered_uri(str(PREMIS))

    def test_store_namespace_predicate_registers_nothing(self, tools, registry, node):
        prefixes = registry.get_prefixes()
        with pytest.raises(ManagedPropertyViolation):
            tools.add_property(node, URIRef(Namespaces.JCR + "created"), Literal("x"))
        assert registry.get_prefixes() == prefixes
        assert list(node.get_properties()) == []

    def test_remove_is_rejected(self, tools, node):
        with pytest.raises(ManagedPropertyViolation, match="Could not remove"):
            tools.remove_property(node, REPOSITORY.created, Literal("x"))

    def test_is_internal_property(self, tools, node):
        assert tools.is_internal_property(node, REPOSITORY.lastModified)
        assert not tools.is_internal_property(node, EX.title)


@pytest.mark.unit
class TestTypeInspection:

    def test_unstructured_node_is_container(self, tools, node):
        assert tools.is_container(node)

    def test_frozen_node_is_not_container(self, tools, session):
        assert not tools.is_container(session.add_node("/frozen", "nt:frozenNode"))

    def test_declared_property_type(self, tools, book):
        assert tools.get_property_type(book, "ex:pages") == PropertyType.LONG

    def test_undeclared_property_type(self, tools, node):
        assert tools.get_property_type(node, "ex:title") == PropertyType.UNDEFINED

    def test_property_type_for_node_type_name(self, tools, book_type):
        assert tools.get_property_type_for_node_type("ex:Book", "ex:cites") == PropertyType.REFERENCE

    def test_ambiguous_declaration_is_undefined(self, tools):
        node_type = NodeType("ex:Dup", property_definitions=(
            PropertyDefinition("ex:p", PropertyType.LONG),
            PropertyDefinition("ex:p", PropertyType.STRING),
        ))
        assert tools.get_property_type_for_node_type(node_type, "ex:p") == PropertyType.UNDEFINED

    def test_create_value_uses_bound_session(self, tools):
        assert tools.create_value(Literal("7"), PropertyType.LONG) == Value(PropertyType.LONG, 7)
