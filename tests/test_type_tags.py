"""
Tests for mixin type-tags: on-demand definition, application and removal.
"""

import pytest
from rdflib import URIRef

from fixtures import EX
from repository_rdf.constants import Namespaces
from repository_rdf.core import IncompatibleType, MalformedInput
from repository_rdf.formats.rdf import apply_type, lookup_or_define, remove_type_tag


@pytest.mark.unit
class TestLookupOrDefine:

    def test_unknown_type_is_registered_as_mixin(self, session, registry):
        registry.register_namespace("ex", str(EX))
        node_type = lookup_or_define(session, "ex:Tagged")
        assert node_type.is_mixin
        assert node_type.is_queryable
        assert not node_type.has_child_node_definitions
        assert session.node_type_manager.has_node_type("ex:Tagged")

    def test_existing_type_is_reused(self, session):
        existing = session.node_type_manager.get_node_type("mix:referenceable")
        assert lookup_or_define(session, "mix:referenceable") is existing

    def test_two_step_form(self, tools, node, hints):
        node_type = tools.lookup_or_define_type(EX.Other, hints)
        assert node_type.name == "ex:Other"
        assert apply_type(node, node_type) is True
        assert node.is_node_type("ex:Other")


@pytest.mark.unit
class TestAddMixin:

    def test_add_mixin(self, tools, node, hints):
        tools.add_mixin(node, EX.Tagged, hints)
        assert node.is_node_type("ex:Tagged")
        assert [t.name for t in node.mixin_node_types] == ["ex:Tagged"]

    def test_add_mixin_is_idempotent(self, tools, node, hints):
        tools.add_mixin(node, EX.Tagged, hints)
        tools.add_mixin(node, EX.Tagged, hints)
        assert [t.name for t in node.mixin_node_types] == ["ex:Tagged"]

    def test_apply_type_reports_no_change(self, tools, session, node, hints):
        tools.add_mixin(node, EX.Tagged, hints)
        node_type = session.node_type_manager.get_node_type("ex:Tagged")
        assert apply_type(node, node_type) is False

    def test_node_refusing_mixins(self, tools, session, hints):
        frozen = session.add_node("/frozen", "nt:frozenNode")
        with pytest.raises(IncompatibleType) as exc_info:
            tools.add_mixin(frozen, EX.Tagged, hints)
        assert exc_info.value.node_path == "/frozen"
        assert exc_info.value.resource == str(EX.Tagged)
        assert "/frozen" in str(exc_info.value)
        assert frozen.mixin_node_types == []

    def test_store_mixin_is_applied_not_redefined(self, tools, session, node):
        tools.add_mixin(node, URIRef(Namespaces.MIX + "referenceable"))
        assert [t.name for t in node.mixin_node_types] == ["mix:referenceable"]
        assert not any(name.startswith("ns") for name in session.namespace_registry.get_prefixes())

    def test_primary_type_as_mixin(self, tools, node):
        with pytest.raises(IncompatibleType):
            tools.add_mixin(node, URIRef(Namespaces.NT + "frozenNode"))

    def test_incompatible_type_is_malformed_input(self):
        assert issubclass(IncompatibleType, MalformedInput)


@pytest.mark.unit
class TestRemoveMixin:

    def test_add_then_remove_restores_types(self, tools, node, hints):
        before = list(node.mixin_node_types)
        tools.add_mixin(node, EX.Tagged, hints)
        tools.remove_mixin(node, EX.Tagged, hints)
        assert node.mixin_node_types == before

    def test_remove_absent_mixin(self, tools, node, hints):
        tools.remove_mixin(node, EX.Tagged, hints)
        assert node.mixin_node_types == []

    def test_remove_unknown_type_does_not_define_it(self, tools, session, node, hints):
        tools.remove_mixin(node, EX.Unknown, hints)
        assert not session.node_type_manager.has_node_type("ex:Unknown")

    def test_remove_type_tag_result(self, tools, node, hints):
        tools.add_mixin(node, EX.Tagged, hints)
        assert remove_type_tag(node, "ex:Tagged") is True
        assert remove_type_tag(node, "ex:Tagged") is False
