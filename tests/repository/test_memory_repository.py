"""
Tests for the in-memory store: namespace registry, node types, nodes and
workspaces.
"""

import pytest

from fixtures import EX
from repository_rdf.constants import Namespaces
from repository_rdf.core import NamespaceRegistryError, NodeNotFoundError, StoreOperationFailed, ValueFormatError
from repository_rdf.repository import InMemoryRepository
from repository_rdf.shared.models import NodeType, PropertyDefinition, PropertyType, Value


@pytest.mark.unit
class TestNamespaceRegistry:

    def test_builtin_prefixes(self, registry):
        assert registry.get_uri("jcr") == Namespaces.JCR
        assert registry.get_prefix(Namespaces.NT) == "nt"
        assert set(registry.get_prefixes()) >= {"", "jcr", "nt", "mix", "xml"}

    def test_register_namespace(self, registry):
        registry.register_namespace("ex", str(EX))
        assert registry.is_registered_uri(str(EX))
        assert registry.get_prefix(str(EX)) == "ex"

    def test_reregistering_same_binding(self, registry):
        registry.register_namespace("ex", str(EX))
        registry.register_namespace("ex", str(EX))
        assert registry.get_prefixes().count("ex") == 1

    def test_new_prefix_replaces_old_one(self, registry):
        registry.register_namespace("ex", str(EX))
        registry.register_namespace("ex2", str(EX))
        assert registry.get_prefix(str(EX)) == "ex2"
        assert not registry.is_registered_prefix("ex")

    @pytest.mark.parametrize("prefix", ["", "xml", "xmlfoo", "XMLish", "a:b"])
    def test_illegal_prefix(self, registry, prefix):
        with pytest.raises(NamespaceRegistryError) as exc_info:
            registry.register_namespace(prefix, str(EX))
        assert exc_info.value.prefix == prefix

    def test_prefix_bound_to_another_uri(self, registry):
        registry.register_namespace("ex", str(EX))
        with pytest.raises(NamespaceRegistryError):
            registry.register_namespace("ex", "http://other.org/")

    def test_builtin_namespace_cannot_be_remapped(self, registry):
        with pytest.raises(NamespaceRegistryError):
            registry.register_namespace("jcr", "http://other.org/")

    def test_generated_prefixes(self, registry):
        assert registry.register_uri("http://one.org/") == "ns001"
        assert registry.register_uri("http://two.org/") == "ns002"
        assert registry.register_uri("http://one.org/") == "ns001"

    def test_generated_prefix_skips_taken_names(self, registry):
        registry.register_namespace("ns001", "http://taken.org/")
        assert registry.register_uri("http://one.org/") == "ns002"

    def test_unregister(self, registry):
        registry.register_namespace("ex", str(EX))
        registry.unregister_namespace("ex")
        assert not registry.is_registered_uri(str(EX))

    def test_unregister_builtin(self, registry):
        with pytest.raises(NamespaceRegistryError):
            registry.unregister_namespace("jcr")

    def test_unknown_prefix(self, registry):
        with pytest.raises(NamespaceRegistryError):
            registry.get_uri("missing")


@pytest.mark.unit
class TestNodeTypeManager:

    def test_prefix_must_be_registered(self, session):
        with pytest.raises(NamespaceRegistryError):
            session.node_type_manager.register_node_type(NodeType.mixin("ex:Tagged"))

    def test_duplicate_registration(self, session, registry):
        registry.register_namespace("ex", str(EX))
        manager = session.node_type_manager
        manager.register_node_type(NodeType.mixin("ex:Tagged"))
        with pytest.raises(StoreOperationFailed):
            manager.register_node_type(NodeType.mixin("ex:Tagged"))
        updated = manager.register_node_type(NodeType("ex:Tagged", is_mixin=True, is_queryable=False), allow_update=True)
        assert manager.get_node_type("ex:Tagged") is updated

    def test_unknown_type(self, session):
        with pytest.raises(StoreOperationFailed):
            session.node_type_manager.get_node_type("ex:Missing")

    def test_builtin_types(self, session):
        names = {t.name for t in session.node_type_manager.get_all_node_types()}
        assert {"nt:base", "nt:unstructured", "nt:frozenNode", "mix:referenceable"} <= names


@pytest.mark.unit
class TestNodes:

    def test_root_node(self, session):
        assert session.root_node.path == "/"
        assert session.get_node("/") is session.root_node

    def test_add_node_creates_ancestors(self, session):
        session.add_node("/a/b/c")
        assert session.node_exists("/a")
        assert session.node_exists("/a/b")
        assert [n.path for n in session.get_nodes()] == ["/", "/a", "/a/b", "/a/b/c"]

    def test_duplicate_node(self, session, node):
        with pytest.raises(StoreOperationFailed):
            session.add_node("/books/1")

    def test_mixin_as_primary_type(self, session):
        with pytest.raises(StoreOperationFailed):
            session.add_node("/x", "mix:referenceable")

    def test_missing_node(self, session):
        with pytest.raises(NodeNotFoundError) as exc_info:
            session.get_node("/missing")
        assert exc_info.value.path == "/missing"

    def test_lookup_by_identifier(self, session, node):
        assert session.get_node_by_identifier(node.identifier) is node
        with pytest.raises(NodeNotFoundError):
            session.get_node_by_identifier("no-such-id")

    def test_get_or_add_node(self, session, node):
        assert session.get_or_add_node("/books/1") is node
        assert session.get_or_add_node("/books/3").path == "/books/3"

    def test_supertypes_count_as_node_types(self, node):
        assert node.is_node_type("nt:unstructured")
        assert node.is_node_type("nt:base")
        assert not node.is_node_type("nt:frozenNode")

    def test_declared_type_is_enforced(self, session, node):
        node.add_mixin("mix:created")
        with pytest.raises(ValueFormatError):
            node.set_property("jcr:created", [Value(PropertyType.STRING, "yesterday")])

    def test_single_valued_property_takes_one_value(self, session, node):
        node.add_mixin("mix:created")
        with pytest.raises(StoreOperationFailed):
            node.set_property("jcr:created", [Value(PropertyType.DATE, None), Value(PropertyType.DATE, None)])

    def test_empty_values_remove_property(self, node):
        node.set_property("ex:title", [Value(PropertyType.STRING, "A")], multiple=True)
        node.set_property("ex:title", [])
        assert not node.has_property("ex:title")

    def test_property_name_parts(self, registry, node):
        registry.register_namespace("ex", str(EX))
        prop = node.set_property("ex:title", [Value(PropertyType.STRING, "A")])
        assert prop.prefix == "ex"
        assert prop.local_name == "title"
        assert prop.namespace_uri == str(EX)
        assert prop.value == Value(PropertyType.STRING, "A")

    def test_remove_mixin_not_carried(self, node):
        with pytest.raises(StoreOperationFailed):
            node.remove_mixin("mix:referenceable")


@pytest.mark.unit
class TestWorkspaces:

    def test_default_workspace(self, repository):
        assert repository.workspace_names() == ["default"]

    def test_create_and_delete(self, repository):
        repository.create_workspace("archive")
        assert repository.login("archive").workspace_name == "archive"
        repository.delete_workspace("archive")
        assert "archive" not in repository.workspace_names()

    def test_delete_unknown_workspace(self, repository):
        with pytest.raises(NodeNotFoundError):
            repository.delete_workspace("junk")

    def test_login_unknown_workspace(self, repository):
        with pytest.raises(NodeNotFoundError):
            repository.login("junk")

    def test_duplicate_workspace(self, repository):
        with pytest.raises(StoreOperationFailed):
            repository.create_workspace("default")

    def test_workspaces_share_namespaces(self):
        repository = InMemoryRepository(workspaces=["default", "archive"])
        repository.login("default").namespace_registry.register_namespace("ex", str(EX))
        assert repository.login("archive").namespace_registry.get_prefix(str(EX)) == "ex"

    def test_workspaces_hold_separate_nodes(self):
        repository = InMemoryRepository(workspaces=["default", "archive"])
        repository.login("default").add_node("/a")
        assert not repository.login("archive").node_exists("/a")
        assert repository.login("default").node_exists("/a")
