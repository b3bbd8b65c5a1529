"""Tests for PrefixRegistry."""

import pytest

from arqtab.prefixes import STANDARD_PREFIXES, PrefixRegistry


@pytest.fixture
def ex_registry():
    """Registry holding a single ``ex`` declaration."""
    return PrefixRegistry.from_query("PREFIX ex: <http://example.com/ns#>")


class TestScanning:
    """Test harvesting declarations from query text."""

    def test_scan_single_declaration(self, ex_registry):
        assert ex_registry.has_prefix("ex")
        assert list(ex_registry) == [("ex", "http://example.com/ns#")]

    def test_scan_without_declaration_is_noop(self):
        registry = PrefixRegistry()
        registry.scan_and_register("SELECT ?s WHERE { ?s ?p ?o }")
        assert len(registry) == 0

    def test_only_first_match_per_call(self):
        registry = PrefixRegistry()
        registry.scan_and_register(
            "PREFIX a: <http://a.example/> PREFIX b: <http://b.example/>"
        )
        assert registry.has_prefix("a")
        assert not registry.has_prefix("b")

    def test_from_query_scans_every_line(self):
        text = (
            "PREFIX ex: <http://example.com/ns#>\n"
            "PREFIX foaf: <http://xmlns.com/foaf/0.1/>\n"
            "SELECT * WHERE { ?s foaf:name ?o }\n"
        )
        registry = PrefixRegistry.from_query(text)
        assert [name for name, _ in registry] == ["ex", "foaf"]

    def test_namespace_may_contain_digits(self):
        registry = PrefixRegistry.from_query("PREFIX foaf: <http://xmlns.com/foaf/0.1/>")
        assert registry.compact("<http://xmlns.com/foaf/0.1/name>") == "foaf:name"

    def test_namespace_outside_charset_is_ignored(self):
        registry = PrefixRegistry.from_query("PREFIX ex: <http://example.com/a-b/>")
        assert len(registry) == 0

    def test_has_prefix_is_exact(self, ex_registry):
        assert not ex_registry.has_prefix("e")
        assert not ex_registry.has_prefix("ex:")
        assert "ex" in ex_registry
        assert "other" not in ex_registry


class TestCompact:
    """Test IRI compaction."""

    def test_bracketed_iri(self, ex_registry):
        assert ex_registry.compact("<http://example.com/ns#Foo>") == "ex:Foo"

    def test_bare_iri(self, ex_registry):
        assert ex_registry.compact("http://example.com/ns#Foo") == "ex:Foo"

    def test_namespace_itself(self, ex_registry):
        assert ex_registry.compact("<http://example.com/ns#>") == "ex:"

    def test_no_match_returns_input(self, ex_registry):
        for value in ("<http://other.org/x>", "tyu", "", "ex:Foo", "<>"):
            assert ex_registry.compact(value) == value

    def test_empty_registry_lets_everything_through(self):
        assert PrefixRegistry().compact("<http://example.com/ns#Foo>") == (
            "<http://example.com/ns#Foo>"
        )

    def test_first_registered_namespace_wins(self):
        registry = PrefixRegistry.from_query(
            "PREFIX a: <http://example.com/>\nPREFIX b: <http://example.com/ns#>"
        )
        assert registry.compact("<http://example.com/ns#Foo>") == "a:ns#Foo"

        reversed_registry = PrefixRegistry.from_query(
            "PREFIX b: <http://example.com/ns#>\nPREFIX a: <http://example.com/>"
        )
        assert reversed_registry.compact("<http://example.com/ns#Foo>") == "b:Foo"

    def test_multibyte_local_part(self):
        registry = PrefixRegistry()
        registry.register("ex", "http://example.com/")
        assert registry.compact("<http://example.com/café>") == "ex:café"
        assert registry.compact("<http://example.com/日本>") == "ex:日本"

    def test_standard_prefixes_after_query_prefixes(self):
        registry = PrefixRegistry.from_query("PREFIX r: <http://www.w3.org/1999/02/22>")
        for name, namespace in STANDARD_PREFIXES.items():
            registry.register(name, namespace)
        iri = "<http://www.w3.org/1999/02/22-rdf-syntax-ns#type>"
        assert registry.compact(iri) == "r:-rdf-syntax-ns#type"
        assert registry.compact("<http://www.w3.org/2002/07/owl#Class>") == "owl:Class"
