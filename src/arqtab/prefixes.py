"""Prefix declarations harvested from SPARQL query text.

A :class:`PrefixRegistry` collects ``PREFIX name: <namespace>`` lines from
the query that produced a result set and uses them to turn full IRIs
back into ``name:local`` form for display.

Usage:
    from arqtab.prefixes import PrefixRegistry

    registry = PrefixRegistry.from_query(query_text)
    registry.compact("<http://example.com/ns#Foo>")  # "ex:Foo"
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

logger = logging.getLogger(__name__)

PREFIX_PATTERN = re.compile(r"PREFIX (\w+): <([A-Za-z0-9/:#.]+)>")

STANDARD_PREFIXES: dict[str, str] = {
    "rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#",
    "rdfs": "http://www.w3.org/2000/01/rdf-schema#",
    "owl": "http://www.w3.org/2002/07/owl#",
    "xsd": "http://www.w3.org/2001/XMLSchema#",
    "skos": "http://www.w3.org/2004/02/skos/core#",
    "dc": "http://purl.org/dc/elements/1.1/",
    "dcterms": "http://purl.org/dc/terms/",
    "foaf": "http://xmlns.com/foaf/0.1/",
    "schema": "https://schema.org/",
    "prov": "http://www.w3.org/ns/prov#",
}


class PrefixRegistry:
    """Ordered list of ``(prefix, namespace)`` pairs.

    Registration order is significant: when several namespaces match an
    IRI, the one registered first is used.
    """

    def __init__(self) -> None:
        self._pairs: list[tuple[str, str]] = []

    @classmethod
    def from_query(cls, text: str) -> PrefixRegistry:
        """Build a registry by scanning ``text`` one line at a time."""
        registry = cls()
        for line in text.splitlines():
            registry.scan_and_register(line)
        return registry

    def scan_and_register(self, text: str) -> None:
        """Register the first ``PREFIX`` declaration found in ``text``.

        Only one declaration is captured per call. Text without a
        declaration is ignored.
        """
        match = PREFIX_PATTERN.search(text)
        if match is None:
            return
        self.register(match.group(1), match.group(2))

    def register(self, name: str, namespace: str) -> None:
        """Append a declaration without scanning."""
        logger.debug("%s - %s", name, namespace)
        self._pairs.append((name, namespace))

    def has_prefix(self, name: str) -> bool:
        """Return True if ``name`` is a registered prefix."""
        return any(prefix == name for prefix, _ in self._pairs)

    def compact(self, iri: str) -> str:
        """Shorten ``iri`` to ``prefix:local`` form.

        ``iri`` may be written ``<...>`` or bare. The input is returned
        unchanged when no registered namespace matches.
        """
        interior = iri[1:] if iri.startswith("<") else iri
        if interior.endswith(">"):
            interior = interior[:-1]
        for prefix, namespace in self._pairs:
            if interior.startswith(namespace):
                return f"{prefix}:{interior[len(namespace):]}"
        return iri

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has_prefix(name)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(list(self._pairs))

    def __len__(self) -> int:
        return len(self._pairs)

    def __repr__(self) -> str:
        return f"PrefixRegistry({self._pairs!r})"
