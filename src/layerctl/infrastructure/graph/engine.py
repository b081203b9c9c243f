"""DependencyGraph — NetworkX view over the current definition set.

Edges point from a layer to each layer it depends on. Names referenced
as dependencies but missing from the set still become nodes, flagged
with ``defined=False``, so validation can report them.

Built lazily from the definitions backend and never cached across
updates: call :meth:`invalidate` after replacing the definition set.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

import networkx as nx

if TYPE_CHECKING:
    from layerctl.infrastructure.definitions import DefinitionsBackend

_Graph: TypeAlias = nx.DiGraph


class DependencyGraph:
    """Lazy-loading dependency graph backed by a definitions store."""

    def __init__(self, definitions: DefinitionsBackend) -> None:
        self._definitions = definitions
        self._graph: _Graph | None = None

    @property
    def graph(self) -> _Graph:
        """Return the graph, building it on first access."""
        if self._graph is None:
            self._graph = self._build()
        return self._graph

    def invalidate(self) -> None:
        """Clear the cached graph, forcing rebuild on next access."""
        self._graph = None

    def _build(self) -> _Graph:
        g: _Graph = nx.DiGraph()
        layers = self._definitions.list_layers()
        # Defined layers first so isolated ones are visible too.
        for layer in layers:
            g.add_node(layer.name, defined=True)
        for layer in layers:
            for dependency in layer.dependencies:
                if dependency not in g:
                    g.add_node(dependency, defined=False)
                g.add_edge(layer.name, dependency)
        return g

    def children(self, layer_name: str) -> list[str]:
        """Names of defined layers that directly depend on *layer_name*."""
        g = self.graph
        if layer_name not in g:
            return []
        return sorted(g.predecessors(layer_name))

    def missing(self) -> list[tuple[str, str]]:
        """``(layer, dependency)`` pairs whose dependency is undefined."""
        g = self.graph
        return sorted(
            (source, target) for source, target in g.edges if not g.nodes[target]["defined"]
        )

    def cycles(self) -> list[list[str]]:
        """Elementary dependency cycles, each rotated to start at its smallest name."""
        found: list[list[str]] = []
        for cycle in nx.simple_cycles(self.graph):
            pivot = cycle.index(min(cycle))
            found.append(cycle[pivot:] + cycle[:pivot])
        return sorted(found)
