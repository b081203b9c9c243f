"""Tests for DependencyGraph."""

from __future__ import annotations

from pathlib import Path

from layerctl.domain.layers import LayerDefinition
from layerctl.infrastructure.definitions import FileDefinitionsBackend
from layerctl.infrastructure.graph.engine import DependencyGraph


def _graph(tmp_path: Path, layers: list[LayerDefinition]) -> DependencyGraph:
    backend = FileDefinitionsBackend(tmp_path / "definitions.json")
    backend.update_layers(layers)
    return DependencyGraph(backend)


class TestBuild:
    def test_isolated_layers_are_nodes(self, tmp_path: Path) -> None:
        g = _graph(tmp_path, [LayerDefinition(name="a"), LayerDefinition(name="b")])
        assert set(g.graph.nodes) == {"a", "b"}
        assert g.graph.number_of_edges() == 0

    def test_edges_point_at_dependencies(self, tmp_path: Path) -> None:
        g = _graph(
            tmp_path,
            [LayerDefinition(name="a"), LayerDefinition(name="b", dependencies=["a"])],
        )
        assert g.graph.has_edge("b", "a")

    def test_undefined_dependency_flagged(self, tmp_path: Path) -> None:
        g = _graph(tmp_path, [LayerDefinition(name="a", dependencies=["ghost"])])
        assert g.graph.nodes["ghost"]["defined"] is False
        assert g.graph.nodes["a"]["defined"] is True

    def test_invalidate_rebuilds(self, tmp_path: Path) -> None:
        backend = FileDefinitionsBackend(tmp_path / "definitions.json")
        backend.update_layers([LayerDefinition(name="a")])
        g = DependencyGraph(backend)
        assert set(g.graph.nodes) == {"a"}
        backend.update_layers([LayerDefinition(name="b")])
        assert set(g.graph.nodes) == {"a"}
        g.invalidate()
        assert set(g.graph.nodes) == {"b"}


class TestQueries:
    def test_children(self, tmp_path: Path) -> None:
        g = _graph(
            tmp_path,
            [
                LayerDefinition(name="vpc"),
                LayerDefinition(name="eks", dependencies=["vpc"]),
                LayerDefinition(name="rds", dependencies=["vpc"]),
                LayerDefinition(name="app", dependencies=["eks"]),
            ],
        )
        assert g.children("vpc") == ["eks", "rds"]
        assert g.children("app") == []
        assert g.children("unknown") == []

    def test_missing(self, tmp_path: Path) -> None:
        g = _graph(
            tmp_path,
            [
                LayerDefinition(name="b", dependencies=["y"]),
                LayerDefinition(name="a", dependencies=["x", "b"]),
            ],
        )
        assert g.missing() == [("a", "x"), ("b", "y")]

    def test_cycles(self, tmp_path: Path) -> None:
        g = _graph(
            tmp_path,
            [
                LayerDefinition(name="b", dependencies=["c"]),
                LayerDefinition(name="c", dependencies=["a"]),
                LayerDefinition(name="a", dependencies=["b"]),
                LayerDefinition(name="s", dependencies=["s"]),
            ],
        )
        assert g.cycles() == [["a", "b", "c"], ["s"]]

    def test_acyclic(self, tmp_path: Path) -> None:
        g = _graph(
            tmp_path,
            [LayerDefinition(name="a"), LayerDefinition(name="b", dependencies=["a"])],
        )
        assert g.cycles() == []
