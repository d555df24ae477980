"""Shared test fixtures for dot-builder."""

import pytest

from dot_builder.graph import digraph, graph
from dot_builder.models import RootGraph


@pytest.fixture
def directed() -> RootGraph:
    """Return an empty anonymous digraph."""
    return digraph()


@pytest.fixture
def undirected() -> RootGraph:
    """Return an empty anonymous undirected graph."""
    return graph()


@pytest.fixture
def ranked_graph() -> RootGraph:
    """Return an undirected graph holding one rank=same subgraph."""
    g = graph()
    sub = g.subgraph()
    sub.set(rank="same")
    for name in ("A1", "A2", "A3"):
        sub.node(name)
    return g
