"""Diagram graph: wraps node/arrow snapshots in a networkx DiGraph.

Layout and cycle handling work on this structure. Node insertion order and
successor order follow the input order of nodes and arrows, which keeps every
downstream traversal deterministic.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import networkx as nx

from diagram_geometry.ir.model import Arrow, Node

logger = logging.getLogger(__name__)


class DiagramGraph:
    """Directed dependency graph built from a diagram snapshot.

    Each graph node carries its ``Node`` under the ``data`` attribute and each
    edge the list of arrow ids that produced it under ``arrows``.
    """

    def __init__(self, digraph: nx.DiGraph, order: list[str]) -> None:
        self.digraph = digraph
        self.order = order

    @classmethod
    def from_snapshot(cls, nodes: Iterable[Node], arrows: Iterable[Arrow]) -> DiagramGraph:
        """Build a DiagramGraph, dropping dangling arrows and self-loops."""
        digraph: nx.DiGraph = nx.DiGraph()
        order: list[str] = []
        for node in nodes:
            if node.id not in digraph:
                order.append(node.id)
            digraph.add_node(node.id, data=node)

        for arrow in arrows:
            src, tgt = arrow.source_id, arrow.target_id
            if src not in digraph or tgt not in digraph:
                logger.debug("Dropping arrow %s: endpoint not in node set", arrow.id)
                continue
            if src == tgt:
                continue
            if digraph.has_edge(src, tgt):
                digraph.edges[src, tgt]["arrows"].append(arrow.id)
            else:
                digraph.add_edge(src, tgt, arrows=[arrow.id])

        return cls(digraph=digraph, order=order)

    def node(self, node_id: str) -> Node:
        return self.digraph.nodes[node_id]["data"]

    def nodes(self) -> list[Node]:
        return [self.node(nid) for nid in self.order]

    def is_dag(self) -> bool:
        return nx.is_directed_acyclic_graph(self.digraph)

    def node_count(self) -> int:
        return self.digraph.number_of_nodes()

    def edge_count(self) -> int:
        return self.digraph.number_of_edges()

    def in_degree(self, node_id: str) -> int:
        if node_id not in self.digraph:
            return 0
        return self.digraph.in_degree(node_id)

    def out_degree(self, node_id: str) -> int:
        if node_id not in self.digraph:
            return 0
        return self.digraph.out_degree(node_id)

    def degree(self, node_id: str) -> int:
        return self.in_degree(node_id) + self.out_degree(node_id)

    def arrow_degree(self, node_id: str) -> int:
        """Incoming plus outgoing arrows, counting parallel arrows separately."""
        if node_id not in self.digraph:
            return 0
        edges = list(self.digraph.in_edges(node_id, data="arrows")) + list(
            self.digraph.out_edges(node_id, data="arrows")
        )
        return sum(len(arrows) for _, _, arrows in edges)

    def successors(self, node_id: str) -> list[str]:
        return list(self.digraph.successors(node_id))

    def roots(self) -> list[str]:
        """Nodes without incoming edges, in input order."""
        return [nid for nid in self.order if self.digraph.in_degree(nid) == 0]
