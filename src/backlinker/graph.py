"""Link graph projection built with :mod:`networkx`.

Every note becomes a node keyed by its canonical key, and every backlink an
edge from the linking note to the linked note (parallel edges are kept, one
per occurrence).  Used for ``--graph`` export and ``--stats``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

import networkx as nx

if TYPE_CHECKING:
    from backlinker.resolver import NoteResolver


def build_link_graph(resolver: "NoteResolver") -> nx.MultiDiGraph:
    G: nx.MultiDiGraph = nx.MultiDiGraph()
    for note in resolver:
        G.add_node(note.key, title=note.title, name=note.original_name, stub=note.is_stub)
    for note in resolver:
        for backlink in note.backlinks:
            G.add_edge(backlink.source.key, note.key, context=backlink.context)
    return G


def find_orphans(G: nx.MultiDiGraph) -> list[str]:
    """Return keys of notes with no links in or out, sorted."""
    return sorted(node for node in G.nodes if G.degree(node) == 0)


def graph_stats(G: nx.MultiDiGraph) -> dict[str, Any]:
    stubs = [node for node, is_stub in G.nodes(data="stub") if is_stub]
    most_linked = sorted(G.nodes, key=lambda node: (-G.in_degree(node), node))[:5]
    return {
        "notes": G.number_of_nodes(),
        "stubs": len(stubs),
        "links": G.number_of_edges(),
        "linked_pairs": nx.DiGraph(G).number_of_edges(),
        "orphans": len(find_orphans(G)),
        "most_linked": [(node, G.in_degree(node)) for node in most_linked if G.in_degree(node)],
    }


def export_graph(G: nx.MultiDiGraph, output_path: Path) -> None:
    """Write *G* as node-link JSON to *output_path*."""
    data = nx.node_link_data(G, edges="links")
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2)
