"""
File: jakarta_insight/models.py
Internal data structures used while reshaping search results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Set


JsonDict = Dict[str, Any]


@dataclass
class GraphNode:
    """A user, hashtag or mention in the social network graph.

    ``connections`` counts distinct edges touching the node.
    """

    id: str
    label: str
    type: str  # "user" | "hashtag" | "mention"
    connections: int = 0


@dataclass
class GraphEdge:
    id: str
    source: str
    target: str
    type: str  # "hashtag" | "mention"


@dataclass
class NetworkGraph:
    nodes: Dict[str, GraphNode] = field(default_factory=dict)
    edges: List[GraphEdge] = field(default_factory=list)
    edge_ids: Set[str] = field(default_factory=set)


@dataclass
class User:
    username: str
    role: str

    def as_dict(self) -> JsonDict:
        return {"username": self.username, "role": self.role}


__all__ = ["GraphNode", "GraphEdge", "NetworkGraph", "User", "JsonDict"]
