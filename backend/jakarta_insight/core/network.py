"""
Hashtag / mention network built from tweet documents.

One pass over the posts: every author, hashtag and mention becomes a node,
every author->hashtag and author->mention pair becomes an edge. Nodes and
edges are deduplicated by id; a node's weight grows with its distinct edges
and is capped for display.
"""
from __future__ import annotations

import random
from typing import Iterable, List, Optional

from jakarta_insight.models import GraphEdge, GraphNode, JsonDict, NetworkGraph

MAX_NODE_WEIGHT = 10
LAYOUT_WIDTH = 1200
LAYOUT_HEIGHT = 800

NODE_COLORS = {
    "user": "#6366f1",
    "hashtag": "#22c55e",
    "mention": "#ef4444",
}
EDGE_COLORS = {
    "hashtag": "#22c55e",
    "mention": "#ef4444",
}

NODE_STYLE: JsonDict = {
    "color": "white",
    "padding": "5px",
    "borderRadius": "3px",
    "fontSize": "10px",
    "width": "auto",
    "minWidth": "80px",
    "maxWidth": "120px",
    "textOverflow": "ellipsis",
    "whiteSpace": "nowrap",
    "overflow": "hidden",
    "cursor": "pointer",
}


def node_weight(connections: int) -> int:
    return min(MAX_NODE_WEIGHT, connections + 1)


def _add_node(graph: NetworkGraph, node_id: str, label: str, node_type: str) -> None:
    if node_id not in graph.nodes:
        graph.nodes[node_id] = GraphNode(id=node_id, label=label, type=node_type)


def _add_edge(graph: NetworkGraph, source: str, target: str, edge_type: str) -> None:
    edge_id = f"{source}-{target}-{edge_type}"
    if edge_id in graph.edge_ids:
        return
    graph.edge_ids.add(edge_id)
    graph.edges.append(GraphEdge(id=edge_id, source=source, target=target, type=edge_type))

    for node_id in (source, target):
        if node_id in graph.nodes:
            graph.nodes[node_id].connections += 1


def build_network(posts: Iterable[JsonDict]) -> NetworkGraph:
    """
    Build the deduplicated graph from tweet ``_source`` documents.

    Args:
        posts: Documents with ``username`` and optional ``hastags`` / ``mentions`` lists

    Returns:
        NetworkGraph with nodes keyed by id, in first-seen order
    """
    graph = NetworkGraph()

    for post in posts:
        username = post.get("username")
        user_id = f"user-{username}"
        _add_node(graph, user_id, str(username), "user")

        hashtags = post.get("hastags")
        if isinstance(hashtags, list):
            for hashtag in hashtags:
                hashtag_id = f"hashtag-{hashtag}"
                _add_node(graph, hashtag_id, hashtag, "hashtag")
                _add_edge(graph, user_id, hashtag_id, "hashtag")

        mentions = post.get("mentions")
        if isinstance(mentions, list):
            for mention in mentions:
                mention_id = f"mention-{mention}"
                _add_node(graph, mention_id, mention, "mention")
                _add_edge(graph, user_id, mention_id, "mention")

    return graph


def serialize_network(
    graph: NetworkGraph, region: str, rng: Optional[random.Random] = None
) -> JsonDict:
    """Render the graph as the node/edge payload the force layout consumes."""
    rng = rng or random.Random()

    nodes: List[JsonDict] = []
    for node in graph.nodes.values():
        nodes.append(
            {
                "id": node.id,
                "type": node.type,
                "position": {
                    "x": rng.random() * LAYOUT_WIDTH,
                    "y": rng.random() * LAYOUT_HEIGHT,
                },
                "data": {
                    "label": node.label,
                    "type": node.type,
                    "weight": node_weight(node.connections),
                },
                "style": {"background": NODE_COLORS.get(node.type, NODE_COLORS["mention"]), **NODE_STYLE},
            }
        )

    edges = [
        {
            "id": edge.id,
            "source": edge.source,
            "target": edge.target,
            "animated": True,
            "style": {"stroke": EDGE_COLORS[edge.type]},
        }
        for edge in graph.edges
    ]

    return {
        "nodes": nodes,
        "edges": edges,
        "meta": {
            "region": region,
            "totalNodes": len(nodes),
            "totalEdges": len(edges),
        },
    }


# Related tweets for a clicked node

def classify_term(term: str) -> tuple[str, str]:
    """
    Node type implied by the term prefix, and the term with ``@``/``#`` removed.

    ``@name`` is a user or mention, ``#tag`` a hashtag, anything else a user.
    """
    clean = term.replace("@", "").replace("#", "")
    if term.startswith("@"):
        return "user/mention", clean
    if term.startswith("#"):
        return "hashtag", clean
    return "user", clean


def relation_type(post: JsonDict, node_type: str, clean_term: str) -> str:
    if node_type == "hashtag":
        return "hashtag"
    if clean_term == post.get("username"):
        return "author"
    if clean_term in (post.get("mentions") or []):
        return "mentioned"
    return "unknown"


def reshape_related_tweet(post: JsonDict, node_type: str, clean_term: str) -> JsonDict:
    return {
        "username": post.get("username"),
        "full_text": post.get("full_text"),
        "created_at": post.get("created_at"),
        "topic_classification": post.get("topic_classification") or "Unclassified",
        "sentiment": post.get("sentiment") or "Neutral",
        "urgency_level": post.get("urgency_level") or 0,
        "target_audience": post.get("target_audience") or [],
        "link_post": post.get("link_post"),
        "mentions": ["@" + m.replace("@", "", 1) for m in post.get("mentions") or []],
        "hastags": ["#" + h.replace("#", "", 1) for h in post.get("hastags") or []],
        "relation_type": relation_type(post, node_type, clean_term),
    }


def relation_breakdown(tweets: List[JsonDict]) -> JsonDict:
    return {
        "as_author": sum(1 for t in tweets if t["relation_type"] == "author"),
        "as_mentioned": sum(1 for t in tweets if t["relation_type"] == "mentioned"),
        "in_hashtag": sum(1 for t in tweets if t["relation_type"] == "hashtag"),
    }
