"""Comment tree reconstruction.

Rebuilds reply trees from a flat list of comment records in a single
forward pass. Parent links are resolved with one dictionary lookup per
record, so corrupt data (dangling or cyclic parent references) can
neither drop records nor loop.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from relay.domain.model.comment import Comment
from relay.domain.value import CommentId


@dataclass
class CommentNode:
    """Node in a comment tree.

    Represents a comment and its direct replies in creation order.
    """

    comment: Comment
    replies: list["CommentNode"] = field(default_factory=list)


def sibling_order(comment: Comment) -> tuple:
    """Sort key for siblings: creation time, then id for ties."""
    return (comment.created_at, str(comment.id))


def build_tree(records: Iterable[Comment]) -> list[CommentNode]:
    """Build a forest of comment trees from flat records.

    All records must belong to the same thread; the caller filters by
    thread. Deleted and frozen records are kept, filtering them is a
    rendering concern.

    Algorithm:
    1. Sort records by (created_at, id) ascending
    2. Walk the sorted records once, keeping a map of placed nodes
    3. Attach a node under its parent when the parent is already placed
       and does not itself claim the node as its parent
    4. Otherwise the node becomes a root

    A node can only become a reply to a node placed before it, so the
    result is always a forest. A record whose parent is missing from the
    input (another page, another thread, hard deleted) becomes a root, as
    do both records of a two-record parent cycle.

    Args:
        records: Flat comment records of one thread, in any order

    Returns:
        Root nodes in creation order, with replies populated
    """
    ordered = sorted(records, key=sibling_order)
    assert len({c.thread_id for c in ordered}) <= 1, "records span threads"

    placed: dict[CommentId, CommentNode] = {}
    roots: list[CommentNode] = []

    for comment in ordered:
        node = CommentNode(comment=comment)
        parent = placed.get(comment.parent_id) if comment.parent_id else None
        if parent is not None and parent.comment.parent_id != comment.id:
            parent.replies.append(node)
        else:
            roots.append(node)
        placed[comment.id] = node

    return roots


def iter_tree(roots: list[CommentNode]) -> Iterator[tuple[CommentNode, int]]:
    """Walk a forest depth-first in sibling order.

    Iterative, so arbitrarily deep reply chains are safe.

    Yields:
        (node, depth) pairs, depth 0 for roots
    """
    stack = [(node, 0) for node in reversed(roots)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((reply, depth + 1) for reply in reversed(node.replies))


def count_nodes(roots: list[CommentNode]) -> int:
    """Count all nodes in a forest."""
    return sum(1 for _ in iter_tree(roots))
