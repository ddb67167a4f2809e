"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .comment_tree import CommentNode, build_tree, count_nodes, iter_tree
from .fanout_service import FanoutService
from .jwt_service import JWTService
from .read_ledger_service import ReadLedgerService
from .realtime import Channel, ConnectionRegistry, push_live

__all__ = [
    "Channel",
    "CommentNode",
    "CommentService",
    "ConnectionRegistry",
    "FanoutService",
    "JWTService",
    "ReadLedgerService",
    "Service",
    "build_tree",
    "count_nodes",
    "iter_tree",
    "push_live",
]
