"""
AVL interval tree.

Intervals are closed, [start, end], and keyed by start. Every node also
records the largest end in its subtree (max_end) so a search can skip whole
subtrees. The layout engine keeps one tree per display column and asks it
whether a new event's rows intersect anything already placed there.

Inverted intervals (end < start) are stored as given and only meet queries
that reach from their end to their start.
"""

from typing import Generic, Optional, TypeVar

# T represents the totally ordered coordinate type (rows, datetimes, ...)
T = TypeVar('T')


class _Node(Generic[T]):
    __slots__ = ['start', 'end', 'left', 'right', 'max_end', 'height']

    def __init__(self, start: T, end: T):
        self.start: T = start
        self.end: T = end
        self.left: Optional['_Node[T]'] = None
        self.right: Optional['_Node[T]'] = None
        self.max_end: T = end
        self.height: int = 1


def _height(node: Optional[_Node]) -> int:
    return node.height if node else 0


def _update(node: _Node) -> _Node:
    node.height = 1 + max(_height(node.left), _height(node.right))
    node.max_end = max(
        [node.end] + [child.max_end for child in (node.left, node.right) if child]
    )
    return node


def _rotate_left(top: _Node) -> _Node:
    pivot = top.right
    top.right, pivot.left = pivot.left, top
    _update(top)
    return _update(pivot)


def _rotate_right(top: _Node) -> _Node:
    pivot = top.left
    top.left, pivot.right = pivot.right, top
    _update(top)
    return _update(pivot)


def _balance(node: _Node) -> _Node:
    _update(node)
    skew = _height(node.left) - _height(node.right)
    if skew > 1:
        if _height(node.left.right) > _height(node.left.left):
            node.left = _rotate_left(node.left)
        return _rotate_right(node)
    if skew < -1:
        if _height(node.right.left) > _height(node.right.right):
            node.right = _rotate_right(node.right)
        return _rotate_left(node)
    return node


class IntervalTree(Generic[T]):
    def __init__(self):
        self.root: Optional[_Node[T]] = None

    def insert(self, start: T, end: T) -> None:
        """Store the closed interval [start, end]."""
        def _insert(node):
            if node is None:
                return _Node(start, end)
            if start < node.start:
                node.left = _insert(node.left)
            else:
                node.right = _insert(node.right)
            return _balance(node)
        self.root = _insert(self.root)

    def any_intersecting(self, start: T, end: T) -> bool:
        """True if any stored interval shares a point with [start, end]."""
        pending = [self.root] if self.root else []
        while pending:
            node = pending.pop()
            if node.max_end < start:
                continue
            if node.start <= end and node.end >= start:
                return True
            if node.left:
                pending.append(node.left)
            # Right subtree starts at or after node.start
            if node.right and node.start <= end:
                pending.append(node.right)
        return False
