from datetime import date
from typing import Generic, Optional, TypeVar

T = TypeVar('T')


class _SpanNode(Generic[T]):
    """Tree node for one inclusive date span; max_end covers the whole subtree."""
    __slots__ = ['start', 'end', 'item', 'seq', 'left', 'right', 'max_end', 'height']

    def __init__(self, start: date, end: date, item: T, seq: int):
        self.start = start
        self.end = end
        self.item = item
        self.seq = seq
        self.left: Optional['_SpanNode[T]'] = None
        self.right: Optional['_SpanNode[T]'] = None
        self.max_end = end
        self.height = 1


class DateSpanIndex(Generic[T]):
    """
    AVL interval tree over inclusive [start, end] date spans.

    Queries return items in insertion order, so callers that rely on the
    order events were supplied in (bar stacking) get a stable result.
    """

    def __init__(self):
        self._root: Optional[_SpanNode[T]] = None
        self._count = 0

    def __len__(self) -> int:
        return self._count

    # --- Balancing ---

    @staticmethod
    def _height(node: Optional[_SpanNode[T]]) -> int:
        return node.height if node else 0

    def _refresh(self, node: _SpanNode[T]):
        node.height = 1 + max(self._height(node.left), self._height(node.right))
        node.max_end = node.end
        for child in (node.left, node.right):
            if child and child.max_end > node.max_end:
                node.max_end = child.max_end

    def _rotate_left(self, node: _SpanNode[T]) -> _SpanNode[T]:
        pivot = node.right
        node.right = pivot.left
        pivot.left = node
        self._refresh(node)
        self._refresh(pivot)
        return pivot

    def _rotate_right(self, node: _SpanNode[T]) -> _SpanNode[T]:
        pivot = node.left
        node.left = pivot.right
        pivot.right = node
        self._refresh(node)
        self._refresh(pivot)
        return pivot

    def _balance(self, node: _SpanNode[T]) -> _SpanNode[T]:
        self._refresh(node)
        skew = self._height(node.left) - self._height(node.right)
        if skew > 1:
            if self._height(node.left.left) < self._height(node.left.right):
                node.left = self._rotate_left(node.left)
            return self._rotate_right(node)
        if skew < -1:
            if self._height(node.right.right) < self._height(node.right.left):
                node.right = self._rotate_right(node.right)
            return self._rotate_left(node)
        return node

    def _insert(self, node: Optional[_SpanNode[T]], new: _SpanNode[T]) -> _SpanNode[T]:
        if node is None:
            return new
        if new.start < node.start:
            node.left = self._insert(node.left, new)
        else:
            node.right = self._insert(node.right, new)
        return self._balance(node)

    # --- Public API ---

    def add(self, start: date, end: date, item: T):
        """Index `item` over the inclusive span [start, end]."""
        if end < start:
            raise ValueError(f"Span ends before it starts: {start} > {end}")
        self._root = self._insert(self._root, _SpanNode(start, end, item, self._count))
        self._count += 1

    def intersecting(self, start: date, end: date) -> list[T]:
        """Items whose span shares at least one day with [start, end]."""
        found: list[_SpanNode[T]] = []
        stack = [self._root] if self._root else []
        while stack:
            node = stack.pop()
            if node.max_end < start:
                continue
            if node.left:
                stack.append(node.left)
            if node.start <= end:
                if node.end >= start:
                    found.append(node)
                if node.right:
                    stack.append(node.right)
        found.sort(key=lambda n: n.seq)
        return [n.item for n in found]

    def covering(self, day: date) -> list[T]:
        """Items whose span includes `day`."""
        return self.intersecting(day, day)

    def check_balance(self) -> int:
        """Return the tree height; raise RuntimeError if the AVL or max_end invariants are broken."""
        def _walk(node):
            if not node:
                return 0, date.min
            left_h, left_max = _walk(node.left)
            right_h, right_max = _walk(node.right)
            if abs(left_h - right_h) > 1:
                raise RuntimeError(f"AVL violation at {node.start}")
            expected = max(node.end, left_max, right_max)
            if node.max_end != expected:
                raise RuntimeError(f"max_end violation at {node.start}")
            return 1 + max(left_h, right_h), expected
        return _walk(self._root)[0]
