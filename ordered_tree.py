from __future__ import annotations
import logging
from collections import deque
from typing import Any, Iterable, Iterator, List, Optional, Tuple

log = logging.getLogger(__name__)


class TreeNode:
    __slots__ = ("_value", "left", "right")

    def __init__(self, value: Any) -> None:
        self._value = value
        self.left: Optional["TreeNode"] = None
        self.right: Optional["TreeNode"] = None

    @property
    def value(self) -> Any:
        return self._value


class OrderedTree:
    """
    Unbalanced binary search tree over totally-ordered values.

    API:
        t = OrderedTree.initialize([8, 5, 12])
        t.add(value)               -> None, duplicates go to the right
        t.contains(value)          -> True if present (also `value in t`)
        t.remove(value)            -> True if removed, False if absent
        t.count()                  -> number of stored values (also len(t))
        t.find_with_parent(value)  -> (node, parent), node is None if absent
        t.in_order() / t.pre_order() / t.post_order() -> lazy generators
        iter(t)                    -> fresh post-order snapshot per call

    Invariants:
        - left subtree < node <= right subtree
        - count() == number of reachable nodes
    Not safe for concurrent use; serialize access externally.
    """

    def __init__(self) -> None:
        self._root: Optional[TreeNode] = None
        self._count = 0

    @staticmethod
    def initialize(values: Iterable[Any] = ()) -> "OrderedTree":
        tree = OrderedTree()
        for value in values:
            tree.add(value)
        return tree

    # ---------------------------- public ops ---------------------------------

    def add(self, value: Any) -> None:
        """Insert value below the first empty slot on its search path."""
        self._count += 1
        if self._root is None:
            self._root = TreeNode(value)
            return

        cur = self._root
        while True:
            go_left = value < cur.value
            child = cur.left if go_left else cur.right
            if child is None:
                if go_left:
                    cur.left = TreeNode(value)
                else:
                    cur.right = TreeNode(value)
                return
            cur = child

    def find_with_parent(
        self, value: Any
    ) -> Tuple[Optional[TreeNode], Optional[TreeNode]]:
        """Return (node, parent); node is None if value is absent."""
        parent: Optional[TreeNode] = None
        cur = self._root
        while cur is not None:
            if value < cur.value:
                parent, cur = cur, cur.left
            elif value > cur.value:
                parent, cur = cur, cur.right
            else:
                break
        return cur, parent

    def contains(self, value: Any) -> bool:
        node, _ = self.find_with_parent(value)
        return node is not None

    def __contains__(self, value: Any) -> bool:
        return self.contains(value)

    def remove(self, value: Any) -> bool:
        """Remove one occurrence of value. Returns False if it is absent."""
        cur, parent = self.find_with_parent(value)
        if cur is None:
            log.debug("remove(%r): not found", value)
            return False

        self._count -= 1

        # Case A: no right child, left child moves up
        if cur.right is None:
            replacement = cur.left
            case = "A"

        # Case B: right child has no left child, it adopts cur.left
        elif cur.right.left is None:
            replacement = cur.right
            replacement.left = cur.left
            case = "B"

        # Case C: splice out the left-most node of the right subtree
        else:
            left_most_parent = cur.right
            left_most = left_most_parent.left
            assert left_most is not None
            while left_most.left is not None:
                left_most_parent = left_most
                left_most = left_most.left

            left_most_parent.left = left_most.right
            left_most.left = cur.left
            left_most.right = cur.right
            replacement = left_most
            case = "C"

        self._replace_child(parent, cur, replacement)
        log.debug(
            "remove(%r): case %s, root %s",
            value, case, "replaced" if parent is None else "kept",
        )
        return True

    def count(self) -> int:
        return self._count

    def __len__(self) -> int:
        return self._count

    # ---------------------------- traversal ----------------------------------

    def in_order(self) -> Iterator[Any]:
        stack: List[TreeNode] = []
        cur = self._root
        while stack or cur is not None:
            while cur is not None:
                stack.append(cur)
                cur = cur.left
            cur = stack.pop()
            yield cur.value
            cur = cur.right

    def pre_order(self) -> Iterator[Any]:
        if self._root is None:
            return
        stack = [self._root]
        while stack:
            cur = stack.pop()
            yield cur.value
            # right first so that left is visited first
            if cur.right is not None:
                stack.append(cur.right)
            if cur.left is not None:
                stack.append(cur.left)

    def post_order(self) -> Iterator[Any]:
        stack: List[TreeNode] = []
        last: Optional[TreeNode] = None
        cur = self._root
        while stack or cur is not None:
            if cur is not None:
                stack.append(cur)
                cur = cur.left
                continue
            top = stack[-1]
            if top.right is not None and top.right is not last:
                cur = top.right
            else:
                yield top.value
                last = stack.pop()

    def __iter__(self) -> Iterator[Any]:
        """Snapshot the tree in post-order; each call walks it again."""
        buffer: deque = deque(self.post_order())
        return iter(buffer)

    # ---------------------------- helpers ------------------------------------

    def _replace_child(
        self,
        parent: Optional[TreeNode],
        old: TreeNode,
        new: Optional[TreeNode],
    ) -> None:
        """
        Put `new` in the slot `old` occupied under `parent`.
        Pre: parent never compares equal to old (search stops at first match).
        """
        if parent is None:
            self._root = new
        elif parent.value > old.value:
            parent.left = new
        else:
            parent.right = new
