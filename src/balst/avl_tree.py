"""
Balanced search tree - an ordered key/value map backed by an AVL tree.

Keys are unique and compared with ``<``; values are opaque. After every
insert and remove the tree is rebalanced so that, at every node, the heights
of the two subtrees differ by at most one.

Heights are never cached: they are recomputed by walking the subtree each
time they are needed.
"""

import sys
from abc import abstractmethod
from collections import deque
from typing import (
    Any,
    Deque,
    Generic,
    Iterator,
    List,
    Literal,
    Optional,
    Protocol,
    TextIO,
    Tuple,
    TypeVar,
)

from .exceptions import DuplicateKeyError, IllegalNullKeyError, KeyNotFoundError


class Comparable(Protocol):
    @abstractmethod
    def __lt__(self, other: Any, /) -> bool: ...


K = TypeVar('K', bound=Comparable)
V = TypeVar('V')

RebalanceStrategy = Literal["full", "path"]

PRINT_INDENT = 5


class BALST(Generic[K, V]):
    class Node:
        def __init__(self, key: K, value: V) -> None:
            self.key: K = key
            self.value: V = value
            self.left: Optional['BALST.Node'] = None
            self.right: Optional['BALST.Node'] = None
            # not maintained; see _height
            self.height: int = 0

    def __init__(self, rebalance: RebalanceStrategy = "full") -> None:
        """
        Create an empty tree.

        Args:
            rebalance: 'full' re-examines every node after each mutation,
                'path' only the nodes on the path walked by the mutation.
                Both build the same tree.
        """
        if rebalance not in ("full", "path"):
            raise ValueError(f"rebalance must be 'full' or 'path', got {rebalance!r}")
        self.rebalance: RebalanceStrategy = rebalance
        self._root: Optional[BALST.Node] = None
        self._num_keys: int = 0

    # --- rotations ---

    def _rotate_right(self, grandparent: Node) -> Node:
        parent = grandparent.left
        assert parent is not None

        grandparent.left = parent.right
        parent.right = grandparent

        return parent

    def _rotate_left(self, grandparent: Node) -> Node:
        parent = grandparent.right
        assert parent is not None

        grandparent.right = parent.left
        parent.left = grandparent

        return parent

    def _rotate_left_right(self, grandparent: Node) -> Node:
        parent = grandparent.left
        assert parent is not None
        pivot = parent.right
        assert pivot is not None

        parent.right = pivot.left
        grandparent.left = pivot.right
        pivot.left = parent
        pivot.right = grandparent

        return pivot

    def _rotate_right_left(self, grandparent: Node) -> Node:
        parent = grandparent.right
        assert parent is not None
        pivot = parent.left
        assert pivot is not None

        parent.left = pivot.right
        grandparent.right = pivot.left
        pivot.left = grandparent
        pivot.right = parent

        return pivot

    # --- balance ---

    def _height(self, node: Optional[Node]) -> int:
        if node is None:
            return 0
        return 1 + max(self._height(node.left), self._height(node.right))

    def _balance_factor(self, node: Optional[Node]) -> int:
        # -1 for a missing node; callers only pass real nodes
        if node is None:
            return -1
        return self._height(node.left) - self._height(node.right)

    def _balance(self, node: Node) -> Node:
        """Fix an imbalance at ``node`` whose subtrees are already balanced."""
        balance = self._balance_factor(node)

        if balance > 1:
            if self._balance_factor(node.left) < 0:
                return self._rotate_left_right(node)
            return self._rotate_right(node)

        if balance < -1:
            if self._balance_factor(node.right) > 0:
                return self._rotate_right_left(node)
            return self._rotate_left(node)

        return node

    def _rebalance(self, node: Optional[Node]) -> Optional[Node]:
        if node is None:
            return None
        # children first, so a fix higher up is never undone by one below it
        node.left = self._rebalance(node.left)
        node.right = self._rebalance(node.right)
        return self._balance(node)

    def _on_path(self, node: Node) -> Node:
        if self.rebalance == "path":
            return self._balance(node)
        return node

    def _finish_mutation(self) -> None:
        if self.rebalance == "full":
            self._root = self._rebalance(self._root)

    # --- insert / remove ---

    def _insert(self, node: Optional[Node], key: K, value: V) -> Node:
        if node is None:
            return BALST.Node(key, value)

        if key < node.key:
            node.left = self._insert(node.left, key, value)
        elif node.key < key:
            node.right = self._insert(node.right, key, value)
        else:
            raise DuplicateKeyError(key)

        return self._on_path(node)

    def insert(self, key: K, value: V) -> None:
        """
        Add ``key`` mapped to ``value`` and rebalance.

        Raises:
            IllegalNullKeyError: key is None
            DuplicateKeyError: key is already in the tree; the tree is unchanged
        """
        if key is None:
            raise IllegalNullKeyError()
        self._root = self._insert(self._root, key, value)
        self._num_keys += 1
        self._finish_mutation()

    def _find_predecessor(self, node: Node) -> Node:
        pred = node.left
        assert pred is not None
        while pred.right is not None:
            pred = pred.right
        return pred

    def _remove(self, node: Optional[Node], key: K) -> Optional[Node]:
        if node is None:
            raise KeyNotFoundError(key)

        if key < node.key:
            node.left = self._remove(node.left, key)
        elif node.key < key:
            node.right = self._remove(node.right, key)
        else:
            if node.left is None:
                return node.right
            if node.right is None:
                return node.left
            # two children: node takes over its predecessor's entry
            pred = self._find_predecessor(node)
            node.left = self._remove(node.left, pred.key)
            node.key = pred.key
            node.value = pred.value

        return self._on_path(node)

    def remove(self, key: K) -> bool:
        """
        Delete ``key`` and its value, then rebalance.

        Returns True once the key has been removed.

        Raises:
            IllegalNullKeyError: key is None
            KeyNotFoundError: key is not in the tree; the tree is unchanged
        """
        if key is None:
            raise IllegalNullKeyError()
        self._root = self._remove(self._root, key)
        self._num_keys -= 1
        self._finish_mutation()
        return True

    # --- lookups ---

    def _find_node(self, key: K) -> Optional[Node]:
        if key is None:
            raise IllegalNullKeyError()
        node = self._root
        while node is not None:
            if key < node.key:
                node = node.left
            elif node.key < key:
                node = node.right
            else:
                return node
        return None

    def _require_node(self, key: K) -> Node:
        node = self._find_node(key)
        if node is None:
            raise KeyNotFoundError(key)
        return node

    def get(self, key: K) -> V:
        return self._require_node(key).value

    def contains(self, key: K) -> bool:
        return self._find_node(key) is not None

    def get_key_at_root(self) -> Optional[K]:
        if self._root is None:
            return None
        return self._root.key

    def get_key_of_left_child_of(self, key: K) -> Optional[K]:
        """Key of the left child of ``key``'s node, or None if it has none."""
        child = self._require_node(key).left
        return None if child is None else child.key

    def get_key_of_right_child_of(self, key: K) -> Optional[K]:
        """Key of the right child of ``key``'s node, or None if it has none."""
        child = self._require_node(key).right
        return None if child is None else child.key

    def get_height(self) -> int:
        return self._height(self._root)

    def num_keys(self) -> int:
        return self._num_keys

    # --- traversals ---

    def _in_order(self, node: Optional[Node], keys: List[K]) -> List[K]:
        if node is not None:
            self._in_order(node.left, keys)
            keys.append(node.key)
            self._in_order(node.right, keys)
        return keys

    def _pre_order(self, node: Optional[Node], keys: List[K]) -> List[K]:
        if node is not None:
            keys.append(node.key)
            self._pre_order(node.left, keys)
            self._pre_order(node.right, keys)
        return keys

    def _post_order(self, node: Optional[Node], keys: List[K]) -> List[K]:
        if node is not None:
            self._post_order(node.left, keys)
            self._post_order(node.right, keys)
            keys.append(node.key)
        return keys

    def get_in_order_traversal(self) -> List[K]:
        return self._in_order(self._root, [])

    def get_pre_order_traversal(self) -> List[K]:
        return self._pre_order(self._root, [])

    def get_post_order_traversal(self) -> List[K]:
        return self._post_order(self._root, [])

    def get_level_order_traversal(self) -> List[K]:
        result: List[K] = []
        if self._root is None:
            return result
        queue: Deque[BALST.Node] = deque([self._root])
        while queue:
            node = queue.popleft()
            result.append(node.key)
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)
        return result

    def items(self) -> List[Tuple[K, V]]:
        result: List[Tuple[K, V]] = []
        stack: List[BALST.Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            result.append((node.key, node.value))
            node = node.right
        return result

    # --- rendering ---

    def _format(self, node: Optional[Node], depth: int, parts: List[str]) -> None:
        if node is None:
            return
        self._format(node.right, depth + 1, parts)
        parts.append("\n" + " " * (PRINT_INDENT * depth) + f"{node.key}\n")
        self._format(node.left, depth + 1, parts)

    def format(self) -> str:
        """
        Render the tree sideways: right subtree above, left subtree below,
        each level indented five spaces further than its parent.
        """
        parts: List[str] = []
        self._format(self._root, 0, parts)
        return "".join(parts)

    def print(self, file: Optional[TextIO] = None) -> None:
        out = sys.stdout if file is None else file
        print(self.format(), end="", file=out)

    # --- housekeeping ---

    def is_empty(self) -> bool:
        return self._num_keys == 0

    def clear(self) -> None:
        self._root = None
        self._num_keys = 0

    def _copy_node(self, node: Optional[Node]) -> Optional[Node]:
        if node is None:
            return None
        clone = BALST.Node(node.key, node.value)
        clone.left = self._copy_node(node.left)
        clone.right = self._copy_node(node.right)
        return clone

    def copy(self) -> 'BALST[K, V]':
        """Return a tree with the same shape and entries.

        Note: values are shared, not copied.
        """
        clone: BALST[K, V] = BALST(rebalance=self.rebalance)
        clone._root = self._copy_node(self._root)
        clone._num_keys = self._num_keys
        return clone

    def _is_balanced(self, node: Optional[Node]) -> bool:
        if node is None:
            return True
        if abs(self._balance_factor(node)) > 1:
            return False
        return self._is_balanced(node.left) and self._is_balanced(node.right)

    def is_balanced(self) -> bool:
        return self._is_balanced(self._root)

    def __len__(self) -> int:
        return self._num_keys

    def __contains__(self, key: object) -> bool:
        if key is None:
            return False
        return self.contains(key)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[K]:
        return iter(self.get_in_order_traversal())

    def __getitem__(self, key: K) -> V:
        return self.get(key)

    def __delitem__(self, key: K) -> None:
        self.remove(key)

    def __repr__(self) -> str:
        return f"BALST({self.items()})"

    def __str__(self) -> str:
        return f"BALST(keys={self._num_keys}, height={self.get_height()})"
