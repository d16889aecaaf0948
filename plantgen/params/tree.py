"""
Dotted-address override tree.

Generation parameters are organised per branching level in a tree whose
nodes are addressed by dotted strings of 1-based sibling positions: ``"2"``
is the second top-level node, ``"2.1"`` its first child. The empty string
addresses the root node, which holds the parameters of the stem the tree is
attached to.

Addresses are positional, so removing a node renumbers its later siblings.
Names that do not resolve (out of range, non-numeric, zero or negative
components) yield ``None``.
"""

from typing import Callable, Generic, Iterator, List, Optional, TypeVar
import copy
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TreeNode(Generic[T]):
    """Node of a ``DottedTree`` with intrusive child/sibling links."""

    __slots__ = ("child", "parent", "next_sibling", "prev_sibling", "data")

    def __init__(self, data: T):
        self.child: Optional["TreeNode[T]"] = None
        self.parent: Optional["TreeNode[T]"] = None
        self.next_sibling: Optional["TreeNode[T]"] = None
        self.prev_sibling: Optional["TreeNode[T]"] = None
        self.data = data

    def __repr__(self) -> str:
        return f"{type(self).__name__}(data={self.data!r})"

    def get_data(self) -> T:
        return copy.deepcopy(self.data)

    def set_data(self, data: T) -> None:
        self.data = copy.deepcopy(data)

    def get_child(self) -> Optional["TreeNode[T]"]:
        return self.child

    def get_sibling(self) -> Optional["TreeNode[T]"]:
        return self.next_sibling

    def get_next_sibling(self) -> Optional["TreeNode[T]"]:
        return self.next_sibling

    def get_prev_sibling(self) -> Optional["TreeNode[T]"]:
        return self.prev_sibling

    def get_parent(self) -> Optional["TreeNode[T]"]:
        return self.parent

    def iter_children(self) -> Iterator["TreeNode[T]"]:
        node = self.child
        while node is not None:
            yield node
            node = node.next_sibling


def parse_name(name: str) -> Optional[List[int]]:
    """
    Split a dotted address into 1-based sibling offsets.

    Returns ``None`` for malformed addresses and an empty list for the root.
    """
    if name == "":
        return []
    offsets = []
    for part in name.split("."):
        if not (part.isascii() and part.isdigit()):
            return None
        offset = int(part)
        if offset < 1:
            return None
        offsets.append(offset)
    return offsets


class DottedTree(Generic[T]):
    """
    Tree of payloads addressed by dotted names.

    Subclasses supply the payload type through ``create_data`` and may
    reset fields of freshly created payloads in ``initialize_data``.

    Parameters
    ----------
    with_root : bool
        Create the root node immediately
    """

    node_type = TreeNode

    def __init__(self, with_root: bool = True):
        self.root: Optional[TreeNode[T]] = None
        if with_root:
            self.create_root()

    def create_data(self) -> T:
        raise NotImplementedError

    def initialize_data(self, data: T) -> None:
        """Hook applied to every payload created by the tree."""

    def _new_node(self) -> TreeNode[T]:
        data = self.create_data()
        self.initialize_data(data)
        return self.node_type(data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, DottedTree) or type(self) is not type(other):
            return NotImplemented
        return _nodes_equal(self.root, other.root)

    def __ne__(self, other) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __repr__(self) -> str:
        return f"{type(self).__name__}(names={self.get_names()})"

    def __copy__(self):
        return self.copy()

    def __deepcopy__(self, memo):
        return self.copy()

    def copy(self):
        """Deep copy; no node or payload is shared with the original."""
        other = type(self).__new__(type(self))
        self._copy_attributes(other)
        other.root = _copy_node(self.root, None)
        return other

    def _copy_attributes(self, other) -> None:
        """Copy tree-level attributes besides the nodes."""

    def reset(self) -> None:
        """Drop every node including the root."""
        self.root = None

    def get_root(self) -> Optional[TreeNode[T]]:
        return self.root

    def create_root(self) -> TreeNode[T]:
        """Replace the whole tree with a fresh root node."""
        self.root = self._new_node()
        return self.root

    def get_node(self) -> Optional[TreeNode[T]]:
        """First top-level node, addressed as ``"1"``."""
        return self.root.child if self.root is not None else None

    def get(self, name: str) -> Optional[TreeNode[T]]:
        """Resolve a dotted address; ``""`` is the root."""
        if self.root is None:
            return None
        offsets = parse_name(name)
        if offsets is None:
            return None
        node = self.root
        for offset in offsets:
            node = node.child
            for _ in range(offset - 1):
                if node is None:
                    break
                node = node.next_sibling
            if node is None:
                return None
        return node

    def add_child(self, name: str) -> Optional[TreeNode[T]]:
        """
        Insert a new first child under the named node.

        Returns
        -------
        TreeNode or None
            The new node, or ``None`` if ``name`` does not resolve
        """
        node = self.get(name)
        if node is None:
            return None
        child = self._new_node()
        child.parent = node
        child.next_sibling = node.child
        if node.child is not None:
            node.child.prev_sibling = child
        node.child = child
        logger.debug(f"Added child under '{name}'")
        return child

    def add_sibling(self, name: str) -> Optional[TreeNode[T]]:
        """
        Insert a new node directly after the named node.

        The root has no siblings, so ``""`` never resolves here.
        """
        if name == "":
            return None
        node = self.get(name)
        if node is None:
            return None
        sibling = self._new_node()
        sibling.parent = node.parent
        sibling.prev_sibling = node
        sibling.next_sibling = node.next_sibling
        if node.next_sibling is not None:
            node.next_sibling.prev_sibling = sibling
        node.next_sibling = sibling
        logger.debug(f"Added sibling after '{name}'")
        return sibling

    def remove(self, name: str) -> bool:
        """
        Unlink the named node and drop its subtree.

        Removing ``""`` resets the whole tree.
        """
        if self.root is None:
            return False
        if name == "":
            self.reset()
            return True
        node = self.get(name)
        if node is None:
            return False

        if node.prev_sibling is not None:
            node.prev_sibling.next_sibling = node.next_sibling
        if node.next_sibling is not None:
            node.next_sibling.prev_sibling = node.prev_sibling
        if node.parent is not None and node.parent.child is node:
            node.parent.child = node.next_sibling
        node.parent = None
        node.next_sibling = None
        node.prev_sibling = None
        node.child = None
        logger.debug(f"Removed '{name}'")
        return True

    def get_names(self) -> List[str]:
        """Every valid address below the root in depth-first sibling order."""
        names: List[str] = []
        if self.root is not None:
            self._collect_names(names, "", self.root.child)
        return names

    def _collect_names(self, names: List[str], prefix: str, node: Optional[TreeNode[T]]) -> None:
        count = 0
        while node is not None:
            count += 1
            name = f"{prefix}{count}"
            names.append(name)
            self._collect_names(names, name + ".", node.child)
            node = node.next_sibling

    def iter_nodes(self) -> Iterator[TreeNode[T]]:
        """Pre-order iteration over every node including the root."""
        if self.root is None:
            return
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            children = list(node.iter_children())
            stack.extend(reversed(children))

    def update_field(self, function: Callable[[T], None], name: str) -> bool:
        """Apply ``function`` to the payload of the named node."""
        node = self.get(name)
        if node is None:
            logger.warning(f"Cannot update unresolved node '{name}'")
            return False
        function(node.data)
        return True

    def update_fields(self, function: Callable[[T], None]) -> None:
        """Apply ``function`` to every payload below the root."""
        for node in self.iter_nodes():
            if node is not self.root:
                function(node.data)


def _copy_node(node: Optional[TreeNode], parent: Optional[TreeNode]) -> Optional[TreeNode]:
    if node is None:
        return None
    duplicate = type(node)(copy.deepcopy(node.data))
    duplicate.parent = parent
    previous = None
    for child in node.iter_children():
        child_copy = _copy_node(child, duplicate)
        if previous is None:
            duplicate.child = child_copy
        else:
            previous.next_sibling = child_copy
            child_copy.prev_sibling = previous
        previous = child_copy
    return duplicate


def _nodes_equal(a: Optional[TreeNode], b: Optional[TreeNode]) -> bool:
    if a is None or b is None:
        return a is None and b is None
    if a.data != b.data:
        return False
    children_a = list(a.iter_children())
    children_b = list(b.iter_children())
    if len(children_a) != len(children_b):
        return False
    return all(_nodes_equal(x, y) for x, y in zip(children_a, children_b))


__all__ = ["TreeNode", "DottedTree", "parse_name"]
