'''Pure Python suffix tree built by naive repeated suffix insertion.

This module provides the `SuffixTree` class and the `build` / `build_generalized`
constructors. Every suffix of the text buffer is inserted from the root in turn,
splitting an existing node whenever the suffix diverges in the middle of an edge.
Construction is O(n^2) in the worst case, which is acceptable for the text sizes
this package targets and keeps the structure simple to reason about.

Nodes live in an arena of parallel columns and are addressed by integer
handles. Each node keeps a handle to its first child and to its next sibling, so
the children of a node form a singly linked list ordered by insertion history.
Once construction completes the columns become frozen numpy arrays, which
makes a built tree safe to share between read-only queries.

Features:
- Single-text trees over `text + b"$"`.
- Generalized trees over `text1 + b"#" + text2 + b"$"`, with per-node flags
  recording whether the subtree holds a leaf from text 1 and/or text 2.
- A text-based display for debugging.

Classes:
    ReservedByteInInput: Raised when an input holds a sentinel byte.
    Node: Read-only record view of one arena entry.
    SuffixTree: The arena plus the buffer it indexes.
'''
import logging
from typing import Iterator, NamedTuple, Optional, Union

import numpy as np

logger = logging.getLogger(__name__)

TERMINATOR = ord('$')
SEPARATOR = ord('#')

ROOT = 0
NO_NODE = -1
NO_SUFFIX = -1

BytesLike = Union[bytes, bytearray, memoryview, str]


class ReservedByteInInput(ValueError):
    """Raised when a text or pattern holds a sentinel byte where it is not allowed.

    Attributes:
        byte (int): The offending byte value.
        position (int): Offset of the byte within `source`.
        source (str): Which input held the byte ("text", "text1", "text2" or "pattern").
    """
    def __init__(self, byte: int, position: int, source: str = "text"):
        self.byte = byte
        self.position = position
        self.source = source
        super().__init__(
            f"{source} contains the reserved byte {chr(byte)!r} at position {position}."
        )


def as_bytes(data: BytesLike, name: str = "text") -> bytes:
    """Normalizes `data` to an immutable bytes object.

    Strings are UTF-8 encoded; bytes-like objects are copied.

    Raises:
        TypeError: If `data` is neither a string nor bytes-like.
    """
    if isinstance(data, str):
        return data.encode('utf-8')
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"{name} must be bytes-like or str, got {type(data).__name__}.")


def check_reserved(data: bytes, source: str, reserved: tuple = (TERMINATOR, SEPARATOR)) -> None:
    """Raises ReservedByteInInput for the first reserved byte found in `data`."""
    hits = [(data.find(bytes([b])), b) for b in reserved]
    hits = [(pos, b) for pos, b in hits if pos >= 0]
    if hits:
        position, byte = min(hits)
        raise ReservedByteInInput(byte, position, source)


class Node(NamedTuple):
    """Snapshot of a single arena entry.

    `left_label` and `right_label` are the inclusive buffer range of the edge
    leading into this node. Text membership fields are only meaningful on a
    generalized tree.
    """
    handle: int
    left_label: int
    right_label: int
    suffix_number: int
    first_child: int
    next_sibling: int
    has_text1_leaf: bool
    first_text1_leaf_suffix: int
    has_text2_leaf: bool
    first_text2_leaf_suffix: int

    @property
    def is_leaf(self) -> bool:
        return self.suffix_number >= 0


class SuffixTree:
    """A suffix tree over a terminated byte buffer.

    Instances are created through `build` or `build_generalized`; the constructor
    only creates the root. The root is handle 0 with a zero-length label.

    Attributes:
        text (bytes): The buffer, including sentinel byte(s).
        text_len (int): Length of the buffer without its sentinel byte(s).
        len1 (int | None): Length of text 1 for a generalized tree, else None.
        len2 (int | None): Length of text 2 for a generalized tree, else None.
        node_count (int): Number of arena entries in use.
        left_label, right_label, suffix_number, first_child, next_sibling,
        text1_leaf, text2_leaf (np.ndarray): The arena columns, one entry per node.
            They are lists while the tree is being built and read-only int64
            arrays afterwards. `text1_leaf` and
            `text2_leaf` hold the first leaf suffix of each text below a node, or -1.
    """
    __slots__ = ('text', 'text_len', 'len1', 'len2', 'node_count',
                 'left_label', 'right_label', 'suffix_number',
                 'first_child', 'next_sibling', 'text1_leaf', 'text2_leaf')

    _COLUMNS = ('left_label', 'right_label', 'suffix_number',
                'first_child', 'next_sibling', 'text1_leaf', 'text2_leaf')

    def __init__(self, text: bytes, text_len: int, len1: Optional[int] = None, len2: Optional[int] = None):
        self.text = text
        self.text_len = text_len
        self.len1 = len1
        self.len2 = len2

        # Columns grow as plain lists while building; _freeze turns them into arrays.
        self.left_label = [0]
        self.right_label = [-1]
        self.suffix_number = [NO_SUFFIX]
        self.first_child = [NO_NODE]
        self.next_sibling = [NO_NODE]
        self.text1_leaf = [NO_SUFFIX]
        self.text2_leaf = [NO_SUFFIX]
        self.node_count = 1 # the root

    # --- Construction ---

    def _new_node(self, left: int, right: int, suffix: int,
                  child: int = NO_NODE, sibling: int = NO_NODE) -> int:
        handle = self.node_count
        self.node_count += 1
        self.left_label.append(left)
        self.right_label.append(right)
        self.suffix_number.append(suffix)
        self.first_child.append(child)
        self.next_sibling.append(sibling)
        self.text1_leaf.append(NO_SUFFIX)
        self.text2_leaf.append(NO_SUFFIX)
        return handle

    def _add_child(self, parent: int, left: int, right: int, suffix: int) -> int:
        """Appends a new leaf to the tail of `parent`'s child list."""
        handle = self._new_node(left, right, suffix)
        next_sibling = self.next_sibling
        child = self.first_child[parent]
        if child == NO_NODE:
            self.first_child[parent] = handle
            return handle
        while next_sibling[child] != NO_NODE:
            child = next_sibling[child]
        next_sibling[child] = handle
        return handle

    def _insert(self, i: int) -> None:
        """Inserts the suffix starting at buffer offset `i`."""
        text = self.text
        last = len(text) - 1
        pos = i
        current = ROOT

        while True:
            nxt = self.find_child(current, text[pos])
            if nxt == NO_NODE:
                self._add_child(current, pos, last, i)
                return

            # Match text[left+1..right] against the suffix from pos+1 onwards.
            right = int(self.right_label[nxt])
            j = int(self.left_label[nxt]) + 1
            k = pos + 1
            while j <= right and text[j] == text[k]:
                j += 1
                k += 1

            if j > right:
                pos = k
                current = nxt
                continue

            # Split: nxt keeps text[left..j-1]; its old tail moves into a new child
            # that inherits nxt's children and suffix number, followed by the new leaf.
            leaf = self._new_node(k, last, i)
            remainder = self._new_node(j, right, int(self.suffix_number[nxt]),
                                       child=int(self.first_child[nxt]), sibling=leaf)
            self.right_label[nxt] = j - 1
            self.first_child[nxt] = remainder
            self.suffix_number[nxt] = NO_SUFFIX
            return

    def _build(self, progress_interval: Optional[int] = None) -> None:
        for i in range(len(self.text)):
            if progress_interval and i % progress_interval == 0:
                logger.debug("Inserted %d of %d suffixes", i, len(self.text))
            self._insert(i)

    def _propagate_text_membership(self) -> None:
        """Records, for every node, the first leaf of each text found below it.

        Processes nodes children-first. A leaf classifies itself by its suffix
        range; an internal node takes, per text, the value of its first child
        (in child-list order) that has one.
        """
        len1 = self.len1
        text2_end = self.len1 + self.len2

        order = []
        stack = [ROOT]
        while stack:
            node = stack.pop()
            order.append(node)
            stack.extend(self.children(node))

        for node in reversed(order):
            suffix = int(self.suffix_number[node])
            if suffix >= 0:
                if suffix < len1:
                    self.text1_leaf[node] = suffix
                elif len1 < suffix <= text2_end:
                    self.text2_leaf[node] = suffix
                continue
            for child in self.children(node):
                if self.text1_leaf[node] < 0 and self.text1_leaf[child] >= 0:
                    self.text1_leaf[node] = self.text1_leaf[child]
                if self.text2_leaf[node] < 0 and self.text2_leaf[child] >= 0:
                    self.text2_leaf[node] = self.text2_leaf[child]
        logger.debug("Propagated text membership over %d nodes", len(order))

    def _freeze(self) -> None:
        for name in self._COLUMNS:
            column = np.array(getattr(self, name), dtype=np.int64)
            column.setflags(write=False)
            setattr(self, name, column)

    # --- Navigation ---

    @property
    def is_generalized(self) -> bool:
        return self.len1 is not None

    def find_child(self, parent: int, byte: int) -> int:
        """Returns the child of `parent` whose edge label starts with `byte`, or -1.

        Linear scan of the child list.
        """
        text = self.text
        child = int(self.first_child[parent])
        while child != NO_NODE:
            if text[self.left_label[child]] == byte:
                return child
            child = int(self.next_sibling[child])
        return NO_NODE

    def children(self, node: int) -> Iterator[int]:
        child = int(self.first_child[node])
        while child != NO_NODE:
            yield child
            child = int(self.next_sibling[child])

    def is_leaf(self, node: int) -> bool:
        return bool(self.first_child[node] == NO_NODE)

    def edge_length(self, node: int) -> int:
        return int(self.right_label[node] - self.left_label[node] + 1)

    def edge_label(self, node: int) -> bytes:
        return self.text[self.left_label[node]:self.right_label[node] + 1]

    def node(self, handle: int) -> Node:
        """Returns a read-only record of the arena entry `handle`."""
        if not 0 <= handle < self.node_count:
            raise IndexError(f"No node with handle {handle} (tree has {self.node_count}).")
        text1 = int(self.text1_leaf[handle])
        text2 = int(self.text2_leaf[handle])
        return Node(
            handle=handle,
            left_label=int(self.left_label[handle]),
            right_label=int(self.right_label[handle]),
            suffix_number=int(self.suffix_number[handle]),
            first_child=int(self.first_child[handle]),
            next_sibling=int(self.next_sibling[handle]),
            has_text1_leaf=text1 >= 0,
            first_text1_leaf_suffix=text1,
            has_text2_leaf=text2 >= 0,
            first_text2_leaf_suffix=text2,
        )

    def text_slice(self, position: int, length: int) -> bytes:
        return self.text[position:position + length]

    def display(self, node: int = ROOT, prefix: str = "") -> None:
        """Prints a text representation of the tree structure for debugging.

        Children are shown in child-list order. Leaves show their suffix number.
        """
        if node == ROOT and not prefix:
            print("Suffix Tree (Root):")

        kids = list(self.children(node))
        for i, child in enumerate(kids):
            is_last_child = (i == len(kids) - 1)
            connector = "└── " if is_last_child else "├── "
            label = self.edge_label(child).decode('latin-1')
            leaf_info = f" [{int(self.suffix_number[child])}]" if self.is_leaf(child) else ""
            print(f"{prefix}{connector}'{label}'{leaf_info}")
            self.display(child, prefix + ("    " if is_last_child else "│   "))

    def __repr__(self) -> str:
        kind = "generalized" if self.is_generalized else "single"
        return f"SuffixTree({kind}, text_len={self.text_len}, nodes={self.node_count})"


def build(text: BytesLike, progress_interval: Optional[int] = None) -> SuffixTree:
    """Builds the suffix tree of `text`.

    Args:
        text: The text to index. Must not contain the terminator byte `$`.
        progress_interval: If set, log a debug record every `progress_interval`
                           inserted suffixes.

    Returns:
        A frozen SuffixTree over `text + b"$"`.

    Raises:
        ReservedByteInInput: If `text` contains `$`. No tree is built.
        TypeError: If `text` is not bytes-like or str.
    """
    data = as_bytes(text)
    check_reserved(data, "text", reserved=(TERMINATOR,))

    tree = SuffixTree(data + bytes([TERMINATOR]), len(data))
    logger.debug("Building suffix tree over %d bytes", len(data))
    tree._build(progress_interval)
    tree._freeze()
    logger.debug("Built suffix tree with %d nodes", tree.node_count)
    return tree


def build_generalized(text1: BytesLike, text2: BytesLike,
                      progress_interval: Optional[int] = None) -> SuffixTree:
    """Builds the generalized suffix tree of two texts.

    The buffer is `text1 + b"#" + text2 + b"$"`. After insertion every node is
    annotated with the first leaf from each text found in its subtree.

    Args:
        text1: The first text.
        text2: The second text.
        progress_interval: If set, log a debug record every `progress_interval`
                           inserted suffixes.

    Returns:
        A frozen generalized SuffixTree.

    Raises:
        ReservedByteInInput: If either text contains `#` or `$`. No tree is built.
        TypeError: If either text is not bytes-like or str.
    """
    data1 = as_bytes(text1, "text1")
    data2 = as_bytes(text2, "text2")
    check_reserved(data1, "text1")
    check_reserved(data2, "text2")

    buffer = data1 + bytes([SEPARATOR]) + data2 + bytes([TERMINATOR])
    tree = SuffixTree(buffer, len(data1) + len(data2), len1=len(data1), len2=len(data2))
    logger.debug("Building generalized suffix tree over %d + %d bytes", len(data1), len(data2))
    tree._build(progress_interval)
    tree._propagate_text_membership()
    tree._freeze()
    logger.debug("Built generalized suffix tree with %d nodes", tree.node_count)
    return tree
