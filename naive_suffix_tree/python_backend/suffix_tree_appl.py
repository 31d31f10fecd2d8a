'''Queries over a built suffix tree.

This module provides the four applications of the naive suffix tree:

- `search` / `find_match`: exact substring search by a single root-to-node descent.
- `all_occurrences`: every start position of a pattern, by a breadth-first walk
  of the subtree below the matched node.
- `longest_repeated_substring`: a breadth-first walk comparing each leaf with its
  next sibling in the parent's child list.
- `longest_common_substring`: a depth-first walk of a generalized tree carrying
  the path depth, looking for nodes that have leaves from both texts below them.

None of these functions mutate the tree.
'''
from collections import deque
from typing import List, NamedTuple, Optional

from .naive_suffix import (
    NO_NODE, ROOT, TERMINATOR,
    BytesLike, SuffixTree, as_bytes, check_reserved,
)


class SearchResult(NamedTuple):
    """First occurrence of a pattern and the node where its match ended."""
    position: int
    node: int


class RepeatInfo(NamedTuple):
    """A longest repeated substring: `text[pos1:pos1+length] == text[pos2:pos2+length]`."""
    length: int
    pos1: int
    pos2: int


class CommonSubstringInfo(NamedTuple):
    """A longest common substring: `text1[pos1:pos1+length] == text2[pos2:pos2+length]`."""
    length: int
    pos1: int
    pos2: int


def _pattern_bytes(tree: SuffixTree, pattern: BytesLike) -> bytes:
    if tree.is_generalized:
        # Leaves of a generalized tree carry offsets into the joined buffer.
        raise ValueError("Pattern search requires a single-text tree.")
    data = as_bytes(pattern, "pattern")
    check_reserved(data, "pattern", reserved=(TERMINATOR,))
    return data


def find_match(tree: SuffixTree, pattern: BytesLike) -> Optional[SearchResult]:
    """Descends from the root matching `pattern` against edge labels.

    Only one path is explored: siblings have pairwise distinct first bytes, so
    at most one child can continue the match.

    Args:
        tree: A single-text suffix tree.
        pattern: The pattern to look for. The empty pattern matches at 0 with the
                 root as its node.

    Returns:
        A SearchResult with the start position of one occurrence and the node whose
        edge the match ended on, or None if `pattern` does not occur.

    Raises:
        ReservedByteInInput: If `pattern` contains the terminator byte.
        ValueError: If `tree` is a generalized tree.
    """
    x = _pattern_bytes(tree, pattern)
    m = len(x)
    if m == 0:
        return SearchResult(0, ROOT)

    text = tree.text
    current = ROOT
    pos = 0
    while True:
        nxt = tree.find_child(current, x[pos])
        if nxt == NO_NODE:
            return None

        right = int(tree.right_label[nxt])
        j = int(tree.left_label[nxt]) + 1
        i = pos + 1
        while i < m and j <= right and x[i] == text[j]:
            i += 1
            j += 1

        if i >= m:
            # j is one past the last matched buffer position.
            return SearchResult(j - m, nxt)
        if j > right:
            pos = i
            current = nxt
            continue
        return None


def search(tree: SuffixTree, pattern: BytesLike) -> Optional[int]:
    """Returns the start position of one occurrence of `pattern`, or None."""
    result = find_match(tree, pattern)
    return None if result is None else result.position


def all_occurrences(tree: SuffixTree, pattern: BytesLike) -> List[int]:
    """Returns every start position of `pattern`, in breadth-first leaf order.

    The order follows the child lists of the tree, not numeric order. The empty
    pattern and absent patterns yield an empty list.
    """
    match = find_match(tree, pattern)
    if match is None or match.node == ROOT:
        return []

    node = match.node
    if tree.is_leaf(node):
        return [int(tree.suffix_number[node])]

    positions = []
    queue = deque([int(tree.first_child[node])])
    while queue:
        current = queue.popleft()
        child = int(tree.first_child[current])
        sibling = int(tree.next_sibling[current])
        if child == NO_NODE:
            positions.append(int(tree.suffix_number[current]))
        else:
            queue.append(child)
        if sibling != NO_NODE:
            queue.append(sibling)
    return positions


def first_leaf_suffix(tree: SuffixTree, node: int) -> int:
    """Follows first-child links from `node` down to a leaf and returns its suffix."""
    child = int(tree.first_child[node])
    while child != NO_NODE:
        node = child
        child = int(tree.first_child[node])
    return int(tree.suffix_number[node])


def longest_repeated_substring(tree: SuffixTree) -> Optional[RepeatInfo]:
    """Finds a longest repeated substring by comparing each leaf with its next sibling.

    Walks the tree breadth-first from the root. A leaf that has a next sibling is
    a candidate whose length is the depth of its parent, `left_label - suffix_number`.
    The first candidate of maximal length wins. Only adjacent siblings are
    compared, so repeats witnessed solely by non-adjacent leaves are not reported.

    Returns:
        RepeatInfo(length, pos1, pos2), or None if no candidate is longer than 0.
        `pos1` is the leaf's suffix; `pos2` is the sibling's suffix, or the suffix
        of the first leaf below the sibling if the sibling is internal.

    Raises:
        ValueError: If `tree` is a generalized tree.
    """
    if tree.is_generalized:
        raise ValueError("longest_repeated_substring requires a single-text tree.")

    best: Optional[RepeatInfo] = None
    best_len = 0
    queue = deque([ROOT])
    while queue:
        current = queue.popleft()
        child = int(tree.first_child[current])
        sibling = int(tree.next_sibling[current])

        if child == NO_NODE:
            suffix = int(tree.suffix_number[current])
            prefix_len = int(tree.left_label[current]) - suffix
            if sibling != NO_NODE and prefix_len > best_len:
                best_len = prefix_len
                best = RepeatInfo(prefix_len, suffix, first_leaf_suffix(tree, sibling))
        else:
            queue.append(child)

        if sibling != NO_NODE:
            queue.append(sibling)
    return best


def longest_common_substring(tree: SuffixTree, len1: Optional[int] = None) -> Optional[CommonSubstringInfo]:
    """Finds a longest common substring of the two texts of a generalized tree.

    Walks the tree depth-first in child-list order, accumulating the path depth.
    Every node with leaves from both texts below it spells a common substring of
    that depth; the first one of maximal depth wins.

    Args:
        tree: A generalized suffix tree.
        len1: Length of text 1. Optional; when given it must match the tree.

    Returns:
        CommonSubstringInfo(length, pos1, pos2) with `pos2` relative to text 2, or
        None if the texts share no non-empty substring.

    Raises:
        ValueError: If `tree` is not generalized or `len1` disagrees with it.
    """
    if not tree.is_generalized:
        raise ValueError("longest_common_substring requires a generalized tree.")
    if len1 is not None and len1 != tree.len1:
        raise ValueError(f"len1={len1} does not match the tree's text 1 length {tree.len1}.")

    offset = tree.len1 + 1
    best: Optional[CommonSubstringInfo] = None
    best_len = 0
    stack = [(ROOT, 0)]
    while stack:
        node, depth = stack.pop()
        text1 = int(tree.text1_leaf[node])
        text2 = int(tree.text2_leaf[node])
        if text1 >= 0 and text2 >= 0 and depth > best_len:
            best_len = depth
            best = CommonSubstringInfo(depth, text1, text2 - offset)

        # Push in reverse so children are visited in list order.
        kids = [(child, depth + tree.edge_length(child)) for child in tree.children(node)]
        stack.extend(reversed(kids))
    return best
