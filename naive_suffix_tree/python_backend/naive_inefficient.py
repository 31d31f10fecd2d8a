'''Brute-force reference implementations for suffix tree queries.

These functions answer the same questions as the suffix tree by direct scanning
of the texts. They are quadratic or worse and serve as a baseline for tests and
benchmarks, not for production use.

Helper functions for generating random byte strings are also included.
'''
from typing import List, Optional

import numpy as np

from .naive_suffix import SuffixTree


def brute_force_occurrences(text: bytes, pattern: bytes) -> List[int]:
    """Returns every start position of `pattern` in `text`, in increasing order.

    Overlapping occurrences are included. The empty pattern yields an empty list,
    matching `all_occurrences`.
    """
    if not pattern:
        return []
    positions = []
    start = text.find(pattern)
    while start >= 0:
        positions.append(start)
        start = text.find(pattern, start + 1)
    return positions


def brute_force_longest_repeat_length(text: bytes) -> int:
    """Length of the longest substring occurring at least twice in `text`.

    Compares every pair of suffixes for their longest common prefix.
    """
    n = len(text)
    best = 0
    for a in range(n):
        for b in range(a + 1, n):
            k = 0
            while b + k < n and text[a + k] == text[b + k]:
                k += 1
            if k > best:
                best = k
    return best


def brute_force_longest_common_length(text1: bytes, text2: bytes) -> int:
    """Length of the longest common substring of two texts (dynamic programming)."""
    if not text1 or not text2:
        return 0
    a = np.frombuffer(text1, dtype=np.uint8)
    b = np.frombuffer(text2, dtype=np.uint8)
    previous = np.zeros(len(b) + 1, dtype=np.int64)
    best = 0
    for ch in a:
        current = np.zeros(len(b) + 1, dtype=np.int64)
        matches = np.nonzero(b == ch)[0]
        current[matches + 1] = previous[matches] + 1
        if matches.size:
            best = max(best, int(current.max()))
        previous = current
    return best


def adjacent_sibling_repeat_length(tree: SuffixTree) -> int:
    """Longest repeat length under the adjacent-sibling rule, by scanning the arena.

    Looks at every arena entry directly instead of walking the tree: a leaf with
    a next sibling contributes `left_label - suffix_number`.
    """
    best = 0
    for handle in range(tree.node_count):
        record = tree.node(handle)
        if record.is_leaf and record.next_sibling >= 0:
            best = max(best, record.left_label - record.suffix_number)
    return best


def generate_random_bytes(length: int, alphabet: bytes = b'01',
                          rng: Optional[np.random.Generator] = None) -> bytes:
    """Generates a random byte string of a given length from a specified alphabet.

    Args:
        length: The desired length of the string.
        alphabet: The bytes to choose from. Defaults to b'01'.
        rng: Optional numpy Generator for reproducible output.

    Returns:
        A randomly generated byte string.
    """
    if length <= 0:
        return b""
    if not alphabet:
        raise ValueError("Alphabet cannot be empty for generating random bytes.")
    rng = rng if rng is not None else np.random.default_rng()
    symbols = np.frombuffer(bytes(alphabet), dtype=np.uint8)
    return rng.choice(symbols, length).astype(np.uint8).tobytes()


def generate_random_bytes_ensemble(num_strings: int, string_length: int, alphabet: bytes = b'01',
                                   rng: Optional[np.random.Generator] = None) -> List[bytes]:
    """Generates an ensemble (list) of random byte strings of equal length."""
    rng = rng if rng is not None else np.random.default_rng()
    return [generate_random_bytes(string_length, alphabet, rng) for _ in range(num_strings)]
