'''Batch processing of suffix tree queries with numpy results.

This module provides the `SuffixTreeProcessor` class, which runs the suffix tree
queries over lists of patterns or texts and collects the answers into numpy
arrays. Missing answers are encoded as -1 so the arrays stay integer typed.
'''
import logging
from typing import List

import numpy as np

from .python_backend.naive_suffix import BytesLike, build, build_generalized
from .python_backend.suffix_tree_appl import (
    all_occurrences, longest_common_substring, longest_repeated_substring, search,
)

logger = logging.getLogger(__name__)

_NO_RESULT = (0, -1, -1)


class SuffixTreeProcessor:
    '''Processes lists of strings to answer suffix tree queries in bulk.

    Each call builds the trees it needs and discards them afterwards.

    Attributes:
        progress_interval (int | None): Forwarded to the tree builders for
                                        progress logging.
    '''
    def __init__(self, progress_interval: int | None = None):
        self.progress_interval = progress_interval

    def search_strings(self, text: BytesLike, patterns: List[BytesLike]) -> np.ndarray:
        '''Finds one start position per pattern in a single text.

        Args:
            text: The text to index once.
            patterns: Patterns to look up.

        Returns:
            An int64 array with one position per pattern, -1 where absent.
        '''
        if not patterns:
            return np.array([], dtype=np.int64)
        tree = build(text, self.progress_interval)
        positions = [search(tree, p) for p in patterns]
        return np.array([-1 if p is None else p for p in positions], dtype=np.int64)

    def count_occurrences(self, text: BytesLike, patterns: List[BytesLike]) -> np.ndarray:
        '''Counts the occurrences of each pattern in a single text.'''
        if not patterns:
            return np.array([], dtype=np.int64)
        tree = build(text, self.progress_interval)
        return np.array([len(all_occurrences(tree, p)) for p in patterns], dtype=np.int64)

    def process_strings(self, strings: List[BytesLike]) -> np.ndarray:
        '''Calculates the longest repeated substring of each string.

        Args:
            strings: A list of texts.

        Returns:
            An int64 array of shape (N, 3) holding (length, pos1, pos2) per text,
            with (0, -1, -1) for texts that have no repeat.
        '''
        if not strings:
            return np.empty((0, 3), dtype=np.int64)

        rows = []
        for s in strings:
            info = longest_repeated_substring(build(s, self.progress_interval))
            rows.append(_NO_RESULT if info is None else tuple(info))
        logger.debug("Processed %d strings for repeated substrings", len(strings))
        return np.array(rows, dtype=np.int64)

    def process_pairs(self, x_strings: List[BytesLike], y_strings: List[BytesLike]) -> np.ndarray:
        '''Calculates the longest common substring of each pair (X_i, Y_i).

        Args:
            x_strings: First texts.
            y_strings: Second texts, one per first text.

        Returns:
            An int64 array of shape (N, 3) holding (length, pos_in_x, pos_in_y) per
            pair, with (0, -1, -1) for pairs sharing no substring.

        Raises:
            ValueError: If x_strings and y_strings have different lengths.
        '''
        if len(x_strings) != len(y_strings):
            raise ValueError("x_strings and y_strings must have the same length")
        if not x_strings:
            return np.empty((0, 3), dtype=np.int64)

        rows = []
        for x, y in zip(x_strings, y_strings):
            info = longest_common_substring(build_generalized(x, y, self.progress_interval))
            rows.append(_NO_RESULT if info is None else tuple(info))
        logger.debug("Processed %d pairs for common substrings", len(x_strings))
        return np.array(rows, dtype=np.int64)
