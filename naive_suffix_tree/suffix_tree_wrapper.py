'''Convenience wrappers around the pure Python suffix tree.

This module provides `SuffixTreeWrapper` and `GeneralizedSuffixTreeWrapper`, which
hold a built tree and accept either strings or bytes-like objects for texts and
patterns. Strings are encoded with a configurable encoding before they reach the
backend, which only works on raw bytes.

Typical usage involves creating an instance from a text and then calling `find`,
`search`, `all_occurrences` or `longest_repeated_substring` on it; for two texts,
create a `GeneralizedSuffixTreeWrapper` and call `longest_common_substring`.
'''
from typing import List, Optional, Union

from .python_backend.naive_suffix import SuffixTree, build, build_generalized
from .python_backend.suffix_tree_appl import (
    CommonSubstringInfo, RepeatInfo,
    all_occurrences, longest_common_substring, longest_repeated_substring, search,
)

TextLike = Union[str, bytes, bytearray, memoryview]


def _encode(value: TextLike, encoding: str) -> TextLike:
    # Bytes-like values pass through; the backend rejects anything else.
    if isinstance(value, str):
        return value.encode(encoding)
    return value


class SuffixTreeWrapper:
    '''A suffix tree over a single text.

    Attributes:
        tree (SuffixTree): The underlying frozen tree.
        encoding (str): Encoding applied to string texts and patterns.
    '''
    def __init__(self, initial_text: TextLike = "", encoding: str = "utf-8",
                 progress_interval: Optional[int] = None):
        """Builds the tree for `initial_text`.

        Args:
            initial_text: The text to index.
            encoding: Encoding for string inputs. Defaults to "utf-8".
            progress_interval: Forwarded to `build` for progress logging.

        Raises:
            ReservedByteInInput: If the encoded text contains `$`.
            TypeError: If `initial_text` is neither a string nor bytes-like.
        """
        self.encoding = encoding
        self.tree: SuffixTree = build(_encode(initial_text, encoding), progress_interval)

    def find(self, pattern: TextLike) -> bool:
        """Checks if `pattern` occurs in the text. The empty pattern is always found."""
        return self.search(pattern) is not None

    def search(self, pattern: TextLike) -> Optional[int]:
        """Returns the start position of one occurrence of `pattern`, or None."""
        return search(self.tree, _encode(pattern, self.encoding))

    def all_occurrences(self, pattern: TextLike) -> List[int]:
        """Returns every start position of `pattern`, in tree traversal order."""
        return all_occurrences(self.tree, _encode(pattern, self.encoding))

    def count_occurrences(self, pattern: TextLike) -> int:
        """Counts the occurrences of `pattern`, overlapping ones included.

        Args:
            pattern: The pattern to count. The empty pattern counts 0.

        Returns:
            int: The number of start positions of `pattern` in the text.
        """
        return len(self.all_occurrences(pattern))

    def longest_repeated_substring(self) -> Optional[RepeatInfo]:
        """Finds a longest repeated substring of the text.

        Returns:
            RepeatInfo(length, pos1, pos2) with two start positions of the repeat,
            or None if the text has no repeated substring.
        """
        return longest_repeated_substring(self.tree)

    def repeated_substring(self) -> Optional[bytes]:
        """Returns the bytes of the longest repeated substring, or None."""
        info = self.longest_repeated_substring()
        if info is None:
            return None
        return self.tree.text_slice(info.pos1, info.length)

    def get_internal_text(self) -> bytes:
        """Returns the indexed text without its terminator."""
        return self.tree.text[:self.tree.text_len]

    @property
    def text_len(self) -> int:
        """int: The length of the indexed text."""
        return self.tree.text_len

    def display(self) -> None:
        """Prints the tree structure, one edge label per line."""
        self.tree.display()


class GeneralizedSuffixTreeWrapper:
    '''A generalized suffix tree over two texts.

    Attributes:
        tree (SuffixTree): The underlying frozen generalized tree.
        encoding (str): Encoding applied to string texts.
    '''
    def __init__(self, text1: TextLike, text2: TextLike, encoding: str = "utf-8",
                 progress_interval: Optional[int] = None):
        """Builds the generalized tree for `text1` and `text2`.

        Raises:
            ReservedByteInInput: If either encoded text contains `#` or `$`.
            TypeError: If either text is neither a string nor bytes-like.
        """
        self.encoding = encoding
        self.tree: SuffixTree = build_generalized(
            _encode(text1, encoding), _encode(text2, encoding), progress_interval
        )

    @property
    def len1(self) -> int:
        """int: The length of text 1."""
        return self.tree.len1

    @property
    def len2(self) -> int:
        """int: The length of text 2."""
        return self.tree.len2

    def longest_common_substring(self) -> Optional[CommonSubstringInfo]:
        """Finds a longest common substring of the two texts.

        Returns:
            CommonSubstringInfo(length, pos1, pos2) where `pos1` indexes text 1 and
            `pos2` indexes text 2, or None if the texts share no substring.
        """
        return longest_common_substring(self.tree, self.tree.len1)

    def common_substring(self) -> Optional[bytes]:
        """Returns the bytes of the longest common substring, or None."""
        info = self.longest_common_substring()
        if info is None:
            return None
        return self.tree.text_slice(info.pos1, info.length)

    def display(self) -> None:
        """Prints the generalized tree, including the `#` separator in edge labels."""
        self.tree.display()


# Example usage:
if __name__ == '__main__':
    print("SuffixTreeWrapper Example")
    wrapper = SuffixTreeWrapper("banana")
    print(f"Text: {wrapper.get_internal_text()!r} (len: {wrapper.text_len})")
    wrapper.display()

    for p in ["ban", "ana", "nana", "apple", ""]:
        print(f"Pattern {p!r}: position {wrapper.search(p)}, all {wrapper.all_occurrences(p)}")

    print(f"LRS: {wrapper.longest_repeated_substring()} -> {wrapper.repeated_substring()!r}")

    generalized = GeneralizedSuffixTreeWrapper("abcdef", "zabcy")
    print(f"LCS: {generalized.longest_common_substring()} -> {generalized.common_substring()!r}")
