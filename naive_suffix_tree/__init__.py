'''Initialize the naive_suffix_tree package, exposing suffix tree construction and queries.'''

from .python_backend.naive_suffix import (
    ReservedByteInInput, SuffixTree, Node,
    build, build_generalized,
    TERMINATOR, SEPARATOR,
)
from .python_backend.suffix_tree_appl import (
    SearchResult, RepeatInfo, CommonSubstringInfo,
    find_match, search, all_occurrences,
    longest_repeated_substring, longest_common_substring,
)
from .suffix_tree_wrapper import SuffixTreeWrapper, GeneralizedSuffixTreeWrapper
from .suffix_tree_processor import SuffixTreeProcessor

__all__ = [
    'ReservedByteInInput', 'SuffixTree', 'Node',
    'build', 'build_generalized',
    'TERMINATOR', 'SEPARATOR',
    'SearchResult', 'RepeatInfo', 'CommonSubstringInfo',
    'find_match', 'search', 'all_occurrences',
    'longest_repeated_substring', 'longest_common_substring',
    'SuffixTreeWrapper', 'GeneralizedSuffixTreeWrapper',
    'SuffixTreeProcessor',
]
