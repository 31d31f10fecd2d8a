'''Tests for suffix tree queries.

Compares search, all-occurrences, longest repeated substring and longest common
substring against the brute-force references in
`naive_suffix_tree.python_backend.naive_inefficient`, using random binary strings,
and checks the worked examples, edge cases and error contracts.

Usage:
    pytest tests/test_suffix_tree_appl.py
    python tests/test_suffix_tree_appl.py [num_strings] [min_len] [max_len]
'''
import os
import random
import sys
from typing import Optional

import pytest

_project_root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if _project_root_dir not in sys.path:
    sys.path.insert(0, _project_root_dir)

from naive_suffix_tree import (
    CommonSubstringInfo, RepeatInfo, ReservedByteInInput,
    all_occurrences, build, build_generalized, find_match,
    longest_common_substring, longest_repeated_substring, search,
)
from naive_suffix_tree.python_backend.naive_inefficient import (
    adjacent_sibling_repeat_length,
    brute_force_longest_common_length,
    brute_force_longest_repeat_length,
    brute_force_occurrences,
)
from naive_suffix_tree.python_backend.naive_suffix import NO_NODE, ROOT


def generate_random_binary_string(rng: random.Random, min_len: int = 0, max_len: int = 40) -> bytes:
    length = rng.randint(min_len, max_len)
    return bytes(rng.choice(b'01') for _ in range(length))


def get_all_substrings(s: bytes) -> set:
    return {s[i:j] for i in range(len(s)) for j in range(i + 1, len(s) + 1)}


def reference_repeat(tree) -> Optional[tuple]:
    """Adjacent-sibling repeat walked over `Node` records, first maximum wins."""
    best = None
    queue = [tree.node(ROOT)]
    while queue:
        record = queue.pop(0)
        if record.is_leaf:
            length = record.left_label - record.suffix_number
            if record.next_sibling != NO_NODE and length > (best[0] if best else 0):
                witness = tree.node(record.next_sibling)
                while not witness.is_leaf:
                    witness = tree.node(witness.first_child)
                best = (length, record.suffix_number, witness.suffix_number)
        else:
            queue.append(tree.node(record.first_child))
        if record.next_sibling != NO_NODE:
            queue.append(tree.node(record.next_sibling))
    return best


def reference_common(tree) -> Optional[tuple]:
    """Recursive preorder over `Node` records, first node of maximal depth wins."""
    best = [0, None]

    def visit(record, depth):
        if record.has_text1_leaf and record.has_text2_leaf and depth > best[0]:
            best[0] = depth
            best[1] = (depth, record.first_text1_leaf_suffix,
                       record.first_text2_leaf_suffix - tree.len1 - 1)
        handle = record.first_child
        while handle != NO_NODE:
            child = tree.node(handle)
            visit(child, depth + child.right_label - child.left_label + 1)
            handle = child.next_sibling

    visit(tree.node(ROOT), 0)
    return best[1]


def check_search_and_occurrences(text: bytes, rng: random.Random) -> None:
    tree = build(text)
    for pattern in get_all_substrings(text):
        p = search(tree, pattern)
        assert p is not None
        assert text[p:p + len(pattern)] == pattern

        positions = all_occurrences(tree, pattern)
        assert len(positions) == len(set(positions))
        assert sorted(positions) == brute_force_occurrences(text, pattern)

    for _ in range(10):
        pattern = generate_random_binary_string(rng, 1, 12)
        if pattern not in text:
            assert search(tree, pattern) is None
            assert all_occurrences(tree, pattern) == []


def check_repeat(text: bytes) -> None:
    tree = build(text)
    info = longest_repeated_substring(tree)
    expected = adjacent_sibling_repeat_length(tree)
    if expected == 0:
        assert info is None
        return
    assert info.length == expected
    assert info == reference_repeat(tree)
    assert info.length <= brute_force_longest_repeat_length(text)
    assert info.pos1 != info.pos2
    assert text[info.pos1:info.pos1 + info.length] == text[info.pos2:info.pos2 + info.length]
    assert info.pos1 + info.length <= len(text) and info.pos2 + info.length <= len(text)


def check_common(text1: bytes, text2: bytes) -> None:
    tree = build_generalized(text1, text2)
    info = longest_common_substring(tree, len(text1))
    expected = brute_force_longest_common_length(text1, text2)
    if expected == 0:
        assert info is None
        return
    assert info.length == expected
    assert info == reference_common(tree)
    assert text1[info.pos1:info.pos1 + info.length] == text2[info.pos2:info.pos2 + info.length]


# --- Exact search ---

def test_search_banana():
    tree = build(b"banana")
    assert search(tree, b"ana") in (1, 3)
    assert search(tree, b"banana") == 0
    assert search(tree, b"nab") is None
    assert search(tree, b"bananas") is None
    assert search(tree, b"x") is None


def test_find_match_reports_node():
    tree = build(b"banana")
    result = find_match(tree, b"an")
    assert result.position in (1, 3)
    # The match ends inside the "na" edge below "a".
    assert tree.edge_label(result.node) == b"na"

    leaf_match = find_match(tree, b"ban")
    assert tree.is_leaf(leaf_match.node)
    assert int(tree.suffix_number[leaf_match.node]) == 0


def test_empty_pattern_matches_at_zero():
    assert find_match(build(b"abc"), b"") == (0, ROOT)
    assert search(build(b""), b"") == 0
    assert all_occurrences(build(b"abc"), b"") == []


def test_search_on_empty_text():
    tree = build(b"")
    assert search(tree, b"a") is None
    assert all_occurrences(tree, b"a") == []


def test_pattern_with_terminator_raises():
    tree = build(b"banana")
    with pytest.raises(ReservedByteInInput) as excinfo:
        search(tree, b"a$")
    assert (excinfo.value.source, excinfo.value.position) == ("pattern", 1)
    # '#' is an ordinary byte for a single-text tree.
    assert search(tree, b"#") is None
    assert search(build(b"x#y"), b"#y") == 1


def test_search_rejects_generalized_tree():
    tree = build_generalized(b"abcdef", b"zxy")
    for query in (find_match, search, all_occurrences):
        for pattern in (b"xy", b"x#y", b""):
            with pytest.raises(ValueError) as excinfo:
                query(tree, pattern)
            assert excinfo.type is ValueError


def test_str_pattern():
    tree = build("banana")
    assert search(tree, "nan") == 2
    with pytest.raises(TypeError):
        search(tree, 3.5)


def test_random_search_and_occurrences():
    rng = random.Random(2024)
    for _ in range(60):
        check_search_and_occurrences(generate_random_binary_string(rng, 1, 30), rng)


# --- All occurrences ---

def test_all_occurrences_banana():
    tree = build(b"banana")
    assert sorted(all_occurrences(tree, b"ana")) == [1, 3]
    assert sorted(all_occurrences(tree, b"a")) == [1, 3, 5]
    assert all_occurrences(tree, b"banana") == [0]
    assert all_occurrences(tree, b"x") == []


def test_all_occurrences_follow_breadth_first_order():
    tree = build(b"banana")
    # Below "a": ["na" -> [1, 3], "$" -> 5]. Leaf 1 is queued before 5, leaf 3 after it.
    assert all_occurrences(tree, b"a") == [1, 5, 3]


def test_overlapping_occurrences():
    tree = build(b"aaaa")
    assert sorted(all_occurrences(tree, b"aa")) == [0, 1, 2]


# --- Longest repeated substring ---

def test_lrs_banana():
    info = longest_repeated_substring(build(b"banana"))
    assert info == RepeatInfo(3, 1, 3)
    assert {info.pos1, info.pos2} == {1, 3}


def test_lrs_none_without_repeats():
    assert longest_repeated_substring(build(b"abc")) is None
    assert longest_repeated_substring(build(b"")) is None


def test_lrs_unpacks_as_tuple():
    length, pos1, pos2 = longest_repeated_substring(build(b"abcabc"))
    assert length == 3
    assert {pos1, pos2} == {0, 3}


def test_lrs_witness_below_internal_sibling():
    # Splits turn earlier leaves into internal nodes, so a leaf's next sibling
    # may be internal; the second witness must still be a real suffix.
    text = b"abaababaab"
    info = longest_repeated_substring(build(text))
    assert info.pos2 >= 0
    assert text[info.pos1:info.pos1 + info.length] == text[info.pos2:info.pos2 + info.length]


def test_lrs_equal_length_tie_keeps_first_candidate():
    # "a" (leaves 0, 1) and "b" (leaves 2, 3) both repeat once; "a" is reached first.
    tree = build(b"aabb")
    assert longest_repeated_substring(tree) == RepeatInfo(1, 0, 1)
    assert reference_repeat(tree) == (1, 0, 1)
    # Below "ab": leaf 0 then leaf 2; the later length-1 candidate under "b" loses.
    assert longest_repeated_substring(build(b"abab")) == RepeatInfo(2, 0, 2)


def test_random_lrs():
    rng = random.Random(7)
    for _ in range(120):
        check_repeat(generate_random_binary_string(rng, 0, 40))


def test_lrs_rejects_generalized_tree():
    with pytest.raises(ValueError):
        longest_repeated_substring(build_generalized(b"ab", b"ba"))


# --- Longest common substring ---

def test_lcs_example():
    tree = build_generalized(b"abcdef", b"zabcy")
    assert longest_common_substring(tree, 6) == CommonSubstringInfo(3, 0, 1)
    assert longest_common_substring(tree) == (3, 0, 1)


def test_lcs_equal_length_tie_keeps_first_in_preorder():
    # "ab" and "cd" are both common; the "ab" node precedes "cd" in the root's child list.
    tree = build_generalized(b"abxcd", b"cdyab")
    assert longest_common_substring(tree) == CommonSubstringInfo(2, 0, 3)
    assert reference_common(tree) == (2, 0, 3)


def test_lcs_none():
    assert longest_common_substring(build_generalized(b"abc", b"xyz")) is None
    assert longest_common_substring(build_generalized(b"", b"abc")) is None
    assert longest_common_substring(build_generalized(b"", b"")) is None


def test_lcs_whole_text():
    info = longest_common_substring(build_generalized(b"needle", b"haystack with needle inside"))
    assert info == (6, 0, 14)


def test_lcs_errors():
    with pytest.raises(ValueError):
        longest_common_substring(build(b"abc"), 3)
    with pytest.raises(ValueError):
        longest_common_substring(build_generalized(b"abc", b"bc"), 2)


def test_random_lcs():
    rng = random.Random(11)
    for _ in range(120):
        check_common(generate_random_binary_string(rng, 0, 25),
                     generate_random_binary_string(rng, 0, 25))


def test_lcs_on_deep_tree():
    # Depth of the tree grows with the run length; traversal must not recurse.
    text1 = b"a" * 1010
    text2 = b"b" + b"a" * 1005
    info = longest_common_substring(build_generalized(text1, text2))
    assert info.length == 1005


# --- Read-only behaviour ---

def test_repeated_queries_are_identical():
    tree = build(b"mississippi")
    first = (search(tree, b"ssi"), all_occurrences(tree, b"ssi"), longest_repeated_substring(tree))
    for _ in range(5):
        assert (search(tree, b"ssi"), all_occurrences(tree, b"ssi"),
                longest_repeated_substring(tree)) == first

    generalized = build_generalized(b"mississippi", b"missouri")
    lcs = longest_common_substring(generalized)
    assert lcs.length == 4
    assert longest_common_substring(generalized) == lcs


def run_tests(num_strings: int = 500, min_str_len: int = 0, max_str_len: int = 40) -> None:
    print(f"Starting tests with {num_strings} strings (length {min_str_len}-{max_str_len})...")
    rng = random.Random()
    fail_count = 0
    for i in range(num_strings):
        text = generate_random_binary_string(rng, min_str_len, max_str_len)
        other = generate_random_binary_string(rng, min_str_len, max_str_len)
        try:
            check_search_and_occurrences(text, rng)
            check_repeat(text)
            check_common(text, other)
        except AssertionError:
            print(f"String {i+1}/{num_strings} FAILED for {text!r} / {other!r}")
            fail_count += 1
    print(f"Total strings tested: {num_strings}, failures: {fail_count}")
    if fail_count:
        sys.exit(1)


if __name__ == "__main__":
    args = [int(a) for a in sys.argv[1:4]]
    run_tests(*args)
