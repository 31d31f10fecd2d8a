import sys
import time
from typing import Dict, List

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from naive_suffix_tree import (
    all_occurrences, build, build_generalized,
    longest_common_substring, longest_repeated_substring, search,
)
from naive_suffix_tree.python_backend.naive_inefficient import generate_random_bytes


def run_benchmark(length: int, alphabet: bytes, n_patterns: int, rng: np.random.Generator) -> Dict[str, float]:
    """Time construction and each query for one random text of the given length"""
    text = generate_random_bytes(length, alphabet, rng)
    other = generate_random_bytes(length, alphabet, rng)
    starts = rng.integers(0, max(length - 8, 1), n_patterns)
    patterns = [text[s:s + 8] for s in starts]

    start_time = time.perf_counter()
    tree = build(text)
    build_time = time.perf_counter() - start_time

    start_time = time.perf_counter()
    for p in patterns:
        search(tree, p)
    search_time = time.perf_counter() - start_time

    start_time = time.perf_counter()
    for p in patterns:
        all_occurrences(tree, p)
    occurrences_time = time.perf_counter() - start_time

    start_time = time.perf_counter()
    longest_repeated_substring(tree)
    lrs_time = time.perf_counter() - start_time

    start_time = time.perf_counter()
    generalized = build_generalized(text, other)
    generalized_build_time = time.perf_counter() - start_time

    start_time = time.perf_counter()
    longest_common_substring(generalized)
    lcs_time = time.perf_counter() - start_time

    return {
        'build_time': build_time,
        'search_time': search_time,
        'occurrences_time': occurrences_time,
        'lrs_time': lrs_time,
        'generalized_build_time': generalized_build_time,
        'lcs_time': lcs_time,
        'nodes': tree.node_count,
    }


def main(text_lengths: List[int], n_patterns: int = 200):
    alphabets = {'binary': b'01', 'dna': b'ACGT', 'lowercase': bytes(range(ord('a'), ord('z') + 1))}
    rng = np.random.default_rng(0)
    results = []

    try:
        for name, alphabet in alphabets.items():
            for length in text_lengths:
                print(f"Testing: {name} text of length {length}")
                row = run_benchmark(length, alphabet, n_patterns, rng)
                row.update({'alphabet': name, 'text_length': length})
                results.append(row)

        df = pd.DataFrame(results)
        df.to_csv('benchmark_results.csv', index=False)

        print("\nBenchmark Summary:")
        print("=================")
        for name in alphabets:
            data = df[df['alphabet'] == name]
            largest = data.loc[data['text_length'].idxmax()]
            print(f"\nAlphabet: {name}")
            print(f"Build time at length {largest['text_length']}: {largest['build_time']:.3f}s")
            print(f"Searches per second: {n_patterns / largest['search_time']:.0f}")
            print(f"LCS time: {largest['lcs_time']:.3f}s")

        plt.figure(figsize=(12, 6))

        plt.subplot(1, 2, 1)
        sns.lineplot(data=df, x='text_length', y='build_time', hue='alphabet', marker='o')
        plt.xlabel('Text Length')
        plt.ylabel('Build Time (s)')
        plt.title('Construction Time vs Text Length')
        plt.grid(True, alpha=0.3)

        plt.subplot(1, 2, 2)
        sns.lineplot(data=df, x='text_length', y='nodes', hue='alphabet', marker='o')
        plt.xlabel('Text Length')
        plt.ylabel('Nodes')
        plt.title('Tree Size vs Text Length')
        plt.grid(True, alpha=0.3)

        plt.tight_layout()
        plt.savefig('benchmark_results.png', dpi=300, bbox_inches='tight')
        plt.close()

    except KeyboardInterrupt:
        print("\nBenchmark interrupted by user.")


if __name__ == '__main__':
    lengths = [int(a) for a in sys.argv[1:]] or [100, 300, 1000, 3000]
    main(lengths)
