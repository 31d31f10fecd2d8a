from setuptools import setup, find_packages

setup(
    name="naive_suffix_tree",
    version="0.1.0",
    description="Naive suffix trees and generalized suffix trees over byte strings",
    packages=find_packages(where='.', include=['naive_suffix_tree', 'naive_suffix_tree.*']),
    python_requires='>=3.10',
    install_requires=[
        'numpy>=1.19.0'
    ],
    extras_require={
        'test': ['pytest'],
        # benchmark.py at the repository root
        'benchmark': ['pandas', 'matplotlib', 'seaborn'],
    },
    zip_safe=False
)
