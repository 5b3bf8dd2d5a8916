#!/usr/bin/env python3
"""
Pantry Setup Script
===================
Allows installation of the pantry package.

Usage:
    pip install -e .           # Development install
    pip install -e ".[test]"   # Development install with test tools
    pip install .              # Regular install
"""

from setuptools import setup, find_packages

setup(
    name="pantry",
    version="1.0.0",
    description="Thread-safe in-memory key-value store with expiring items and per-key persistence",
    packages=find_packages(exclude=["tests", "tests.*", "scripts"]),
    python_requires=">=3.10",
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pantry=pantry.cli:main",
        ],
    },
)
