"""
setup.py

Packaging metadata and CLI entry point for the content-catalog.

Version: 1.0.0. Validation engine for versioned language-learning content
trees (catalogs, paginated indexes, packs) and the bundle resolver that turns
declarative bundle definitions into ordered item lists.
"""
from setuptools import setup, find_packages

setup(
    name="content-catalog",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click",
        "pydantic>=2.0",
        "pyyaml",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "hypothesis",
        ],
    },
    entry_points={
        "console_scripts": [
            "content-catalog=cli:cli",
        ],
    },
    python_requires=">=3.8",
)
