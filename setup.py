# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="clisk",
    version="0.1.0",
    description="A small Lisp with quote/unquote macros, run by a tree-walking interpreter",
    python_requires=">=3.10",
    packages=find_namespace_packages(include=["clisk", "clisk.*"]),
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["clisk=clisk.cli:main"],
    },
    zip_safe=False,
)
