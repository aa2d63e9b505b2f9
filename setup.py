#!/usr/bin/env python3
"""
privmut - private mutation finder for placed query sequences
"""

from setuptools import setup, find_packages

# Read version number
def get_version():
    with open("privmut/__init__.py", "r") as f:
        for line in f:
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.1.0"

# Read long description
def get_long_description():
    try:
        with open("README.md", "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        return "privmut - private nucleotide and amino-acid mutations relative to the nearest reference tree node"

setup(
    name="privmut",
    version=get_version(),
    author="privmut developers",
    author_email="",
    description="Private mutations of query sequences relative to their nearest reference tree node",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["privmut", "privmut.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
    ],
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20.0",
        "pandas>=1.3.0",
        "biopython>=1.79",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov>=2.0",
            "black>=21.0",
            "isort>=5.0",
            "mypy>=0.900",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
