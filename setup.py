"""Setup configuration for the deepset package."""

import os
from setuptools import setup, find_packages

# Read the README for PyPI
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Read version from package
version_file = os.path.join(os.path.dirname(__file__), "deepset", "__init__.py")
with open(version_file) as f:
    for line in f:
        if line.startswith("__version__"):
            version = line.split("=")[1].strip().strip('"').strip("'")
            break
    else:
        version = "0.1.0"

setup(
    name="deepset-collection",
    version=version,
    description="A set container that deduplicates values by deep structural equality",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "License :: OSI Approved :: ISC License (ISCL)",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "typing-extensions>=4.5",
        "pyyaml>=6.0",
        "rich>=13.0",
        "numpy>=1.21.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "coverage>=6.0",
            "ruff>=0.1",
            "mypy>=1.0",
            "black>=23.0",
            "isort>=5.0",
            "build>=0.10",
            "twine>=4.0",
        ],
        "test": [
            "pytest>=7.0",
            "coverage>=6.0",
        ],
    },
    include_package_data=True,
    package_data={
        "deepset": ["py.typed"],
    },
    keywords=[
        "set",
        "deep-equality",
        "structural-hash",
        "deduplication",
        "collections",
    ],
)
