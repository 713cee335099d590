"""
Setup script for mlrow

Pure Python package (src layout). Build-system requirements and pytest
options live in pyproject.toml.
"""

from setuptools import setup, find_packages

setup(
    name="mlrow",
    version="0.1.0",
    description="Dense and sparse rows of numeric-capable values with automatic representation selection",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "numpy>=1.22",
        "scipy>=1.8",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    zip_safe=True,
)
