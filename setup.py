"""
Pagesmith setup.py — Package configuration and CLI entry point.
"""

from setuptools import find_packages, setup

setup(
    name="pagesmith",
    version="1.0.0",
    description="Pagesmith — page scaffolding and navigation for Django-style apps",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "pagesmith=pagesmith.cli:main",
        ],
    },
    install_requires=[
        "pydantic>=2.5",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
)
