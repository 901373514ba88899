"""
battle-engine — deterministic battle resolution for nation-simulation wars.
Ground, air and naval attack formulas with victory-tier grading.
"""

from setuptools import setup, find_packages

setup(
    name="battle-engine",
    version="1.0.0",
    description="Deterministic battle resolution engine: victory-tier rolls, "
                "unit losses, resource consumption, loot and infrastructure damage.",
    packages=find_packages(include=["battle_engine", "battle_engine.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.24",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
        ],
    },
)
