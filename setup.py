"""
popsim: tick-driven demographic simulation with technology, war and
overpopulation feedback.
"""

from setuptools import setup, find_packages

setup(
    name="popsim",
    version="0.1.0",
    description="Tick-driven demographic simulation: stochastic birth/death rates "
                "modulated by a technology ladder, wars and carrying capacity.",
    packages=find_packages(include=["popsim", "popsim.*"]),
    package_data={"popsim": ["scenarios/*.yaml"]},
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
