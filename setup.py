from setuptools import setup, find_namespace_packages
from pathlib import Path

# Read the requirements from requirements.txt
reqs_path = Path(__file__).parent / "requirements.txt"
requirements = [
    line.strip()
    for line in reqs_path.read_text().splitlines()
    if line.strip() and not line.startswith("#")
]

setup(
    name="boolset",
    version="0.1.0",
    description="Infinite boolean sequences stored as inverted ranges",
    author="Sir Wabbit",
    python_requires=">=3.11",
    packages=find_namespace_packages(include=["boolset", "boolset.*"]),
    py_modules=["bset"],
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=8", "hypothesis>=6.100"],
    },
    entry_points={
        "console_scripts": ["bset=boolset.cli:main"],
    },
)
