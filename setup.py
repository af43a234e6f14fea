from pathlib import Path
from setuptools import find_packages, setup


def read_version(root: Path) -> str:
    """Return ``__version__`` from the package without importing it."""
    init = root / "solsigner" / "__init__.py"
    for line in init.read_text(encoding="utf-8").splitlines():
        if line.startswith("__version__"):
            return line.split("=", 1)[1].strip().strip("\"'")
    raise RuntimeError("__version__ not found in solsigner/__init__.py")


ROOT = Path(__file__).parent

setup(
    name="solsigner",
    version=read_version(ROOT),
    description="Sign and verify messages with Solana Ed25519 keypairs",
    packages=find_packages(include=["solsigner", "solsigner.*"]),
    python_requires=">=3.11",
    install_requires=[
        "solders>=0.21",
        "pydantic>=2",
        "rich>=13",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "base58>=2.1",
        ],
    },
    entry_points={
        "console_scripts": [
            "solsigner=solsigner.cli:main",
        ],
    },
)
