from __future__ import annotations

import os
from pathlib import Path

from setuptools import setup


BASE_DIR = Path(__file__).resolve().parent


def read_version() -> str:
    """Read the version, preferring the PKG_VERSION environment variable."""
    env_version = os.getenv("PKG_VERSION", "").strip()
    if env_version:
        return env_version.lstrip("v")
    return "1.0.0"


setup(
    name="qm-cover",
    version=read_version(),
    description="Minimal sum-of-products cover selection (Quine-McCluskey covering table).",
    long_description="Minimal sum-of-products cover selection (Quine-McCluskey covering table).",
    long_description_content_type="text/plain",
    packages=["qm_cover"],
    python_requires=">=3.8",
    install_requires=[
        "pyahocorasick",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
