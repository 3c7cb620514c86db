# SPDX-License-Identifier: MIT
# Copyright (c) 2025 kakao-token contributors

"""Setup configuration for kakao-token package."""

from pathlib import Path

from setuptools import find_packages, setup

# Read the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="kakao-token",
    version="0.1.0",
    author="kakao-token contributors",
    description="Kakao access-token authentication strategy with profile normalization",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.109.0",  # For the host pipeline middleware and request/response types
        "httpx>=0.27.0",  # For the authenticated profile GET
        "pydantic>=2.4.0",  # For configuration and validation
        "python-multipart>=0.0.9",  # For form-encoded token requests
        "starlette>=0.49.1",  # For middleware base classes
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.23.0",
            "pytest-cov>=4.0.0",
            "pylint>=3.0.0",
            "mypy>=1.0.0",
        ],
    },
)
