#!/usr/bin/env python3
"""
Setup script for the Smartcar API client library
"""

from setuptools import find_packages, setup

setup(
    name="smartcar_api",
    version="1.0.0",
    description="Python client library for the Smartcar vehicle API.",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "requests>=2.27",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.8",
)
