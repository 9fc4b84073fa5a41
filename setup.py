#!/usr/bin/env python3
"""
Setup script for specflow

Packages the specflow library and installs the `specflow` console script.
"""

from setuptools import setup, find_packages

setup(
    name="specflow",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click>=8.0",
        "rich>=13.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'specflow=specflow.cli:main',
        ],
    },
    include_package_data=True,
    zip_safe=False,
    python_requires='>=3.11',
)
