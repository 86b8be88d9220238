#!/usr/bin/env python
"""
memstage - In-memory staging layer for file content
"""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Define required packages
required_packages = [
    "pydantic>=2.0.0",  # For configuration validation
    "psutil>=5.9.0",    # For host memory reporting
    "pyyaml>=6.0",      # For configuration file support
    "tabulate>=0.9.0",  # For formatted table output
    "rich>=13.5.0",     # For rich terminal output
]

setup(
    name="memstage",
    version="1.0.0",
    description="In-memory staging of file content with explicit save and load",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=required_packages,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "memstage=memstage.cli:main",
        ],
    },
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
