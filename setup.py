# SPDX-FileCopyrightText: 2025 quorum-recover contributors
# SPDX-License-Identifier: MIT

from setuptools import find_packages, setup

setup(
    name="quorum-recover",
    version="0.1.0",
    description="Secret reconstruction with outlier detection for polynomial secret sharing",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[
        "click<9.0,>=8.1",
        "cryptography>=38.0.4",
        "PyYAML<7.0,>=6.0",
    ],
    extras_require={
        # dev / testing
        "test": [
            "pytest>=8.0.0",
            "pytest-timeout>=2.3.0",
            "hypothesis>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "quorum-recover=quorum_recover.cli:main",
        ],
    },
)
