#!/usr/bin/env python
# -*- coding: utf-8 -*-

import re
from pathlib import Path

from setuptools import setup


def get_version(package):
    """
    Return package version as listed in `__version__.py`.
    """
    version = Path(package, "__version__.py").read_text()
    return re.search("__version__ = ['\"]([^'\"]+)['\"]", version).group(1)


def get_long_description():
    """
    Return the README.
    """
    long_description = ""
    with open("README.md", encoding="utf8") as f:
        long_description += f.read()
    return long_description


def get_packages(package):
    """
    Return root package and all sub-packages.
    """
    return [str(path.parent) for path in Path(package).glob("**/__init__.py")]


setup(
    name="httpx-restclient",
    python_requires=">=3.8",
    version=get_version("httpx_restclient"),
    license="Apache-2.0",
    description="A blocking REST client with deferred responses, built on HTTPX transports.",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    package_data={"httpx_restclient": ["py.typed"]},
    packages=get_packages("httpx_restclient"),
    include_package_data=True,
    zip_safe=False,
    install_requires=[
        "httpx>=0.22",
        "multimethod",
    ],
    extras_require={
        "test": [
            "pytest",
            "mock",
            "freezegun",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Web Environment",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Topic :: Internet :: WWW/HTTP",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3 :: Only",
    ],
)
