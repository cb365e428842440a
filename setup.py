#!/usr/bin/env python
# -*- coding: utf-8 -*-

import os
import re

from setuptools import setup


def get_version(package):
    """
    Return package version as listed in `__version__` in `init.py`.
    """
    init_py = open(os.path.join(package, "__init__.py")).read()
    return re.search("__version__ = ['\"]([^'\"]+)['\"]", init_py).group(1)


def get_long_description():
    """
    Return the README.
    """
    return open("README.md", "r", encoding="utf8").read()


def get_packages(package):
    """
    Return root package and all sub-packages.
    """
    return [
        dirpath
        for dirpath, dirnames, filenames in os.walk(package)
        if os.path.exists(os.path.join(dirpath, "__init__.py"))
    ]


setup(
    name="rxplay",
    version=get_version("rxplay"),
    license="BSD",
    description="Demand-driven publishers, subscribers and operators to play with",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    packages=get_packages("rxplay"),
    python_requires=">=3.9",
    install_requires=["anyio>=4.11"],
    extras_require={"testing": ["pytest"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: BSD License",
        "Operating System :: OS Independent",
        "Framework :: AnyIO",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
    ],
)
