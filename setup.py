#!/usr/bin/python3

from setuptools import setup

setup(
    name="debinfo",
    version="1.0.0",
    author="Jeremy Davis",
    author_email="jeremy@turnkeylinux.org",
    packages=["debinfo_lib"],
    scripts=["debinfo"],
    python_requires=">=3.10",
    install_requires=["python-debian"],
    extras_require={"test": ["pytest"]},
)
