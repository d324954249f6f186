# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
# SPDX-License-Identifier: GPL-3.0-or-later
import os

from setuptools import find_packages, setup

name = os.environ.get("PYPI_PKG_NAME", "tsproc")
if not name:
    raise ValueError("Environment variable PYPI_PKG_NAME must not be an empty string.")


# read the version string without importing the package
version = {}
with open(os.path.join("tsproc", "version.py"), "r") as fh:
    exec(fh.read(), version)


setup(
    name=name,
    version=version["__version__"],
    description="Regularize and merge discrete timeseries",
    packages=find_packages(exclude=("tests", "tests.*", "docs")),
    python_requires=">=3.10",
    install_requires=[
        "Click",
        "numpy",
        "pandas>=2.0",
        "pydantic>=2",
        "scipy",
        "typing_extensions",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["tsproc=tsproc.__main__:main"],
    },
)
