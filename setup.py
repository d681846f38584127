#!/usr/bin/env python
#
# Copyright 2026 Canonical Ltd.
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License version 3 as published by the Free Software Foundation.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

"""The setup script."""

from setuptools import find_packages, setup

VERSION = "0.1.0"

with open("README.md") as readme_file:
    readme = readme_file.read()


install_requires = [
    # see https://github.com/mkorpela/overrides/issues/121
    "overrides!=7.6.0",
    "PyYAML",
    "pydantic>=2.0.0,<3.0.0",
]

dev_requires = [
    "autoflake",
    "twine",
]

types_requires = [
    "mypy[reports]>=1.4.1,<2.0",
    "types-PyYAML",
    "types-setuptools",
]

test_requires = [
    "black",
    "codespell",
    "coverage",
    "hypothesis",
    "pydocstyle",
    "pytest",
    "pytest-cov",
    "pytest-mock",
    "tox",
]

extras_requires = {
    "dev": dev_requires + test_requires + types_requires,
    "test": test_requires + types_requires,
    "types": types_requires,
}


setup(
    name="craft-squash",
    version=VERSION,
    description="Path semantics for squashing container image layers",
    long_description=readme,
    long_description_content_type="text/markdown",
    author="Canonical Ltd.",
    author_email="snapcraft@lists.snapcraft.io",
    license="GNU Lesser General Public License v3",
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU Lesser General Public License v3 (LGPLv3)",
        "Natural Language :: English",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    install_requires=install_requires,
    extras_require=extras_requires,
    packages=find_packages(include=["craft_squash", "craft_squash.*"]),
    package_data={"craft_squash": ["py.typed"]},
    include_package_data=True,
    zip_safe=False,
)
