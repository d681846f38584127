# -*- Mode:Python; indent-tabs-mode:nil; tab-width:4 -*-
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

"""Craft squash errors."""

import dataclasses
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


@dataclasses.dataclass(repr=True)
class SquashError(Exception):
    """Unexpected error.

    :param brief: Brief description of error.
    :param details: Detailed information.
    :param resolution: Recommendation, if any.
    """

    brief: str
    details: str | None = None
    resolution: str | None = None

    def __str__(self) -> str:
        components = [self.brief]

        if self.details:
            components.append(self.details)

        if self.resolution:
            components.append(self.resolution)

        return "\n".join(components)


class NoParentError(SquashError):
    """A parent was requested for a path that has none.

    :param path: The path without a parent.
    """

    def __init__(self, path: str):
        self.path = path
        brief = f"Path {path!r} has no parent."
        details = "The root directory is not contained in any other directory."

        super().__init__(brief=brief, details=details)


class XAttributeError(SquashError):
    """Failed to read an extended attribute.

    :param key: The extended attribute key.
    :param path: The file path.
    """

    def __init__(self, key: str, path: str):
        self.key = key
        self.path = path
        brief = "Unable to read extended attribute."
        details = f"Failed to read attribute {key!r} on {path!r}."
        resolution = "Make sure your filesystem supports extended attributes."

        super().__init__(brief=brief, details=details, resolution=resolution)


class ConfigError(SquashError):
    """The squash configuration is not valid.

    :param message: The error message.
    """

    def __init__(self, message: str):
        self.message = message
        brief = "Invalid squash configuration."
        details = message
        resolution = "Review the configuration and make sure it's correct."

        super().__init__(brief=brief, details=details, resolution=resolution)

    @classmethod
    def from_validation_error(
        cls, error_list: "list[ErrorDetails]"
    ) -> "ConfigError":
        """Create a ConfigError from a pydantic error list.

        :param error_list: A list of dictionaries containing pydantic error definitions.
        """
        formatted_errors: list[str] = []

        for error in error_list:
            loc = error.get("loc")
            msg = error.get("msg")

            if not (loc and msg) or not isinstance(loc, tuple):
                continue

            field = ".".join(str(part) for part in loc)
            if error.get("type") == "missing":
                formatted_errors.append(f"- field {field!r} is required")
            elif error.get("type") == "extra_forbidden":
                formatted_errors.append(f"- extra field {field!r} not permitted")
            else:
                formatted_errors.append(f"- {msg} in field {field!r}")

        return cls(message="\n".join(formatted_errors))
