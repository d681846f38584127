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

"""Helpers to read filesystem extended attributes."""

import errno
import logging
import os
import sys

from craft_squash import errors

logger = logging.getLogger(__name__)


def read_xattr(path: str, key: str) -> bytes | None:
    """Get the raw value of an extended attribute.

    :param path: The file to get metadata from.
    :param key: The full attribute key, including its namespace.

    :return: The attribute value, or None if the attribute is not set.

    :raises FileNotFoundError: If the file does not exist.
    :raises XAttributeError: If the attribute could not be read.
    """
    if sys.platform != "linux":
        raise RuntimeError("xattr support only available for Linux")

    # Extended attributes do not apply to symlinks.
    if os.path.islink(path):
        return None

    try:
        value = os.getxattr(path, key)
    except FileNotFoundError:
        raise
    except OSError as error:
        # No label present with:
        # OSError: [Errno 61] No data available: b'<path>'
        if error.errno == errno.ENODATA:
            return None

        # Chain unknown variants of OSError.
        raise errors.XAttributeError(key=key, path=path) from error

    logger.debug("read xattr %s=%r from %s", key, value, path)
    return value
