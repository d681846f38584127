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

"""Filesystem queries used by the attribute-based whiteout convention."""

import abc
import logging
import os
import stat
from pathlib import Path

from overrides import overrides

from craft_squash import xattrs

logger = logging.getLogger(__name__)


class FilesystemQuery(abc.ABC):
    """Read-only filesystem queries needed to classify overlayfs entries.

    Implementations may raise ``OSError`` or ``SquashError`` on failure;
    callers that only need a yes/no answer are expected to absorb them.
    """

    @abc.abstractmethod
    def getxattr(self, path: str, key: str) -> bytes | None:
        """Read an extended attribute.

        :param path: The layer path to query.
        :param key: The full attribute key.

        :returns: The attribute value, or None if it is not set.
        """

    @abc.abstractmethod
    def is_char_device(self, path: str) -> bool:
        """Verify if a path exists and is a character device.

        :param path: The layer path to query.
        """


class HostFilesystem(FilesystemQuery):
    """Query the live host filesystem.

    :param root: The directory layer paths are relative to. If not set,
        layer paths are used as host paths.
    """

    def __init__(self, root: Path | str | None = None) -> None:
        self._root = Path(root) if root is not None else None

    @property
    def root(self) -> Path | None:
        """Return the directory layer paths are relative to."""
        return self._root

    def host_path(self, path: str) -> str:
        """Convert a layer path to the corresponding host path.

        :param path: The layer path.
        """
        if self._root is None:
            return path

        return str(self._root / path.lstrip("/"))

    @overrides
    def getxattr(self, path: str, key: str) -> bytes | None:
        return xattrs.read_xattr(self.host_path(path), key)

    @overrides
    def is_char_device(self, path: str) -> bool:
        mode = os.stat(self.host_path(path)).st_mode
        return stat.S_ISCHR(mode)
