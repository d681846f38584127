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

"""Whiteout conventions of the supported layer formats."""

import abc
import enum
import logging
from typing import NamedTuple

from overrides import overrides

from craft_squash.filesystem import FilesystemQuery, HostFilesystem
from craft_squash.path import LayerPath

logger = logging.getLogger(__name__)


class LayerFormat(enum.Enum):
    """The on-disk format of a layer."""

    AUFS = "aufs"
    OVERLAY = "overlay"

    def __str__(self) -> str:
        return self.value


class EntryKind(enum.Enum):
    """The meaning of a layer entry when squashing."""

    FILE = "file"
    WHITEOUT = "whiteout"
    OPAQUE = "opaque"


class Classification(NamedTuple):
    """A classified layer entry.

    :param kind: The meaning of the entry.
    :param path: The normalized entry path.
    :param target: The path the entry refers to: the entry itself for
        regular files, the deleted file for whiteouts, or the directory
        whose lower contents are hidden for opaque markers.
    """

    kind: EntryKind
    path: LayerPath
    target: LayerPath


class WhiteoutConvention(abc.ABC):
    """The way a layer format encodes deletions."""

    layer_format: LayerFormat

    @abc.abstractmethod
    def is_file_deletion(self, path: LayerPath) -> bool:
        """Verify if the entry deletes a single file from lower layers.

        :param path: The entry path.
        """

    @abc.abstractmethod
    def is_dir_opaque(self, path: LayerPath) -> bool:
        """Verify if the entry hides the lower contents of a directory.

        :param path: The entry path.
        """

    @abc.abstractmethod
    def resolve(self, path: LayerPath) -> LayerPath:
        """Return the path a deletion entry refers to.

        :param path: The entry path.

        :raises NoParentError: If the entry is the root directory.
        """


class NameConvention(WhiteoutConvention):
    """Whiteouts encoded in entry names, as in AUFS and OCI layer tarballs."""

    layer_format = LayerFormat.AUFS

    @overrides
    def is_file_deletion(self, path: LayerPath) -> bool:
        return path.is_whiteout() and not path.is_dir_whiteout()

    @overrides
    def is_dir_opaque(self, path: LayerPath) -> bool:
        return path.is_dir_whiteout()

    @overrides
    def resolve(self, path: LayerPath) -> LayerPath:
        return path.unwhiteout_path()


class MountConvention(WhiteoutConvention):
    """Whiteouts encoded as device files and extended attributes, as in overlayfs.

    :param fs: The filesystem holding the layer, defaults to the host filesystem.
    """

    layer_format = LayerFormat.OVERLAY

    def __init__(self, fs: FilesystemQuery | None = None) -> None:
        self._fs = fs or HostFilesystem()

    @property
    def fs(self) -> FilesystemQuery:
        """Return the filesystem holding the layer."""
        return self._fs

    @overrides
    def is_file_deletion(self, path: LayerPath) -> bool:
        return path.is_whiteout_mount(self._fs)

    @overrides
    def is_dir_opaque(self, path: LayerPath) -> bool:
        return path.is_dir_whiteout_mount(self._fs)

    @overrides
    def resolve(self, path: LayerPath) -> LayerPath:
        return path.unwhiteout_path_mount()


def get_convention(
    layer_format: LayerFormat | str, fs: FilesystemQuery | None = None
) -> WhiteoutConvention:
    """Return the whiteout convention used by a layer format.

    :param layer_format: The layer format.
    :param fs: The filesystem holding the layer, only used by overlay layers.

    :raises ValueError: If the layer format is not supported.
    """
    layer_format = LayerFormat(layer_format)

    if layer_format == LayerFormat.OVERLAY:
        return MountConvention(fs)

    return NameConvention()


def classify(path: str, convention: WhiteoutConvention) -> Classification:
    """Normalize and classify a layer entry.

    Opacity is verified before single file deletion, since opaque markers
    are also whiteouts in the name-based convention.

    :param path: The raw entry path.
    :param convention: The whiteout convention of the layer.

    :returns: The entry classification.

    :raises NoParentError: If a deletion entry is the root directory.
    """
    entry = LayerPath(path).normalize()

    if convention.is_dir_opaque(entry):
        kind = EntryKind.OPAQUE
        target = convention.resolve(entry)
    elif convention.is_file_deletion(entry):
        kind = EntryKind.WHITEOUT
        target = convention.resolve(entry)
    else:
        kind = EntryKind.FILE
        target = entry

    logger.debug(
        "classify %s (%s): %s %s", entry, convention.layer_format, kind, target
    )
    return Classification(kind=kind, path=entry, target=target)
