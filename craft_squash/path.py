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

"""Layer path semantics for squashing stacked filesystem layers.

Two whiteout conventions are supported. In the name-based convention used
by AUFS and OCI layer tarballs, a file named ``.wh.<name>`` deletes
``<name>`` from the layers below, and a file named ``.wh..wh..opq`` hides
all lower layer contents of the directory containing it. In the
attribute-based convention used by overlayfs, a deleted file is a character
device with the same name, and an opaque directory carries the extended
attribute ``trusted.overlay.opaque`` set to ``y``.

Relevant OCI documentation available at:
https://github.com/opencontainers/image-spec/blob/main/layer.md
"""

import logging
import posixpath
from collections.abc import Iterable

from craft_squash import errors
from craft_squash.filesystem import FilesystemQuery, HostFilesystem

logger = logging.getLogger(__name__)

WHITEOUT_PREFIX = ".wh."
OPAQUE_WHITEOUT = WHITEOUT_PREFIX + WHITEOUT_PREFIX + ".opq"
DIR_SEPARATOR = "/"

OPAQUE_XATTR = "trusted.overlay.opaque"
OPAQUE_XATTR_VALUE = b"y"

# failures of a filesystem query, reported as a negative answer
_QUERY_ERRORS = (OSError, ValueError, RuntimeError, errors.SquashError)


class LayerPath(str):
    """A path inside the namespace of a single layer.

    Paths are not normalized on creation: call :meth:`normalize` before
    relying on the absence of trailing separators or leading spaces.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"

    def normalize(self) -> "LayerPath":
        """Return the cleaned form of this path.

        Leading spaces are removed unless the path is made only of spaces,
        since trailing whitespace is legal in file names. Trailing separators
        are removed, and ``.``, ``..`` and repeated separators are resolved.
        An empty result is the root directory.
        """
        current = str(self)
        while True:
            # cleaning can expose leading spaces, as in "a/../ b"
            cleaned = _normalize_once(current)
            if cleaned == current:
                return LayerPath(cleaned)
            current = cleaned

    def is_absolute_path(self) -> bool:
        """Verify if the path starts with the directory separator."""
        return self.startswith(DIR_SEPARATOR)

    def basename(self) -> str:
        """Return the last element of the path.

        Trailing separators are ignored. The basename of the root directory
        is the separator itself, and the basename of an empty path is ``.``.
        """
        if not self:
            return "."

        stripped = self.rstrip(DIR_SEPARATOR)
        if not stripped:
            return DIR_SEPARATOR

        return stripped.rsplit(DIR_SEPARATOR, maxsplit=1)[-1]

    def is_dir_whiteout(self) -> bool:
        """Verify if this path is an opaque directory marker.

        Lower layer contents of the directory containing the marker are
        hidden when squashing.
        """
        return self.basename() == OPAQUE_WHITEOUT

    def is_whiteout(self) -> bool:
        """Verify if this path is a whiteout marker.

        Opaque directory markers are also whiteouts, check
        :meth:`is_dir_whiteout` first when the distinction matters.
        """
        return self.basename().startswith(WHITEOUT_PREFIX)

    def is_dir_whiteout_mount(self, fs: FilesystemQuery | None = None) -> bool:
        """Verify if the directory containing this path is an overlayfs opaque dir.

        Any failure to read the attribute is reported as not opaque: a
        missing attribute and an unreadable one can't be told apart by
        callers, so the result is collapsed to a boolean.

        :param fs: The filesystem to query, defaults to the host filesystem.
        """
        fs = fs or HostFilesystem()
        directory = _dirname(self)

        try:
            value = fs.getxattr(directory, OPAQUE_XATTR)
        except _QUERY_ERRORS as err:
            logger.debug("cannot read opaque attribute of %s: %s", directory, err)
            return False

        return value == OPAQUE_XATTR_VALUE

    def is_whiteout_mount(self, fs: FilesystemQuery | None = None) -> bool:
        """Verify if this path is an overlayfs whiteout file.

        Overlayfs whiteout files are represented as character devices. A
        path that can't be inspected is not a whiteout.

        :param fs: The filesystem to query, defaults to the host filesystem.
        """
        fs = fs or HostFilesystem()

        try:
            return fs.is_char_device(self)
        except _QUERY_ERRORS as err:
            logger.debug("cannot stat %s: %s", self, err)
            return False

    def unwhiteout_path(self) -> "LayerPath":
        """Return the path deleted by this name-based whiteout marker.

        The opaque marker resolves to its directory, other markers resolve
        to their name without the whiteout prefix.

        :raises NoParentError: If this is the root directory.
        """
        basename = self.basename()
        if basename == OPAQUE_WHITEOUT:
            return self.parent_path()

        parent = self.parent_path()
        return LayerPath(_join(parent, basename.removeprefix(WHITEOUT_PREFIX)))

    def unwhiteout_path_mount(self) -> "LayerPath":
        """Return the directory affected by this overlayfs entry.

        An entry inside an opaque directory resolves to that directory. A
        whiteout character device has no encoded name to strip: removing
        the device is the deletion, so it also resolves to its directory.
        Both cases result in the cleaned parent, so no filesystem query is
        needed.

        :raises NoParentError: If this is the root directory.
        """
        return self.parent_path()

    def whiteout_path(self) -> "LayerPath":
        """Return the name-based whiteout marker that deletes this path.

        The path is normalized before the marker is derived.

        :raises NoParentError: If this is the root directory.
        """
        path = self.normalize()
        parent = path.parent_path()
        return LayerPath(_join(parent, WHITEOUT_PREFIX + path.basename()))

    def opaque_marker_path(self) -> "LayerPath":
        """Return the name-based marker that makes this directory opaque."""
        return LayerPath(_join(self, OPAQUE_WHITEOUT))

    def parent_path(self) -> "LayerPath":
        """Return the directory containing this path.

        :raises NoParentError: If this is the root directory.
        """
        parent, child = _split(self)
        sanitized = LayerPath(parent).normalize()
        if sanitized == DIR_SEPARATOR:
            if child:
                return ROOT
            raise errors.NoParentError(str(self))

        return sanitized

    def constituent_paths(self) -> "LayerPaths":
        """Return all ancestor directories of this path, from the root down.

        For example, ``/home/user/file.txt`` results in ``/``, ``/home``
        and ``/home/user``.
        """
        parents = self.strip(DIR_SEPARATOR).split(DIR_SEPARATOR)
        return LayerPaths(
            LayerPath(DIR_SEPARATOR + DIR_SEPARATOR.join(parents[:idx]))
            for idx in range(len(parents))
        )

    def all_paths(self) -> "LayerPaths":
        """Return all ancestor directories of this path followed by the path itself."""
        full_paths = self.constituent_paths()
        if self != DIR_SEPARATOR:
            full_paths.append(self)
        return full_paths


ROOT = LayerPath(DIR_SEPARATOR)


class LayerPaths(list):
    """A list of layer paths sortable in lexicographic order."""

    def __init__(self, paths: Iterable[str] = ()) -> None:
        super().__init__(LayerPath(p) for p in paths)

    def swap(self, i: int, j: int) -> None:
        """Exchange the paths at positions ``i`` and ``j``."""
        self[i], self[j] = self[j], self[i]

    def less(self, i: int, j: int) -> bool:
        """Verify if the path at position ``i`` sorts before the one at ``j``."""
        return str(self[i]) < str(self[j])


def _normalize_once(raw: str) -> str:
    trimmed = raw
    if trimmed.count(" ") < len(trimmed):
        trimmed = trimmed.lstrip(" ")

    trimmed = trimmed.rstrip(DIR_SEPARATOR)

    if not trimmed:
        return DIR_SEPARATOR

    return _clean(trimmed)


def _clean(path: str) -> str:
    """Clean a path lexically, collapsing all leading separators."""
    cleaned = posixpath.normpath(path)

    # posix allows two leading slashes to have a special meaning
    if cleaned.startswith("//"):
        cleaned = DIR_SEPARATOR + cleaned.lstrip(DIR_SEPARATOR)

    return cleaned


def _split(path: str) -> tuple[str, str]:
    """Split a path after its last separator."""
    idx = path.rfind(DIR_SEPARATOR)
    return path[: idx + 1], path[idx + 1 :]


def _dirname(path: str) -> str:
    return _clean(_split(path)[0])


def _join(*elements: str) -> str:
    joined = DIR_SEPARATOR.join(e for e in elements if e)
    return _clean(joined) if joined else ""
