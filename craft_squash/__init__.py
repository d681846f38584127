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

"""Path semantics for squashing stacked container image layers."""

from .config import SquashConfig, load_config
from .conventions import (
    Classification,
    EntryKind,
    LayerFormat,
    MountConvention,
    NameConvention,
    WhiteoutConvention,
    classify,
    get_convention,
)
from .errors import ConfigError, NoParentError, SquashError, XAttributeError
from .filesystem import FilesystemQuery, HostFilesystem
from .path import (
    DIR_SEPARATOR,
    OPAQUE_WHITEOUT,
    OPAQUE_XATTR,
    ROOT,
    WHITEOUT_PREFIX,
    LayerPath,
    LayerPaths,
)

try:
    from ._version import __version__
except ImportError:  # pragma: no cover
    from importlib.metadata import version, PackageNotFoundError

    try:
        __version__ = version("craft_squash")
    except PackageNotFoundError:
        __version__ = "dev"


__all__ = [
    "__version__",
    "Classification",
    "ConfigError",
    "DIR_SEPARATOR",
    "EntryKind",
    "FilesystemQuery",
    "HostFilesystem",
    "LayerFormat",
    "LayerPath",
    "LayerPaths",
    "MountConvention",
    "NameConvention",
    "NoParentError",
    "OPAQUE_WHITEOUT",
    "OPAQUE_XATTR",
    "ROOT",
    "SquashConfig",
    "SquashError",
    "WHITEOUT_PREFIX",
    "WhiteoutConvention",
    "XAttributeError",
    "classify",
    "get_convention",
    "load_config",
]
