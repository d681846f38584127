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

from pathlib import Path

import pytest
from craft_squash import FilesystemQuery
from overrides import overrides


class FakeFilesystem(FilesystemQuery):
    """An in-memory filesystem holding overlayfs whiteout metadata."""

    def __init__(self) -> None:
        self.xattrs: dict[tuple[str, str], bytes] = {}
        self.char_devices: set[str] = set()
        self.error: Exception | None = None

    def set_opaque(self, path: str, value: bytes = b"y") -> None:
        self.xattrs[(path, "trusted.overlay.opaque")] = value

    @overrides
    def getxattr(self, path: str, key: str) -> bytes | None:
        if self.error:
            raise self.error
        return self.xattrs.get((str(path), key))

    @overrides
    def is_char_device(self, path: str) -> bool:
        if self.error:
            raise self.error
        return str(path) in self.char_devices


@pytest.fixture
def fake_fs() -> FakeFilesystem:
    return FakeFilesystem()


@pytest.fixture
def new_dir(monkeypatch, tmpdir):
    """Change to a new temporary directory."""
    monkeypatch.chdir(tmpdir)
    return tmpdir


@pytest.fixture
def new_path(monkeypatch, tmp_path) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path
