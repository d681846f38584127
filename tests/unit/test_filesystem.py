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

import os
from pathlib import Path

import pytest
from craft_squash import filesystem
from craft_squash.filesystem import HostFilesystem

from tests import linux_only


class TestHostFilesystem:
    """Host filesystem queries."""

    @pytest.mark.parametrize(
        ("root", "path", "host_path"),
        [
            (None, "/a/b", "/a/b"),
            ("/layer", "/a/b", "/layer/a/b"),
            ("/layer", "a/b", "/layer/a/b"),
            ("/layer", "/", "/layer"),
            (Path("/layer"), "/a", "/layer/a"),
        ],
    )
    def test_host_path(self, root, path, host_path):
        assert HostFilesystem(root).host_path(path) == host_path

    def test_root(self):
        assert HostFilesystem().root is None
        assert HostFilesystem("/layer").root == Path("/layer")

    def test_getxattr(self, mocker):
        mock_read = mocker.patch(
            "craft_squash.xattrs.read_xattr", return_value=b"y"
        )
        fs = HostFilesystem("/layer")

        assert fs.getxattr("/a", "trusted.overlay.opaque") == b"y"
        mock_read.assert_called_once_with("/layer/a", "trusted.overlay.opaque")

    def test_is_char_device(self, new_path):
        (new_path / "layer").mkdir()
        (new_path / "layer" / "file").touch()
        fs = HostFilesystem(new_path / "layer")

        assert fs.is_char_device("/file") is False

    @linux_only
    def test_is_char_device_dev_null(self):
        assert HostFilesystem("/dev").is_char_device("/null") is True

    def test_is_char_device_missing(self, new_path):
        fs = HostFilesystem(new_path)
        with pytest.raises(FileNotFoundError):
            fs.is_char_device("/missing")

    def test_is_char_device_follows_symlinks(self, new_path, mocker):
        (new_path / "file").touch()
        (new_path / "link").symlink_to("file")
        spy = mocker.spy(os, "stat")

        assert HostFilesystem(new_path).is_char_device("link") is False
        spy.assert_called_once_with(str(new_path / "link"))


def test_filesystem_query_is_abstract():
    with pytest.raises(TypeError):
        filesystem.FilesystemQuery()  # type: ignore[abstract]
