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

import errno
import os
import sys
from pathlib import Path

import pytest
from craft_squash import errors, xattrs

from tests import linux_only


@linux_only
class TestXattrs:
    """Extended attribute tests."""

    @pytest.fixture
    def test_file(self, new_dir):
        file_path = Path(".tests-xattr-test-file")
        file_path.touch()

        yield str(file_path)

        file_path.unlink()

    def test_read_xattr(self, test_file, mocker):
        mock_getxattr = mocker.patch("os.getxattr", return_value=b"y")

        assert xattrs.read_xattr(test_file, "trusted.overlay.opaque") == b"y"
        mock_getxattr.assert_called_once_with(test_file, "trusted.overlay.opaque")

    def test_read_xattr_not_set(self, test_file, mocker):
        mocker.patch(
            "os.getxattr", side_effect=OSError(errno.ENODATA, "No data available")
        )

        assert xattrs.read_xattr(test_file, "trusted.overlay.opaque") is None

    def test_read_xattr_error(self, test_file, mocker):
        mocker.patch(
            "os.getxattr",
            side_effect=OSError(errno.EOPNOTSUPP, "Operation not supported"),
        )

        with pytest.raises(errors.XAttributeError) as raised:
            xattrs.read_xattr(test_file, "trusted.overlay.opaque")
        assert raised.value.key == "trusted.overlay.opaque"
        assert raised.value.path == test_file
        assert isinstance(raised.value.__cause__, OSError)

    def test_read_xattr_nonexistent(self, new_dir):
        with pytest.raises(FileNotFoundError):
            xattrs.read_xattr("I-DONT-EXIST", "trusted.overlay.opaque")

    def test_symlink(self, test_file, mocker):
        test_symlink = test_file + "-symlink"
        mock_getxattr = mocker.patch("os.getxattr")
        try:
            os.symlink(test_file, test_symlink)

            assert xattrs.read_xattr(test_symlink, "trusted.overlay.opaque") is None
            mock_getxattr.assert_not_called()
        finally:
            os.unlink(test_symlink)


def test_read_non_linux(mocker):
    mocker.patch.object(sys, "platform", "win32")
    with pytest.raises(RuntimeError) as raised:
        xattrs.read_xattr("whatever", "trusted.overlay.opaque")
    assert str(raised.value) == "xattr support only available for Linux"
