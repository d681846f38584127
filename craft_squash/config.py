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

"""Squash configuration model."""

import logging
from pathlib import Path
from typing import Any

import pydantic
import yaml

from craft_squash import errors
from craft_squash.conventions import LayerFormat, WhiteoutConvention, get_convention
from craft_squash.filesystem import HostFilesystem

logger = logging.getLogger(__name__)


class SquashConfig(pydantic.BaseModel, frozen=True):  # type: ignore[misc]
    """Settings used to process a layer.

    :param layer_format: The on-disk format of the layer.
    :param layer_dir: The directory holding an overlay layer. Layer paths
        are queried relative to it.
    """

    model_config = pydantic.ConfigDict(
        alias_generator=lambda s: s.replace("_", "-"),
        populate_by_name=True,
        extra="forbid",
    )

    layer_format: LayerFormat = LayerFormat.AUFS
    layer_dir: Path | None = None

    @classmethod
    def unmarshal(cls, data: dict[str, Any]) -> "SquashConfig":
        """Create and populate a new ``SquashConfig`` object from dictionary data.

        :param data: The dictionary data to unmarshal.

        :return: The newly created object.

        :raise TypeError: If data is not a dictionary.
        :raise ConfigError: If data contains invalid settings.
        """
        if not isinstance(data, dict):
            raise TypeError("squash config data is not a dictionary")

        try:
            return cls.model_validate(data)
        except pydantic.ValidationError as err:
            raise errors.ConfigError.from_validation_error(err.errors()) from err

    def marshal(self) -> dict[str, Any]:
        """Create a dictionary containing the configuration data.

        :return: The newly created dictionary.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def convention(self) -> WhiteoutConvention:
        """Return the whiteout convention for the configured layer."""
        fs = HostFilesystem(self.layer_dir)
        return get_convention(self.layer_format, fs)


def load_config(filename: str | Path) -> SquashConfig:
    """Load the squash configuration from a YAML file.

    An empty file results in the default configuration.

    :param filename: The configuration file to read.

    :raise ConfigError: If the file content is not valid.
    """
    logger.debug("load squash config from %s", filename)
    with open(filename) as config_file:
        try:
            data = yaml.safe_load(config_file)
        except yaml.YAMLError as err:
            raise errors.ConfigError(f"cannot parse {str(filename)!r}: {err}") from err

    if data is None:
        data = {}

    try:
        return SquashConfig.unmarshal(data)
    except TypeError as err:
        raise errors.ConfigError(str(err)) from err
