# This library is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This library is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this library; if not, see <http://www.gnu.org/licenses/>.

"""
preoccupied.multimod.declaration

Loading of the versioning file, which declares the module sets of a
repository and the components excluded from versioning.

Example:

```yaml
module-sets:
  stable-v1:
    version: v1.2.0
    modules:
      - example.com/project
      - example.com/project/api
  experimental:
    version: v0.3.0
    modules:
      - example.com/project/contrib
excluded-modules:
  - example.com/project/internal/tools
```

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import logging
from typing import Dict, Tuple, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import DeclarationError
from .modset import (
    ComponentInfoMap, ComponentPath, ComponentPathMap, ExcludedComponents,
    ModuleSet, ModuleSetMap, build_component_info_map,
    build_module_sets_map, get_excluded_modules, should_exclude_module)
from .paths import DeclarationFormat, build_component_path_map


__all__ = (
    "VersioningConfig",
    "parse_versioning",
    "read_versioning_file",
)


logger = logging.getLogger(__name__)


class VersioningConfig(BaseModel):
    """
    The parsed contents of a versioning file.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True)

    module_sets: Dict[str, ModuleSet] = Field(alias="module-sets")
    excluded_modules: Tuple[ComponentPath, ...] = Field(
        default=(), alias="excluded-modules")


    def build_module_sets_map(self) -> ModuleSetMap:
        return build_module_sets_map(self.module_sets, self.excluded_modules)


    def build_component_info_map(self) -> ComponentInfoMap:
        return build_component_info_map(self.module_sets, self.excluded_modules)


    def should_exclude_module(self, path: ComponentPath) -> bool:
        return should_exclude_module(path, self.excluded_modules)


    def get_excluded_modules(self) -> ExcludedComponents:
        return get_excluded_modules(self.excluded_modules)


    def build_component_path_map(
            self,
            repo_root: str,
            declaration: Union[str, DeclarationFormat, None] = None) -> ComponentPathMap:

        return build_component_path_map(self.module_sets, repo_root, declaration)


def parse_versioning(text: str, source: str = "<string>") -> VersioningConfig:
    """
    Parse the YAML text of a versioning file.

    :param text: YAML document
    :param source: name used in error messages
    :raises DeclarationError: if the document is not well-formed YAML, or
      does not have the structure of a versioning file
    """

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as err:
        raise DeclarationError(f"invalid YAML in {source}: {err}") from err

    if not isinstance(data, dict):
        raise DeclarationError(
            f"{source} must contain a mapping, not {type(data).__name__}")

    # an empty "excluded-modules:" key loads as None
    if data.get("excluded-modules", ()) is None:
        data["excluded-modules"] = ()

    try:
        return VersioningConfig.model_validate(data)
    except ValidationError as err:
        raise DeclarationError(f"invalid versioning file {source}: {err}") from err


def read_versioning_file(path: str) -> VersioningConfig:
    """
    Read and parse the versioning file at path.

    :raises DeclarationError: if the file cannot be read or parsed
    """

    logger.debug("reading versioning file %s", path)

    try:
        with open(path, "rt", encoding="utf-8") as fd:
            text = fd.read()
    except OSError as err:
        raise DeclarationError(
            f"could not read versioning file {path}: {err}") from err

    return parse_versioning(text, source=path)


# The end.
