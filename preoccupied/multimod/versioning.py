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
preoccupied.multimod.versioning

A snapshot of a repository's module sets, the location of each component,
and the version of each component.

Example:

```python
versioning = ModuleVersioning.from_file("versions.yaml", "/src/monorepo")

versioning.component_version("example.com/project/api")
# 'v1.2.0'

versioning.module_set_tags("stable-v1", "/src/monorepo")
# ['v1.2.0', 'api/v1.2.0']
```

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Union

from .declaration import VersioningConfig, read_versioning_file
from .errors import ComponentNotFoundError, ModuleSetNotFoundError
from .modset import (
    ComponentFilePath, ComponentInfo, ComponentPath,
    ComponentTagName, ModuleSet)
from .paths import DeclarationFormat, resolve_declaration
from .tags import combine_tag_names_and_version, component_paths_to_tag_names


__all__ = (
    "ModuleVersioning",
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ModuleVersioning:
    """
    Immutable view combining the module set map, the component path map,
    and the component info map derived from them. Build a new instance to
    pick up changes.
    """

    module_set_map: Mapping[str, ModuleSet]
    component_path_map: Mapping[ComponentPath, ComponentFilePath]
    component_info_map: Mapping[ComponentPath, ComponentInfo]


    def __post_init__(self) -> None:
        # read-only views over private copies
        for name in ("module_set_map", "component_path_map", "component_info_map"):
            object.__setattr__(
                self, name, MappingProxyType(dict(getattr(self, name))))


    @classmethod
    def build(
            cls,
            config: VersioningConfig,
            repo_root: str,
            declaration: Union[str, DeclarationFormat, None] = None) -> "ModuleVersioning":
        """
        Validate config and resolve its components beneath repo_root.

        :raises DuplicateComponentError: on conflicting membership
        :raises ComponentNotFoundError: if a member has no declaration file
        """

        info_map = config.build_component_info_map()
        set_map = dict(config.module_sets)
        path_map = config.build_component_path_map(
            repo_root, resolve_declaration(declaration))

        return cls(
            module_set_map=set_map,
            component_path_map=path_map,
            component_info_map=info_map)


    @classmethod
    def from_file(
            cls,
            versioning_file: str,
            repo_root: str,
            declaration: Union[str, DeclarationFormat, None] = None) -> "ModuleVersioning":

        config = read_versioning_file(versioning_file)
        return cls.build(config, repo_root, declaration)


    def get_module_set(self, name: str) -> ModuleSet:
        """
        Return the module set with the given name.

        :raises ModuleSetNotFoundError: if there is no such set
        """

        found = self.module_set_map.get(name)
        if found is None:
            raise ModuleSetNotFoundError(name)
        return found


    def get_component_info(self, path: ComponentPath) -> ComponentInfo:
        """
        Return the owning module set and version of a component.

        :raises ComponentNotFoundError: if no module set has the component
        """

        found = self.component_info_map.get(path)
        if found is None:
            raise ComponentNotFoundError(
                path, f"component {path} is not a member of any module set")
        return found


    def component_version(self, path: ComponentPath) -> str:
        return self.get_component_info(path).version


    def is_stable(self, name: str) -> bool:
        return self.get_module_set(name).is_stable


    def module_set_tag_names(
            self,
            name: str,
            repo_root: str,
            declaration: Union[str, DeclarationFormat, None] = None) -> List[ComponentTagName]:
        """
        Tag names of every member of the named module set, in member order.
        """

        mod_set = self.get_module_set(name)
        return component_paths_to_tag_names(
            mod_set.modules, self.component_path_map, repo_root, declaration)


    def module_set_tags(
            self,
            name: str,
            repo_root: str,
            declaration: Union[str, DeclarationFormat, None] = None) -> List[str]:
        """
        Full release tags for every member of the named module set, combining
        each tag name with the set's version.
        """

        tag_names = self.module_set_tag_names(name, repo_root, declaration)
        tags = combine_tag_names_and_version(
            tag_names, self.get_module_set(name).version)

        logger.debug("module set %s tags: %s", name, tags)
        return tags


# The end.
