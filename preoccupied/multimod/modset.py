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
preoccupied.multimod.modset
Module sets, and the validation which turns them into a per-component index.

A module set is a named group of components which are always released
together, sharing a single version. A component may belong to at most one
module set, and may not be both a member of a set and excluded from
versioning.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import logging
from typing import Dict, Iterable, List, Mapping, Set, Tuple

from pydantic import (
    BaseModel, ConfigDict, TypeAdapter, ValidationError, field_validator)
from typing_extensions import TypeAlias

from .errors import DuplicateComponentError
from .versions import Version


__all__ = (
    "ComponentFilePath",
    "ComponentInfo",
    "ComponentInfoMap",
    "ComponentPath",
    "ComponentPathMap",
    "ComponentTagName",
    "ExcludedComponents",
    "ModuleSet",
    "ModuleSetMap",
    "build_component_info_map",
    "build_module_sets_map",
    "get_excluded_modules",
    "referenced_components",
    "should_exclude_module",
)


logger = logging.getLogger(__name__)


_version_adapter = TypeAdapter(Version)


ComponentPath: TypeAlias = str
"""
Opaque identifier of a single versioned component, eg. an import path.
"""

ComponentFilePath: TypeAlias = str
"""
Path to the declaration file of a component.
"""

ComponentTagName: TypeAlias = str
"""
Repository-relative fragment used to namespace the release tags of a
component.
"""


class ModuleSet(BaseModel):
    """
    A named group of components sharing one version. The version text is
    preserved exactly as declared, but must be a valid semantic version.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: str
    modules: Tuple[ComponentPath, ...] = ()


    @field_validator("version")
    @classmethod
    def _check_version(cls, value: str) -> str:
        try:
            _version_adapter.validate_python(value)
        except ValidationError as err:
            raise ValueError(f"invalid semantic version {value!r}") from err
        return value


    @property
    def parsed_version(self) -> Version:
        return _version_adapter.validate_python(self.version)


    @property
    def is_stable(self) -> bool:
        return self.parsed_version.is_stable


class ComponentInfo(BaseModel):
    """
    The owning module set and version of a single component.
    """

    model_config = ConfigDict(frozen=True)

    module_set_name: str
    version: str


ModuleSetMap: TypeAlias = Dict[str, ModuleSet]
ExcludedComponents: TypeAlias = Set[ComponentPath]
ComponentInfoMap: TypeAlias = Dict[ComponentPath, ComponentInfo]
ComponentPathMap: TypeAlias = Dict[ComponentPath, ComponentFilePath]


def get_excluded_modules(excluded: Iterable[ComponentPath]) -> ExcludedComponents:
    """
    Convert the declared exclusion list into a set.
    """

    return set(excluded)


def should_exclude_module(
        path: ComponentPath,
        excluded: Iterable[ComponentPath]) -> bool:

    if not isinstance(excluded, (set, frozenset)):
        excluded = get_excluded_modules(excluded)
    return path in excluded


def build_component_info_map(
        sets: Mapping[str, ModuleSet],
        excluded: Iterable[ComponentPath] = ()) -> ComponentInfoMap:
    """
    Index every member of every module set by its component path.

    Sets are visited in name order and members in their declared order, so
    the reported violation is stable between runs.

    :param sets: module set name to module set
    :param excluded: components explicitly opted out of versioning
    :raises DuplicateComponentError: on the first component which is
      excluded, or which is already a member of another set
    :return: component path to its owning set name and version
    """

    excluded = get_excluded_modules(excluded)
    found: ComponentInfoMap = {}

    for set_name in sorted(sets):
        mod_set = sets[set_name]
        if not mod_set.modules:
            logger.warning("module set %s has no members", set_name)

        for component in mod_set.modules:
            if component in excluded:
                raise DuplicateComponentError(
                    component,
                    f"component {component} is a member of module set"
                    f" {set_name} and is also excluded")

            existing = found.get(component)
            if existing is not None:
                raise DuplicateComponentError(
                    component,
                    f"component {component} is a member of both module set"
                    f" {existing.module_set_name} and module set {set_name}")

            found[component] = ComponentInfo(
                module_set_name=set_name,
                version=mod_set.version)

    logger.debug("indexed %d components across %d module sets",
                 len(found), len(sets))
    return found


def build_module_sets_map(
        sets: Mapping[str, ModuleSet],
        excluded: Iterable[ComponentPath] = ()) -> ModuleSetMap:
    """
    Return a copy of the module set map once it has passed the membership
    checks of :func:`build_component_info_map`.
    """

    build_component_info_map(sets, excluded)
    return dict(sets)


def referenced_components(sets: Mapping[str, ModuleSet]) -> List[ComponentPath]:
    """
    Every component named by any module set, in set name then member order,
    without repeats.
    """

    seen: Dict[ComponentPath, None] = {}
    for set_name in sorted(sets):
        for component in sets[set_name].modules:
            seen.setdefault(component, None)
    return list(seen)


# The end.
