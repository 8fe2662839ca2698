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
preoccupied.multimod
Namespace package segment assigning semantic versions and release tags to
the module sets of a multi-module repository.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from .declaration import VersioningConfig, parse_versioning, read_versioning_file
from .errors import (
    ComponentNotFoundError, DeclarationError, DuplicateComponentError,
    InvalidTagPathError, ModuleSetNotFoundError, VersioningError)
from .modset import (
    ComponentFilePath, ComponentInfo, ComponentInfoMap, ComponentPath,
    ComponentPathMap, ComponentTagName, ExcludedComponents, ModuleSet,
    ModuleSetMap, build_component_info_map, build_module_sets_map,
    get_excluded_modules, should_exclude_module)
from .paths import (
    DeclarationFormat, GoModDeclaration, PyProjectDeclaration,
    build_component_path_map, component_paths_to_file_paths,
    lookup_declaration)
from .tags import (
    REPO_ROOT_TAG, combine_tag_names_and_version,
    component_paths_to_tag_names, file_path_to_tag_name,
    file_paths_to_tag_names)
from .versioning import ModuleVersioning
from .versions import Version, is_stable_version, is_valid_version, parse_version


__all__ = (
    "VersioningConfig",
    "parse_versioning",
    "read_versioning_file",

    "ComponentNotFoundError",
    "DeclarationError",
    "DuplicateComponentError",
    "InvalidTagPathError",
    "ModuleSetNotFoundError",
    "VersioningError",

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
    "should_exclude_module",

    "DeclarationFormat",
    "GoModDeclaration",
    "PyProjectDeclaration",
    "build_component_path_map",
    "component_paths_to_file_paths",
    "lookup_declaration",

    "REPO_ROOT_TAG",
    "combine_tag_names_and_version",
    "component_paths_to_tag_names",
    "file_path_to_tag_name",
    "file_paths_to_tag_names",

    "ModuleVersioning",

    "Version",
    "is_stable_version",
    "is_valid_version",
    "parse_version",
)


# The end.
