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
preoccupied.multimod.tags

Derivation of release tag names from declaration file paths.

A component's tag name is the directory holding its declaration file,
relative to the repository root, always using forward slashes. The
component at the repository root has no such directory, and is instead
given the :data:`REPO_ROOT_TAG` sentinel, which combines with a version as
the bare version.

Example:

```python
names = file_paths_to_tag_names(["root/a/b/go.mod", "root/go.mod"], "root")
assert names == ["a/b", REPO_ROOT_TAG]

tags = combine_tag_names_and_version(names, "v1.0.0")
assert tags == ["a/b/v1.0.0", "v1.0.0"]
```

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import os
from pathlib import PurePath
from typing import List, Mapping, Sequence, Union

from .errors import InvalidTagPathError
from .modset import ComponentFilePath, ComponentPath, ComponentTagName
from .paths import (
    DeclarationFormat, component_paths_to_file_paths, resolve_declaration)


__all__ = (
    "REPO_ROOT_TAG",
    "combine_tag_names_and_version",
    "component_paths_to_tag_names",
    "file_path_to_tag_name",
    "file_paths_to_tag_names",
)


REPO_ROOT_TAG: ComponentTagName = "REPOROOTTAG"


def file_path_to_tag_name(
        file_path: ComponentFilePath,
        repo_root: str,
        declaration: Union[str, DeclarationFormat, None] = None) -> ComponentTagName:
    """
    Convert the path of a declaration file into its tag name.

    :param file_path: path to a declaration file beneath repo_root
    :param repo_root: top directory of the repository
    :param declaration: declaration format name or instance
    :raises InvalidTagPathError: if file_path is not a declaration file, or
      is not located beneath repo_root
    """

    filename = resolve_declaration(declaration).filename

    path = PurePath(os.path.normpath(file_path))
    if path.name != filename:
        raise InvalidTagPathError(
            f"{file_path} is not a valid {filename} path")

    root = PurePath(os.path.normpath(repo_root))
    try:
        rel = path.parent.relative_to(root)
    except ValueError as err:
        raise InvalidTagPathError(
            f"{file_path} is not rooted under {repo_root}") from err

    if not rel.parts:
        return REPO_ROOT_TAG
    return rel.as_posix()


def file_paths_to_tag_names(
        file_paths: Sequence[ComponentFilePath],
        repo_root: str,
        declaration: Union[str, DeclarationFormat, None] = None) -> List[ComponentTagName]:
    """
    Convert each declaration file path into its tag name, in order. The first
    invalid path raises, and nothing is returned.
    """

    declaration = resolve_declaration(declaration)
    return [file_path_to_tag_name(file_path, repo_root, declaration)
            for file_path in file_paths]


def component_paths_to_tag_names(
        paths: Sequence[ComponentPath],
        path_map: Mapping[ComponentPath, ComponentFilePath],
        repo_root: str,
        declaration: Union[str, DeclarationFormat, None] = None) -> List[ComponentTagName]:

    file_paths = component_paths_to_file_paths(paths, path_map)
    return file_paths_to_tag_names(file_paths, repo_root, declaration)


def combine_tag_names_and_version(
        tag_names: Sequence[ComponentTagName],
        version: str) -> List[str]:
    """
    Produce the full release tag for each tag name. The repository root tag
    combines as the bare version.
    """

    return [version if tag_name == REPO_ROOT_TAG else f"{tag_name}/{version}"
            for tag_name in tag_names]


# The end.
