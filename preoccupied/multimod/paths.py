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
preoccupied.multimod.paths

Resolution of component paths to the declaration files which define them.

Every component lives in a directory holding a declaration file, and that
file names the component. For Go modules the declaration file is ``go.mod``
and the identity comes from its ``module`` directive; for Python projects it
is ``pyproject.toml`` and the identity comes from ``[project].name``.

Example:

```python
path_map = build_component_path_map(sets, "/src/monorepo")
files = component_paths_to_file_paths(["example.com/foo"], path_map)
```

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import logging
import os
import re
import tomllib
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, Union

from .errors import (
    ComponentNotFoundError, DeclarationError, DuplicateComponentError)
from .modset import (
    ComponentFilePath, ComponentPath, ComponentPathMap, ModuleSet,
    referenced_components)


__all__ = (
    "DeclarationFormat",
    "GoModDeclaration",
    "PyProjectDeclaration",
    "build_component_path_map",
    "component_paths_to_file_paths",
    "lookup_declaration",
    "resolve_declaration",
)


logger = logging.getLogger(__name__)


class DeclarationFormat(Protocol):
    """
    Protocol describing a per-component declaration file.
    """

    filename: str

    def read_identity(self, path: str) -> Optional[str]:
        """
        Return the component path declared by the file at path, or None if
        the file does not declare one.

        :param path: filesystem path of a file named :attr:`filename`
        :raises OSError: if the file cannot be read
        """

        ...


module_directive = re.compile(
    r'^\s*module\s+(?:"([^"]+)"|`([^`]+)`|(\S+))').match


class GoModDeclaration(DeclarationFormat):
    """
    Go modules, declared by the ``module`` directive of ``go.mod``.
    """

    filename = "go.mod"

    def read_identity(self, path: str) -> Optional[str]:
        with open(path, "rt", encoding="utf-8") as fd:
            for line in fd:
                line = line.split("//", 1)[0]
                found = module_directive(line)
                if found:
                    return next(filter(None, found.groups()))
        return None


class PyProjectDeclaration(DeclarationFormat):
    """
    Python projects, declared by the name in ``pyproject.toml``.
    """

    filename = "pyproject.toml"

    def read_identity(self, path: str) -> Optional[str]:
        with open(path, "rb") as fd:
            try:
                data = tomllib.load(fd)
            except tomllib.TOMLDecodeError as err:
                raise DeclarationError(f"invalid TOML in {path}: {err}") from err

        name = data.get("project", {}).get("name")
        if name is None:
            name = data.get("tool", {}).get("poetry", {}).get("name")
        return name


def lookup_declaration(name: str) -> Optional[DeclarationFormat]:
    if name in ("go.mod", "go"):
        return GoModDeclaration()
    elif name in ("pyproject.toml", "pyproject"):
        return PyProjectDeclaration()
    else:
        return None


def resolve_declaration(
        declaration: Union[str, DeclarationFormat, None] = None) -> DeclarationFormat:
    """
    Return the declaration format for the given name or instance, defaulting
    to ``go.mod``.
    """

    if declaration is None:
        return GoModDeclaration()
    elif isinstance(declaration, str):
        found = lookup_declaration(declaration)
        if found is None:
            raise ValueError(f"Invalid declaration format: {declaration}")
        return found
    return declaration


def build_component_path_map(
        sets: Mapping[str, ModuleSet],
        repo_root: str,
        declaration: Union[str, DeclarationFormat, None] = None) -> ComponentPathMap:
    """
    Locate the declaration file of every component referenced by the module
    sets, by walking the tree beneath repo_root.

    Declaration files naming components which no module set references are
    ignored. The returned paths are repo_root joined with the path of the
    declaration file relative to it.

    :param sets: module set name to module set
    :param repo_root: top directory of the repository
    :param declaration: declaration format name or instance
    :raises DuplicateComponentError: if two declaration files name the same
      referenced component
    :raises ComponentNotFoundError: if a referenced component has no
      declaration file
    :raises DeclarationError: if a declaration file names no component
    """

    declaration = resolve_declaration(declaration)
    wanted = referenced_components(sets)
    wanted_set = set(wanted)

    found: Dict[ComponentPath, ComponentFilePath] = {}

    for dirpath, dirnames, filenames in os.walk(repo_root):
        dirnames.sort()
        if declaration.filename not in filenames:
            continue

        rel = os.path.relpath(dirpath, repo_root)
        if rel == os.curdir:
            file_path = os.path.join(repo_root, declaration.filename)
        else:
            file_path = os.path.join(repo_root, rel, declaration.filename)

        try:
            identity = declaration.read_identity(
                os.path.join(dirpath, declaration.filename))
        except (OSError, UnicodeDecodeError) as err:
            raise DeclarationError(f"could not read {file_path}: {err}") from err

        if identity is None:
            raise DeclarationError(f"no component declared in {file_path}")

        if identity not in wanted_set:
            logger.debug("ignoring unreferenced component %s at %s",
                         identity, file_path)
            continue

        if identity in found:
            raise DuplicateComponentError(
                identity,
                f"component {identity} is declared by both {found[identity]}"
                f" and {file_path}")

        found[identity] = file_path

    for component in wanted:
        if component not in found:
            raise ComponentNotFoundError(
                component,
                f"could not find a {declaration.filename} declaring component"
                f" {component} beneath {repo_root}")

    logger.debug("resolved %d components beneath %s", len(found), repo_root)
    return found


def component_paths_to_file_paths(
        paths: Sequence[ComponentPath],
        path_map: Mapping[ComponentPath, ComponentFilePath]) -> List[ComponentFilePath]:
    """
    Look up the declaration file of each component, in order.

    :raises ComponentNotFoundError: on the first component absent from
      path_map, in which case nothing is returned
    """

    result: List[ComponentFilePath] = []
    for component in paths:
        file_path = path_map.get(component)
        if file_path is None:
            raise ComponentNotFoundError(
                component, f"component {component} not found in path map")
        result.append(file_path)
    return result


# The end.
