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
preoccupied.multimod.errors
Exceptions raised while loading, validating, and resolving module sets.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


__all__ = (
    "ComponentNotFoundError",
    "DeclarationError",
    "DuplicateComponentError",
    "InvalidTagPathError",
    "ModuleSetNotFoundError",
    "VersioningError",
)


class VersioningError(ValueError):
    """
    Base class for every configuration problem reported by this package.
    """


class DeclarationError(VersioningError):
    """
    A versioning file or a component declaration file could not be parsed.
    """


class DuplicateComponentError(VersioningError):
    """
    A component is claimed more than once, either by two module sets, by a
    module set and the exclusion list, or by two declaration files.
    """

    def __init__(self, component: str, message: str) -> None:
        super().__init__(message)
        self.component = component


class ComponentNotFoundError(VersioningError):
    """
    A component is absent from the map it was looked up in.
    """

    def __init__(self, component: str, message: str) -> None:
        super().__init__(message)
        self.component = component


class ModuleSetNotFoundError(VersioningError):
    """
    A module set name is absent from the module set map.
    """

    def __init__(self, name: str) -> None:
        super().__init__(f"module set not found: {name}")
        self.name = name


class InvalidTagPathError(VersioningError):
    """
    A file path cannot be converted into a tag name.
    """


# The end.
