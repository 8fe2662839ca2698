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
preoccupied.multimod.versions

Semantic version parsing and stability classification for module sets.

Module set versions are written the way release tags are written, with a
leading ``v`` (eg. ``v1.2.3-RC1+meta``). The ``v`` is optional here, and is
stripped before handing the remainder to :mod:`semver`.

Example:

```python
assert is_stable_version("v1.0.0")
assert is_stable_version("v1.0.0-RC1")
assert not is_stable_version("v0.9.9")
assert not is_stable_version("not-valid-semver")
```

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


from typing import Any, Callable

from semver import Version as SemVersion

from pydantic import GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema


__all__ = (
    "Version",
    "is_stable_version",
    "is_valid_version",
    "parse_version",
)


def parse_version(value: Any) -> "Version":
    """
    Convert supported inputs into a :class:`Version` instance.

    :param value: a version string, with or without a leading ``v``, or an
      existing ``semver.Version``
    :raises ValueError: if the string is not a valid semantic version
    :raises TypeError: if the value is neither a string nor a version
    """

    if isinstance(value, Version):
        return value
    if isinstance(value, SemVersion):
        return Version(*value.to_tuple())
    if isinstance(value, str):
        text = value[1:] if value.startswith("v") else value
        return Version.parse(text)
    raise TypeError(f"Unsupported version value: {value!r}")


def is_valid_version(value: str) -> bool:
    """
    True if value parses as a semantic version.
    """

    try:
        parse_version(value)
    except (TypeError, ValueError):
        return False
    return True


def is_stable_version(value: str) -> bool:
    """
    True if value is a semantic version with a major component of at least
    one. Pre-release and build metadata do not affect the result, and
    values which fail to parse are simply not stable.
    """

    try:
        version = parse_version(value)
    except (TypeError, ValueError):
        return False
    return version.major >= 1


class Version(SemVersion):
    """
    Pydantic-compatible wrapper validating semantic version values, tolerant
    of a leading ``v``.

    https://python-semver.readthedocs.io/en/3.0.4/advanced/combine-pydantic-and-semver.html
    """

    @classmethod
    def __get_pydantic_core_schema__(
            cls,
            _source_type: Any,
            _handler: Callable[[Any], core_schema.CoreSchema]) -> core_schema.CoreSchema:

        from_str_schema = core_schema.chain_schema(
            [
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(parse_version),
            ],
        )

        return core_schema.json_or_python_schema(
            json_schema=from_str_schema,
            python_schema=core_schema.union_schema(
                [
                    core_schema.is_instance_schema(Version),
                    from_str_schema,
                ]
            ),
            serialization=core_schema.to_string_ser_schema(),
        )


    @classmethod
    def __get_pydantic_json_schema__(
            cls,
            _core_schema: core_schema.CoreSchema,
            handler: GetJsonSchemaHandler) -> JsonSchemaValue:

        return handler(core_schema.str_schema())


    @property
    def is_stable(self) -> bool:
        """
        True if the major component is at least one.
        """

        return self.major >= 1


# The end.
