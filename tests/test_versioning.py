"""
tests.test_versioning
Tests for the ModuleVersioning snapshot.

:author: Christopher O'Brien <obriencj@preoccupied.net>
:license: GNU General Public License v3
"""


import dataclasses
import logging
import os

import pytest

from preoccupied.multimod import (
    REPO_ROOT_TAG, ComponentInfo, ComponentNotFoundError,
    DuplicateComponentError, ModuleSet, ModuleSetNotFoundError,
    ModuleVersioning, build_component_info_map, parse_versioning)


VERSIONS = """\
module-sets:
  mod-set-1:
    version: v1.2.3-RC1+meta
    modules:
      - example.com/test/test1
      - example.com/test/test2
  mod-set-2:
    version: v0.1.0
    modules:
      - example.com/test3
      - example.com/root
excluded-modules:
  - example.com/excluded1
"""


def mock_versioning(module_sets, path_map):
    """
    Assemble a ModuleVersioning without touching the filesystem.
    """

    return ModuleVersioning(
        module_set_map=module_sets,
        component_path_map=path_map,
        component_info_map=build_component_info_map(module_sets))


@pytest.fixture
def versioning():
    module_sets = {
        "mod-set-1": ModuleSet(
            version="v1.2.3-RC1+meta",
            modules=["example.com/test/test1", "example.com/test/test2"]),
        "mod-set-2": ModuleSet(
            version="v0.1.0",
            modules=["example.com/test3"]),
    }
    path_map = {
        "example.com/test/test1": "root/path/to/mod/test/test1/go.mod",
        "example.com/test/test2": "root/path/to/mod/test/test2/go.mod",
        "example.com/test3": "root/test3/go.mod",
    }
    return mock_versioning(module_sets, path_map)


def test_mock_versioning(versioning):
    """
    The info map is derived from the module sets.
    """

    assert versioning.component_info_map == {
        "example.com/test/test1": ComponentInfo(
            module_set_name="mod-set-1", version="v1.2.3-RC1+meta"),
        "example.com/test/test2": ComponentInfo(
            module_set_name="mod-set-1", version="v1.2.3-RC1+meta"),
        "example.com/test3": ComponentInfo(
            module_set_name="mod-set-2", version="v0.1.0"),
    }


@pytest.mark.parametrize(
    "name, expected",
    [
        pytest.param("mod-set-1", ModuleSet(
            version="v1.2.3-RC1+meta",
            modules=["example.com/test/test1", "example.com/test/test2"]),
            id="mod-set-1"),
        pytest.param("mod-set-2", ModuleSet(
            version="v0.1.0",
            modules=["example.com/test3"]),
            id="mod-set-2"),
    ])
def test_get_module_set(versioning, name, expected):
    """
    Module sets are looked up by exact name.
    """

    assert versioning.get_module_set(name) == expected


def test_get_module_set_missing(versioning):
    """
    Unknown set names raise, naming the set.
    """

    with pytest.raises(ModuleSetNotFoundError) as error:
        versioning.get_module_set("mod-set-3-does-not-exist")

    assert error.value.name == "mod-set-3-does-not-exist"
    assert "mod-set-3-does-not-exist" in str(error.value)


def test_component_version(versioning):
    """
    Component versions come from the owning set.
    """

    assert versioning.component_version("example.com/test3") == "v0.1.0"
    assert versioning.get_component_info(
        "example.com/test/test2").module_set_name == "mod-set-1"

    with pytest.raises(ComponentNotFoundError):
        versioning.component_version("example.com/unknown")


def test_is_stable(versioning):
    assert versioning.is_stable("mod-set-1")
    assert not versioning.is_stable("mod-set-2")


def test_module_set_tags(versioning):
    """
    Tags combine each member's tag name with the set's version.
    """

    assert versioning.module_set_tag_names("mod-set-1", "root") == [
        "path/to/mod/test/test1",
        "path/to/mod/test/test2",
    ]
    assert versioning.module_set_tags("mod-set-1", "root") == [
        "path/to/mod/test/test1/v1.2.3-RC1+meta",
        "path/to/mod/test/test2/v1.2.3-RC1+meta",
    ]


def test_versioning_is_frozen(versioning):
    """
    The snapshot cannot be reassigned in place.
    """

    with pytest.raises(dataclasses.FrozenInstanceError):
        versioning.module_set_map = {}


def test_versioning_maps_are_read_only(versioning):
    """
    None of the maps held by the snapshot can be changed in place.
    """

    with pytest.raises(TypeError):
        versioning.module_set_map["mod-set-3"] = ModuleSet(version="v1.0.0")

    with pytest.raises(TypeError):
        versioning.component_path_map["example.com/test3"] = "elsewhere/go.mod"

    with pytest.raises(TypeError):
        del versioning.component_info_map["example.com/test3"]


def test_versioning_copies_its_inputs():
    """
    Changing the maps a snapshot was built from does not change it.
    """

    module_sets = {
        "mod-set-1": ModuleSet(version="v1.0.0", modules=["example.com/a"]),
    }
    path_map = {"example.com/a": "root/a/go.mod"}
    versioning = mock_versioning(module_sets, path_map)

    module_sets["mod-set-2"] = ModuleSet(version="v2.0.0", modules=["example.com/b"])
    path_map["example.com/b"] = "root/b/go.mod"

    assert set(versioning.module_set_map) == {"mod-set-1"}
    assert set(versioning.component_path_map) == {"example.com/a"}


@pytest.fixture
def repo(tmp_path):
    """
    Provide a repository with a versioning file and go.mod declarations.
    """

    layout = {
        "go.mod": "module example.com/root\n",
        "test3/go.mod": "module example.com/test3\n",
        "path/to/mod/test/test1/go.mod": "module example.com/test/test1\n",
        "path/to/mod/test/test2/go.mod": "module example.com/test/test2\n",
        "tools/go.mod": "module example.com/excluded1\n",
    }
    for relpath, content in layout.items():
        path = tmp_path.joinpath(*relpath.split("/"))
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")

    (tmp_path / "versions.yaml").write_text(VERSIONS, encoding="utf-8")
    return tmp_path


def test_from_file(repo):
    """
    A snapshot built from disk answers version, location, and tag questions.
    """

    repo_root = str(repo)
    versioning = ModuleVersioning.from_file(
        str(repo / "versions.yaml"), repo_root)

    assert set(versioning.module_set_map) == {"mod-set-1", "mod-set-2"}
    assert versioning.component_path_map["example.com/root"] == \
        os.path.join(repo_root, "go.mod")
    assert "example.com/excluded1" not in versioning.component_path_map
    assert versioning.component_version("example.com/root") == "v0.1.0"

    assert versioning.module_set_tag_names("mod-set-2", repo_root) == [
        "test3",
        REPO_ROOT_TAG,
    ]
    assert versioning.module_set_tags("mod-set-2", repo_root) == [
        "test3/v0.1.0",
        "v0.1.0",
    ]


def test_build_warns_once_per_empty_set(repo, caplog):
    """
    Building validates membership a single time.
    """

    config = parse_versioning(VERSIONS.replace(
        "excluded-modules:",
        "  empty-set:\n    version: v1.0.0\nexcluded-modules:"))

    with caplog.at_level(logging.WARNING, logger="preoccupied.multimod.modset"):
        versioning = ModuleVersioning.build(config, str(repo))

    assert "empty-set" in versioning.module_set_map
    warnings = [record for record in caplog.records
                if "empty-set" in record.getMessage()]
    assert len(warnings) == 1


def test_build_rejects_overlap(repo):
    """
    Building fails when a member is also excluded.
    """

    config = parse_versioning(VERSIONS.replace(
        "example.com/excluded1", "example.com/test3"))

    with pytest.raises(DuplicateComponentError):
        ModuleVersioning.build(config, str(repo))


def test_build_requires_declarations(repo):
    """
    Building fails when a member has no declaration file.
    """

    (repo / "test3" / "go.mod").unlink()
    config = parse_versioning(VERSIONS)

    with pytest.raises(ComponentNotFoundError):
        ModuleVersioning.build(config, str(repo))


# The end.
