"""Test if version is handled correcty."""

import tomllib

from version import __version__


def read_version_from_pyproject() -> str:
    """Read version from pyproject.toml file."""
    with open("pyproject.toml", "rb") as fin:
        return tomllib.load(fin)["project"]["version"]


def test_version_handling() -> None:
    """Test how version is handled by the project."""
    source_version = __version__
    project_version = read_version_from_pyproject()
    assert (
        source_version == project_version
    ), f"Source version {source_version} != project version {project_version}"
