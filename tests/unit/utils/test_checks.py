"""Unit tests for functions defined in utils/checks module."""

import os
from pathlib import Path
from typing import Any

from pytest_mock import MockerFixture

import pytest

from utils import checks


@pytest.fixture(name="input_file")
def input_file_fixture(tmp_path: Path) -> str:
    """Create file manually using the tmp_path fixture."""
    filename = os.path.join(tmp_path, "prompt.txt")
    with open(filename, "wt", encoding="utf-8") as fout:
        fout.write("You are a {language} expert.\n\n")
    return filename


@pytest.fixture(name="input_directory")
def input_directory_fixture(tmp_path: Path) -> str:
    """Create directory manually using the tmp_path fixture."""
    dirname = os.path.join(tmp_path, "mydir")
    os.mkdir(dirname)
    return dirname


def test_get_attribute_from_file_no_record() -> None:
    """Test the get_attribute_from_file function when record is not in dictionary."""
    d: dict[str, Any] = {}

    assert checks.get_attribute_from_file(d, "") is None
    assert checks.get_attribute_from_file(d, "this-does-not-exists") is None
    assert checks.get_attribute_from_file({"my_file": None}, "my_file") is None


def test_get_attribute_from_file_proper_record(input_file: str) -> None:
    """Test the get_attribute_from_file function when record is present in dictionary."""
    d = {"my_file": input_file}

    # trailing whitespaces are stripped
    value = checks.get_attribute_from_file(d, "my_file")
    assert value == "You are a {language} expert."


def test_get_attribute_from_file_improper_filename() -> None:
    """Test the get_attribute_from_file when the file does not exist."""
    d = {"my_file": "this-does-not-exists"}

    with pytest.raises(FileNotFoundError, match="this-does-not-exists"):
        checks.get_attribute_from_file(d, "my_file")


def test_file_check_existing_file(input_file: str) -> None:
    """Test the function file_check for existing file."""
    # just call the function, it should not raise an exception
    checks.file_check(input_file, "description")


def test_file_check_non_existing_file() -> None:
    """Test the function file_check for non existing file."""
    with pytest.raises(checks.InvalidConfigurationError, match="is not a file"):
        checks.file_check(Path("does-not-exists"), "description")


def test_file_check_not_readable_file(mocker: MockerFixture, input_file: str) -> None:
    """Test the function file_check for not readable file."""
    mocker.patch("os.access", return_value=False)
    with pytest.raises(checks.InvalidConfigurationError, match="is not readable"):
        checks.file_check(input_file, "description")


def test_directory_check_non_existing_directory() -> None:
    """Test the function directory_check skips non-existing directory."""
    # just call the function, it should not raise an exception
    checks.directory_check(
        Path("/foo/bar/baz"), must_exists=False, must_be_writable=False, desc="foobar"
    )
    with pytest.raises(checks.InvalidConfigurationError, match="does not exist"):
        checks.directory_check(
            Path("/foo/bar/baz"),
            must_exists=True,
            must_be_writable=False,
            desc="foobar",
        )


def test_directory_check_existing_writable_directory(input_directory: str) -> None:
    """Test the function directory_check checks directory."""
    # just call the function, it should not raise an exception
    checks.directory_check(
        Path(input_directory), must_exists=True, must_be_writable=True, desc="foobar"
    )


def test_directory_check_non_a_directory(input_file: str) -> None:
    """Test the function directory_check checks directory."""
    with pytest.raises(checks.InvalidConfigurationError, match="is not a directory"):
        checks.directory_check(
            Path(input_file), must_exists=True, must_be_writable=True, desc="foobar"
        )


def test_directory_check_existing_non_writable_directory(
    mocker: MockerFixture, input_directory: str
) -> None:
    """Test the function directory_check checks directory."""
    mocker.patch("os.access", return_value=False)
    with pytest.raises(checks.InvalidConfigurationError, match="is not writable"):
        checks.directory_check(
            Path(input_directory),
            must_exists=True,
            must_be_writable=True,
            desc="foobar",
        )
