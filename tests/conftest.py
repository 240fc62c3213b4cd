"""Shared fixtures for license-notice tests."""

import json

import pytest

from license_notice.cli_config import reset_config
from license_notice.error_handling import get_error_handler


@pytest.fixture(autouse=True, scope="session")
def error_log_handler():
    """Attach the stderr log handler before any CliRunner swaps the streams."""
    return get_error_handler()


@pytest.fixture
def temp_dir(tmp_path):
    return tmp_path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config files and LICENSE_NOTICE_* variables out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    for key in (
        "LICENSE_NOTICE_SEPARATOR",
        "LICENSE_NOTICE_INCLUDE_PRIVATE",
        "LICENSE_NOTICE_ENCODING",
        "LICENSE_NOTICE_LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def full_dependency():
    return {
        "name": "foo",
        "version": "1.0.0",
        "license": "MIT",
        "description": "Desc",
        "homepage": "https://github.com/mjeanroy",
        "repository": {"type": "GIT", "url": "git@github.com/mjeanroy"},
        "author": {"name": "Mickael Jeanroy", "email": "mickael.jeanroy@gmail.com"},
        "contributors": [
            {"name": "Mickael Jeanroy", "email": "mickael.jeanroy@gmail.com"},
            {"name": "John Doe"},
        ],
    }


@pytest.fixture
def sample_dependencies():
    return [
        {"name": "foo", "version": "1.0.0", "license": "MIT"},
        {
            "name": "bar",
            "version": "2.1.0",
            "license": "Apache-2.0",
            "author": "Jane Roe <jane@example.com> (https://example.com)",
        },
        {"name": "internal", "version": "0.0.1", "license": "UNLICENSED", "private": True},
    ]


@pytest.fixture
def sample_dependencies_json(temp_dir, sample_dependencies):
    path = temp_dir / "dependencies.json"
    path.write_text(json.dumps(sample_dependencies, indent=2))
    return path


@pytest.fixture
def sample_dependencies_yaml(temp_dir):
    path = temp_dir / "dependencies.yaml"
    path.write_text(
        "dependencies:\n"
        "  - name: foo\n"
        "    version: 1.0.0\n"
        "    license: MIT\n"
        "    contributors:\n"
        "      - John Doe\n"
    )
    return path
