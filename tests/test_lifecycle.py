"""Tests for the provider registry and schema."""

import pytest

from file_provider.controller import FileController
from file_provider.errors import UnknownResourceError
from file_provider.lifecycle import Provider, ResourceLifecycle, build_provider
from file_provider.models import FileArgs, FileState
from file_provider.settings import reload_settings


def test_build_provider_registers_file():
    provider = build_provider()

    assert provider.name == "file"
    assert provider.version == "0.1.0"
    assert provider.tokens == ["example:index:File"]
    assert isinstance(provider.resource("example:index:File"), FileController)


def test_controller_satisfies_lifecycle_protocol():
    assert isinstance(FileController(), ResourceLifecycle)


def test_namespace_comes_from_settings(monkeypatch):
    monkeypatch.setenv("FP_NAMESPACE", "acme")
    reload_settings()

    assert build_provider().tokens == ["acme:index:File"]


def test_unknown_token_raises():
    with pytest.raises(UnknownResourceError, match="example:index:Directory"):
        build_provider().resource("example:index:Directory")


def test_duplicate_registration_raises():
    provider = Provider("example", "file", "0.1.0")
    provider.register("File", FileController(), FileArgs, FileState)

    with pytest.raises(ValueError):
        provider.register("File", FileController(), FileArgs, FileState)


def test_schema_describes_file_resource():
    schema = build_provider().schema()

    assert schema["name"] == "file"
    assert schema["version"] == "0.1.0"

    file_schema = schema["resources"]["example:index:File"]
    assert file_schema["description"] == "A file projected into a pulumi resource"
    assert file_schema["requiredInputs"] == ["content"]
    assert file_schema["required"] == ["content", "force", "path"]
    assert file_schema["inputProperties"]["path"] == {
        "type": "string",
        "description": "The file path. Defaults to resource name.",
    }
    assert file_schema["inputProperties"]["force"]["type"] == "boolean"
    assert file_schema["properties"]["path"]["description"] == "The file path."
    assert file_schema["dependencies"] == {
        "content": "content",
        "force": "force",
        "path": "path",
    }
