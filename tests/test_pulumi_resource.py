"""Tests for the File dynamic resource under Pulumi mocks."""

import asyncio

import pulumi
import pytest

from file_provider.pulumi_providers import File


class FileMocks(pulumi.runtime.Mocks):
    """Echo resource inputs back as outputs."""

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        return [f"{args.name}_id", args.inputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        return {}


@pytest.fixture(autouse=True)
def event_loop():
    """Create an event loop for each test (needed for Pulumi Output)."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    pulumi.runtime.set_mocks(FileMocks(), preview=False)
    yield loop
    loop.close()


@pulumi.runtime.test
def test_path_defaults_to_resource_name():
    file = File("cfg", content="hi")

    def check(args):
        path, force, content = args
        assert path == "cfg"
        assert force is False
        assert content == "hi"

    return pulumi.Output.all(file.path, file.force, file.content).apply(check)


@pulumi.runtime.test
def test_explicit_path_is_kept():
    file = File("cfg", content="hi", path="/tmp/elsewhere.txt", force=True)

    def check(args):
        path, force = args
        assert path == "/tmp/elsewhere.txt"
        assert force is True

    return pulumi.Output.all(file.path, file.force).apply(check)
