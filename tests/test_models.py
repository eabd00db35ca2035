"""Tests for File resource models."""

import pytest
from pydantic import ValidationError

from file_provider.models import (
    DiffKind,
    DiffResponse,
    FileArgs,
    FileState,
    PropertyDiff,
)


def test_file_args_defaults():
    """Only content is required."""
    args = FileArgs(content="x")

    assert args.path is None
    assert args.force is False


def test_file_args_requires_content():
    with pytest.raises(ValidationError):
        FileArgs.model_validate({"path": "/tmp/a"})


def test_file_args_rejects_coercion():
    """Strict mode keeps "true" from passing as a bool."""
    with pytest.raises(ValidationError):
        FileArgs.model_validate({"content": "x", "force": "true"})


def test_extra_keys_are_ignored():
    state = FileState.model_validate(
        {"path": "/tmp/a", "force": False, "content": "x", "__provider": "blob"}
    )
    assert state.model_dump() == {"path": "/tmp/a", "force": False, "content": "x"}


def test_state_from_args():
    args = FileArgs(path="/tmp/a", force=True, content="x")
    assert FileState.from_args(args) == FileState(path="/tmp/a", force=True, content="x")


@pytest.mark.parametrize(
    "kind,expected",
    [
        (DiffKind.ADD, False),
        (DiffKind.UPDATE, False),
        (DiffKind.DELETE, False),
        (DiffKind.ADD_REPLACE, True),
        (DiffKind.UPDATE_REPLACE, True),
        (DiffKind.DELETE_REPLACE, True),
    ],
)
def test_diff_kind_is_replace(kind, expected):
    assert kind.is_replace is expected


def test_diff_response_splits_changes_and_replaces():
    diff = DiffResponse(
        has_changes=True,
        delete_before_replace=True,
        detailed_diff={
            "content": PropertyDiff(kind=DiffKind.UPDATE),
            "path": PropertyDiff(kind=DiffKind.UPDATE_REPLACE),
        },
    )

    assert diff.changes == ["content"]
    assert diff.replaces == ["path"]
