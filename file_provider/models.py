"""
Pydantic models for the File resource lifecycle.

This module contains the data exchanged between the orchestrator and the
controller:
- FileArgs / FileState - desired inputs and recorded state
- CheckFailure, DiffKind, PropertyDiff - structured check and diff results
- Response models returned by each lifecycle operation
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Resource Models
# =============================================================================

class FileArgs(BaseModel):
    """Input arguments of a File resource."""

    model_config = ConfigDict(strict=True, extra="ignore")

    path: str | None = Field(
        None,
        description="The file path. Defaults to resource name.",
    )
    force: bool = Field(
        False,
        description="If existing file should be deleted if present.",
    )
    content: str = Field(
        ...,
        description="The content of the file.",
    )


class FileState(BaseModel):
    """Stored state of a File resource."""

    model_config = ConfigDict(strict=True, extra="ignore")

    path: str = Field(..., description="The file path.")
    force: bool = Field(
        ...,
        description="If existing file should be deleted if present.",
    )
    content: str = Field(..., description="The content of the file.")

    @classmethod
    def from_args(cls, args: FileArgs) -> "FileState":
        return cls(path=args.path, force=args.force, content=args.content)


# =============================================================================
# Check / Diff Models
# =============================================================================

class CheckFailure(BaseModel):
    """A single input validation failure."""
    property: str
    reason: str


class DiffKind(str, Enum):
    """Kind of change detected for a single property."""
    ADD = "add"
    ADD_REPLACE = "add-replace"
    DELETE = "delete"
    DELETE_REPLACE = "delete-replace"
    UPDATE = "update"
    UPDATE_REPLACE = "update-replace"

    @property
    def is_replace(self) -> bool:
        return self in (
            DiffKind.ADD_REPLACE,
            DiffKind.DELETE_REPLACE,
            DiffKind.UPDATE_REPLACE,
        )


class PropertyDiff(BaseModel):
    """Change recorded for one property."""
    kind: DiffKind
    input_diff: bool = False


# =============================================================================
# Lifecycle Responses
# =============================================================================

class CheckResponse(BaseModel):
    inputs: FileArgs | None = None
    failures: list[CheckFailure] = Field(default_factory=list)


class CreateResponse(BaseModel):
    """Result of Create. ``output`` is None for a dry run."""
    id: str
    output: FileState | None = None


class UpdateResponse(BaseModel):
    """Result of Update. ``output`` is None for a dry run."""
    output: FileState | None = None


class DiffResponse(BaseModel):
    """Per-property plan comparing desired inputs with recorded state."""

    has_changes: bool = False
    delete_before_replace: bool = False
    detailed_diff: dict[str, PropertyDiff] = Field(default_factory=dict)

    @property
    def replaces(self) -> list[str]:
        """Properties whose change forces a replacement."""
        return [
            name for name, diff in self.detailed_diff.items()
            if diff.kind.is_replace
        ]

    @property
    def changes(self) -> list[str]:
        """Properties that can be changed in place."""
        return [
            name for name, diff in self.detailed_diff.items()
            if not diff.kind.is_replace
        ]


class ReadResponse(BaseModel):
    id: str
    inputs: FileArgs
    state: FileState
