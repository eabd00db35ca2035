"""Lifecycle controller for File resources.

Each operation maps to a single filesystem effect. OS errors are raised
unchanged; the only error that is swallowed is a missing file on delete.
"""

import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .context import OperationContext
from .errors import ConfigurationError, PreconditionFailedError, ShortWriteError
from .models import (
    CheckFailure,
    CheckResponse,
    CreateResponse,
    DiffKind,
    DiffResponse,
    FileArgs,
    FileState,
    PropertyDiff,
    ReadResponse,
    UpdateResponse,
)
from .settings import get_settings

# Output field -> input field it is computed from
FIELD_DEPENDENCIES: dict[str, str] = {
    "content": "content",
    "force": "force",
    "path": "path",
}


def _path_exists(path: str) -> bool:
    """Return False only when the OS reports that nothing is at ``path``.

    Any other stat failure (permission denied, not a directory, ...) is
    reported as an existing entry.
    """
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError:
        return True
    return True


def _require_path(args: FileArgs) -> str:
    if args.path is None:
        raise ConfigurationError("path is required; run check to default it")
    return args.path


class FileController:
    """Controller for a file projected into a declarative resource.

    Implements check, create, read, update, delete and diff for a single
    file. The resource ID is the file path.
    """

    description = "A file projected into a pulumi resource"

    def __init__(self, encoding: str | None = None):
        """
        Initialize FileController.

        Args:
            encoding: Text encoding for file content (overrides settings)
        """
        self.encoding = encoding or get_settings().encoding

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def check(
        self, ctx: OperationContext, name: str, raw_inputs: dict[str, Any]
    ) -> CheckResponse:
        """
        Normalize and validate raw inputs.

        Args:
            ctx: Operation context
            name: Declared resource name, used as the default path
            raw_inputs: Inputs as supplied by the caller

        Returns:
            CheckResponse with parsed inputs, or failures if invalid
        """
        news = dict(raw_inputs)
        if news.get("path") is None:
            news["path"] = name

        try:
            args = FileArgs.model_validate(news)
        except ValidationError as e:
            failures = [
                CheckFailure(
                    property=".".join(str(part) for part in err["loc"]),
                    reason=err["msg"],
                )
                for err in e.errors()
            ]
            ctx.log.debug(f"Check found {len(failures)} failure(s) for {name}")
            return CheckResponse(inputs=None, failures=failures)

        return CheckResponse(inputs=args)

    def create(self, ctx: OperationContext, inputs: FileArgs) -> CreateResponse:
        """
        Create the file.

        The existence check runs in preview as well, so a preview reports
        the same conflict an apply would.

        Raises:
            ConfigurationError: If the inputs carry no path
            PreconditionFailedError: If the path exists and force is not set
            ShortWriteError: If the content was not written in full
            OSError: On any filesystem failure
        """
        path = _require_path(inputs)

        if not inputs.force and _path_exists(path):
            raise PreconditionFailedError("file exists; pass force=true to override")

        if ctx.dry_run:
            return CreateResponse(id=path)

        self._write(path, inputs.content)
        ctx.log.info(f"Created file {path}")

        return CreateResponse(id=path, output=FileState.from_args(inputs))

    def update(
        self, ctx: OperationContext, inputs: FileArgs, state: FileState
    ) -> UpdateResponse:
        """
        Rewrite the file at the recorded path with the desired content.

        Raises:
            ConfigurationError: If the inputs carry no path
            ShortWriteError: If the content was not written in full
            OSError: On any filesystem failure
        """
        _require_path(inputs)

        if ctx.dry_run:
            return UpdateResponse()

        self._write(state.path, inputs.content)
        ctx.log.info(f"Updated file {state.path}")

        return UpdateResponse(output=FileState.from_args(inputs))

    def delete(self, ctx: OperationContext, state: FileState) -> None:
        """
        Remove the file. Deleting a file that is already gone succeeds.

        Raises:
            OSError: On any filesystem failure other than a missing file
        """
        try:
            os.remove(state.path)
        except FileNotFoundError:
            ctx.log.warning(f"file '{state.path}' already deleted")
            return
        ctx.log.info(f"Deleted file {state.path}")

    def diff(
        self, ctx: OperationContext, inputs: FileArgs, state: FileState
    ) -> DiffResponse:
        """
        Compare desired inputs with recorded state.

        Returns:
            DiffResponse mapping changed properties to their change kind
        """
        diff: dict[str, PropertyDiff] = {}

        if inputs.content != state.content:
            diff["content"] = PropertyDiff(kind=DiffKind.UPDATE)
        if inputs.force != state.force:
            diff["force"] = PropertyDiff(kind=DiffKind.UPDATE)

        if inputs.path != state.path:
            diff["path"] = PropertyDiff(kind=DiffKind.UPDATE_REPLACE)
        elif not _path_exists(inputs.path):
            # Recorded file vanished from disk
            diff["path"] = PropertyDiff(kind=DiffKind.ADD)

        return DiffResponse(
            has_changes=len(diff) > 0,
            delete_before_replace=True,
            detailed_diff=diff,
        )

    def read(
        self,
        ctx: OperationContext,
        id: str,
        prior_state: FileState | None = None,
    ) -> ReadResponse:
        """
        Refresh state from the file on disk.

        ``force`` cannot be recovered from disk and is carried over from
        the prior state. Bytes that are invalid in the configured encoding
        are replaced with U+FFFD.

        Raises:
            OSError: If the file cannot be read
        """
        content = Path(id).read_bytes().decode(self.encoding, errors="replace")
        force = prior_state.force if prior_state is not None else False

        return ReadResponse(
            id=id,
            inputs=FileArgs(path=id, force=force, content=content),
            state=FileState(path=id, force=force, content=content),
        )

    @staticmethod
    def wire_dependencies() -> dict[str, str]:
        """Map each state field to the input field it depends on."""
        return dict(FIELD_DEPENDENCIES)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _write(self, path: str, content: str) -> None:
        data = content.encode(self.encoding)
        with open(path, "wb") as f:
            written = f.write(data)
        if written != len(data):
            raise ShortWriteError(written, len(data))
