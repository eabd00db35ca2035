"""Pulumi dynamic provider for File resources."""

from typing import Any, Optional

import pulumi
from pulumi import Input, Output
from pulumi.dynamic import (
    CheckFailure,
    CheckResult,
    CreateResult,
    DiffResult,
    ReadResult,
    ResourceProvider,
    UpdateResult,
)

from ..context import OperationContext
from ..controller import FileController
from ..models import FileArgs, FileState


class FileProvider(ResourceProvider):
    """Dynamic provider for File resources backed by FileController.

    Pulumi never calls create or update during a preview, so every call
    here runs in apply mode.
    """

    def __init__(self, controller: FileController | None = None):
        self.controller = controller or FileController()

    def check(self, _olds: dict[str, Any], news: dict[str, Any]) -> CheckResult:
        """
        Validate inputs, defaulting path to the resource name.

        Args:
            _olds: Previous inputs
            news: New inputs

        Returns:
            CheckResult with normalized inputs and failures
        """
        name = news.get("path") or ""
        ctx = OperationContext.apply(name)
        result = self.controller.check(ctx, name, news)

        failures = [CheckFailure(f.property, f.reason) for f in result.failures]
        inputs = result.inputs.model_dump() if result.inputs is not None else news
        return CheckResult(inputs, failures)

    def create(self, props: dict[str, Any]) -> CreateResult:
        """
        Create a file.

        Args:
            props: Resource properties

        Returns:
            CreateResult with file path as ID and the recorded state
        """
        inputs = FileArgs.model_validate(props)
        result = self.controller.create(OperationContext.apply(inputs.path or ""), inputs)
        return CreateResult(id_=result.id, outs=result.output.model_dump())

    def read(self, id_: str, props: dict[str, Any]) -> ReadResult:
        """
        Refresh a file from disk.

        Args:
            id_: Resource ID (file path)
            props: Last recorded properties

        Returns:
            ReadResult with the on-disk state
        """
        prior = FileState.model_validate(props) if props else None
        result = self.controller.read(OperationContext.apply(id_), id_, prior)
        return ReadResult(id_=result.id, outs=result.state.model_dump())

    def update(
        self, _id: str, _olds: dict[str, Any], _news: dict[str, Any]
    ) -> UpdateResult:
        """
        Update a file.

        Args:
            _id: Resource ID (file path)
            _olds: Recorded state
            _news: New inputs

        Returns:
            UpdateResult with the new state
        """
        state = FileState.model_validate(_olds)
        inputs = FileArgs.model_validate(_news)
        result = self.controller.update(OperationContext.apply(_id), inputs, state)
        return UpdateResult(outs=result.output.model_dump())

    def delete(self, _id: str, _props: dict[str, Any]) -> None:
        """
        Delete a file.

        Args:
            _id: Resource ID (file path)
            _props: Recorded state
        """
        state = FileState.model_validate(_props)
        self.controller.delete(OperationContext.apply(_id), state)

    def diff(
        self, _id: str, _olds: dict[str, Any], _news: dict[str, Any]
    ) -> DiffResult:
        """
        Check if file needs update or replacement.

        Args:
            _id: Resource ID (file path)
            _olds: Recorded state
            _news: New inputs

        Returns:
            DiffResult indicating if changes are needed
        """
        state = FileState.model_validate(_olds)
        inputs = FileArgs.model_validate(_news)
        result = self.controller.diff(OperationContext.apply(_id), inputs, state)

        return DiffResult(
            changes=result.has_changes,
            replaces=result.replaces,
            stables=[],
            delete_before_replace=result.delete_before_replace,
        )


class File(pulumi.dynamic.Resource):
    """
    A file projected into a pulumi resource.

    Args:
        name: Resource name, also the default file path
        content: The content of the file
        path: The file path (default: resource name)
        force: Overwrite an existing file on create (default: False)
        opts: Standard Pulumi resource options
    """

    path: Output[str]
    force: Output[bool]
    content: Output[str]

    def __init__(
        self,
        name: str,
        content: Input[str],
        path: Optional[Input[str]] = None,
        force: Input[bool] = False,
        opts: Optional[pulumi.ResourceOptions] = None,
    ):
        super().__init__(
            FileProvider(),
            name,
            {
                "path": path if path is not None else name,
                "force": force,
                "content": content,
            },
            opts,
        )
