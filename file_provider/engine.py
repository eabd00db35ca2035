"""
Reconciler - drives a File resource through its lifecycle.

Up Pipeline: Check → Create (new) or Diff → Update / Replace (recorded)
Refresh Pipeline: Read → record
Destroy Pipeline: Delete → forget

Delete has no preview mode, so dry runs skip it here.
"""

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .context import OperationContext
from .errors import StateStoreError, ValidationFailedError
from .lifecycle import Provider, build_provider
from .models import DiffResponse, FileState
from .state import StateStore

logger = logging.getLogger(__name__)

FILE_TYPE = "File"


class Action(str, Enum):
    """Outcome of reconciling one resource."""
    CREATE = "create"
    UPDATE = "update"
    REPLACE = "replace"
    SAME = "same"
    REFRESH = "refresh"
    DELETE = "delete"


class ReconcileResult(BaseModel):
    name: str
    action: Action
    id: str | None = None
    state: FileState | None = None
    diff: DiffResponse | None = None
    dry_run: bool = False


class Reconciler:
    """Applies desired inputs for named File resources against a StateStore."""

    def __init__(self, store: StateStore, provider: Provider | None = None):
        """
        Initialize Reconciler.

        Args:
            store: State store holding recorded resources
            provider: Provider to dispatch to (default: build_provider())
        """
        self.store = store
        self.provider = provider or build_provider()
        self.controller = self.provider.resource(self.provider.token(FILE_TYPE))

    def up(
        self, name: str, raw_inputs: dict[str, Any], dry_run: bool = False
    ) -> ReconcileResult:
        """
        Bring the named resource in line with ``raw_inputs``.

        Args:
            name: Declared resource name
            raw_inputs: Unvalidated inputs
            dry_run: Compute the plan without touching disk or state

        Returns:
            ReconcileResult describing the action taken (or planned)

        Raises:
            ValidationFailedError: If inputs fail Check
        """
        ctx = OperationContext(resource_name=name, dry_run=dry_run)

        checked = self.controller.check(ctx, name, raw_inputs)
        if checked.failures:
            raise ValidationFailedError(checked.failures)
        inputs = checked.inputs

        recorded = self.store.get(name)
        if recorded is None:
            created = self.controller.create(ctx, inputs)
            if not dry_run:
                self.store.put(name, created.id, created.output)
            logger.info(f"{name}: create {created.id}")
            return ReconcileResult(
                name=name,
                action=Action.CREATE,
                id=created.id,
                state=created.output,
                dry_run=dry_run,
            )

        id_, state = recorded
        diff = self.controller.diff(ctx, inputs, state)

        if not diff.has_changes:
            return ReconcileResult(
                name=name, action=Action.SAME, id=id_, state=state, diff=diff,
                dry_run=dry_run,
            )

        if diff.replaces:
            # delete_before_replace: old file goes first
            if not ctx.dry_run:
                self.controller.delete(ctx, state)
            created = self.controller.create(ctx, inputs)
            if not dry_run:
                self.store.put(name, created.id, created.output)
            logger.info(f"{name}: replace {id_} -> {created.id}")
            return ReconcileResult(
                name=name,
                action=Action.REPLACE,
                id=created.id,
                state=created.output,
                diff=diff,
                dry_run=dry_run,
            )

        updated = self.controller.update(ctx, inputs, state)
        if not dry_run:
            self.store.put(name, id_, updated.output)
        logger.info(f"{name}: update {id_} ({', '.join(diff.changes)})")
        return ReconcileResult(
            name=name,
            action=Action.UPDATE,
            id=id_,
            state=updated.output,
            diff=diff,
            dry_run=dry_run,
        )

    def refresh(self, name: str) -> ReconcileResult:
        """
        Re-read the named resource from disk and record the result.

        Raises:
            StateStoreError: If the resource is not recorded
            OSError: If the file cannot be read
        """
        id_, state = self._recorded(name)
        ctx = OperationContext.apply(name)

        read = self.controller.read(ctx, id_, state)
        self.store.put(name, read.id, read.state)
        return ReconcileResult(
            name=name, action=Action.REFRESH, id=read.id, state=read.state
        )

    def destroy(self, name: str, dry_run: bool = False) -> ReconcileResult:
        """
        Delete the named resource and forget it.

        Raises:
            StateStoreError: If the resource is not recorded
        """
        id_, state = self._recorded(name)
        ctx = OperationContext(resource_name=name, dry_run=dry_run)

        if not ctx.dry_run:
            self.controller.delete(ctx, state)
            self.store.remove(name)
            logger.info(f"{name}: delete {id_}")

        return ReconcileResult(
            name=name, action=Action.DELETE, id=id_, state=state, dry_run=dry_run
        )

    def _recorded(self, name: str) -> tuple[str, FileState]:
        recorded = self.store.get(name)
        if recorded is None:
            raise StateStoreError(f"No recorded resource named '{name}'")
        return recorded
