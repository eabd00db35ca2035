"""Per-invocation context passed through every lifecycle operation."""

import logging
from dataclasses import dataclass, field

logger = logging.getLogger("file_provider")


class ResourceLoggerAdapter(logging.LoggerAdapter):
    """Prefixes every message with the resource name."""

    def process(self, msg, kwargs):
        resource = self.extra.get("resource")
        if resource:
            msg = f"[{resource}] {msg}"
        return msg, kwargs


@dataclass(frozen=True)
class OperationContext:
    """Carries the preview flag and a resource-scoped logger.

    Operations run the same decision logic in both modes and consult
    ``dry_run`` only right before a mutating filesystem call.
    """

    resource_name: str = ""
    dry_run: bool = False
    log: logging.LoggerAdapter = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        adapter = ResourceLoggerAdapter(logger, {"resource": self.resource_name})
        object.__setattr__(self, "log", adapter)

    @classmethod
    def preview(cls, resource_name: str = "") -> "OperationContext":
        return cls(resource_name=resource_name, dry_run=True)

    @classmethod
    def apply(cls, resource_name: str = "") -> "OperationContext":
        return cls(resource_name=resource_name, dry_run=False)
