"""Resource lifecycle contract and the provider registry.

Resources are registered explicitly when the provider is built; calls are
dispatched by resource token, e.g. ``example:index:File``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from .context import OperationContext
from .controller import FileController
from .errors import UnknownResourceError
from .models import (
    CheckResponse,
    CreateResponse,
    DiffResponse,
    FileArgs,
    FileState,
    ReadResponse,
    UpdateResponse,
)
from .settings import get_settings

logger = logging.getLogger(__name__)


@runtime_checkable
class ResourceLifecycle(Protocol):
    """Operations an orchestrator invokes on a managed resource."""

    def check(
        self, ctx: OperationContext, name: str, raw_inputs: dict[str, Any]
    ) -> CheckResponse: ...

    def create(self, ctx: OperationContext, inputs: Any) -> CreateResponse: ...

    def update(
        self, ctx: OperationContext, inputs: Any, state: Any
    ) -> UpdateResponse: ...

    def delete(self, ctx: OperationContext, state: Any) -> None: ...

    def diff(self, ctx: OperationContext, inputs: Any, state: Any) -> DiffResponse: ...

    def read(
        self, ctx: OperationContext, id: str, prior_state: Any = None
    ) -> ReadResponse: ...


@dataclass
class Registration:
    """A resource type registered with the provider."""
    token: str
    description: str
    controller: ResourceLifecycle
    args_model: type[BaseModel]
    state_model: type[BaseModel]
    dependencies: dict[str, str]


class Provider:
    """Registry of resource types served by one provider plugin."""

    def __init__(self, namespace: str, name: str, version: str):
        self.namespace = namespace
        self.name = name
        self.version = version
        self._resources: dict[str, Registration] = {}

    def token(self, type_name: str, module: str = "index") -> str:
        return f"{self.namespace}:{module}:{type_name}"

    def register(
        self,
        type_name: str,
        controller: ResourceLifecycle,
        args_model: type[BaseModel],
        state_model: type[BaseModel],
        description: str = "",
        dependencies: dict[str, str] | None = None,
    ) -> Registration:
        """
        Register a resource type.

        Args:
            type_name: Resource type name, e.g. "File"
            controller: Object implementing the lifecycle operations
            args_model: Model of the resource inputs
            state_model: Model of the recorded state
            description: Human readable resource description
            dependencies: Output field -> input field it depends on

        Returns:
            The new Registration

        Raises:
            ValueError: If the token is already registered
        """
        token = self.token(type_name)
        if token in self._resources:
            raise ValueError(f"Resource {token} is already registered")

        registration = Registration(
            token=token,
            description=description,
            controller=controller,
            args_model=args_model,
            state_model=state_model,
            dependencies=dict(dependencies or {}),
        )
        self._resources[token] = registration
        logger.debug(f"Registered resource {token}")
        return registration

    def resource(self, token: str) -> ResourceLifecycle:
        """Return the controller registered under ``token``."""
        return self.registration(token).controller

    def registration(self, token: str) -> Registration:
        try:
            return self._resources[token]
        except KeyError:
            raise UnknownResourceError(f"Unknown resource type: {token}") from None

    @property
    def tokens(self) -> list[str]:
        return sorted(self._resources)

    def schema(self) -> dict[str, Any]:
        """
        Build the package schema for all registered resources.

        Returns:
            Dict with provider name, version and one entry per resource
        """
        resources = {}
        for token, reg in sorted(self._resources.items()):
            args_schema = reg.args_model.model_json_schema()
            state_schema = reg.state_model.model_json_schema()
            resources[token] = {
                "description": reg.description,
                "inputProperties": _properties(args_schema),
                "requiredInputs": sorted(args_schema.get("required", [])),
                "properties": _properties(state_schema),
                "required": sorted(state_schema.get("required", [])),
                "dependencies": dict(reg.dependencies),
            }

        return {
            "name": self.name,
            "version": self.version,
            "namespace": self.namespace,
            "resources": resources,
        }


def _properties(json_schema: dict[str, Any]) -> dict[str, Any]:
    props = {}
    for name, prop in json_schema.get("properties", {}).items():
        # Optional fields are rendered as anyOf [T, null]
        types = [
            option["type"]
            for option in prop.get("anyOf", [prop])
            if option.get("type") not in (None, "null")
        ]
        props[name] = {
            "type": types[0] if types else "string",
            "description": prop.get("description", ""),
        }
    return props


def build_provider(controller: FileController | None = None) -> Provider:
    """Build the provider and register the File resource."""
    settings = get_settings()
    provider = Provider(
        namespace=settings.namespace,
        name=settings.plugin_name,
        version=settings.version,
    )
    controller = controller or FileController()
    provider.register(
        "File",
        controller,
        args_model=FileArgs,
        state_model=FileState,
        description=controller.description,
        dependencies=controller.wire_dependencies(),
    )
    return provider
