"""
Local state store for resources driven from the CLI.

Recorded state is keyed by resource ID (the file path); a separate index
maps each declared resource name to its current ID. Persisted with joblib.
"""

import logging
from pathlib import Path

import joblib

from .errors import StateStoreError
from .models import FileState

logger = logging.getLogger(__name__)


class StateStore:
    """
    Persistent mapping of resource name -> (id, FileState).

    Every mutation is written through to disk immediately.
    """

    def __init__(self, state_file: Path):
        """
        Initialize StateStore.

        Args:
            state_file: Path to the state file
        """
        self.state_file = Path(state_file)
        self._resources: dict[str, dict] = {}
        self._names: dict[str, str] = {}
        self._load_state()

    def _load_state(self) -> None:
        """Load state from file."""
        if not self.state_file.exists():
            logger.debug(f"State file {self.state_file} does not exist, starting empty")
            return

        try:
            data = joblib.load(self.state_file)
        except Exception as e:
            raise StateStoreError(f"Could not load state file {self.state_file}: {e}") from e

        if not isinstance(data, dict):
            raise StateStoreError(f"Unexpected state file format in {self.state_file}")

        self._resources = dict(data.get("resources", {}))
        self._names = dict(data.get("names", {}))
        logger.debug(f"Loaded {len(self._names)} resources from {self.state_file}")

    def _save_state(self) -> None:
        """Save state to file."""
        try:
            self.state_file.parent.mkdir(parents=True, exist_ok=True)

            data = {"resources": self._resources, "names": self._names}

            # Write to temporary file first, then rename (atomic operation)
            temp_file = self.state_file.with_suffix(".tmp")
            joblib.dump(data, temp_file)
            temp_file.replace(self.state_file)
        except OSError as e:
            raise StateStoreError(f"Could not save state file: {e}") from e

    def get(self, name: str) -> tuple[str, FileState] | None:
        """
        Look up a resource by name.

        Returns:
            (id, state) or None if the resource is not recorded
        """
        id_ = self._names.get(name)
        if id_ is None or id_ not in self._resources:
            return None
        return id_, FileState.model_validate(self._resources[id_])

    def put(self, name: str, id_: str, state: FileState) -> None:
        """Record ``state`` for ``name`` under ``id_``, replacing any prior ID."""
        previous = self._names.get(name)
        self._resources[id_] = state.model_dump()
        self._names[name] = id_
        if previous is not None and previous != id_:
            self._drop_unreferenced(previous)
        self._save_state()
        logger.debug(f"Recorded {name} -> {id_}")

    def remove(self, name: str) -> None:
        """Forget a resource. Unknown names are ignored."""
        id_ = self._names.pop(name, None)
        if id_ is None:
            return
        self._drop_unreferenced(id_)
        self._save_state()
        logger.debug(f"Forgot {name}")

    def _drop_unreferenced(self, id_: str) -> None:
        # Several names may share one path
        if id_ not in self._names.values():
            self._resources.pop(id_, None)

    def items(self) -> list[tuple[str, str, FileState]]:
        """Return (name, id, state) for every recorded resource, sorted by name."""
        return [
            (name, id_, FileState.model_validate(self._resources[id_]))
            for name, id_ in sorted(self._names.items())
            if id_ in self._resources
        ]
