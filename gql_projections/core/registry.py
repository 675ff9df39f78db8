"""Run-scoped registry of generated class names."""

import logging

logger = logging.getLogger(__name__)


class NameRegistry:
    """Records every class name emitted during one generation run.

    A name is handed out once; later requests for the same name are refused,
    so a type reached through several schema paths is generated only once.

    Example:
        registry = NameRegistry()
        registry.register("client.MoviesProjectionRoot")  # True
        registry.register("client.MoviesProjectionRoot")  # False
    """

    def __init__(self):
        self._names: set[str] = set()

    def register(self, name: str) -> bool:
        """Record ``name``; return False if it was already registered."""
        if name in self._names:
            logger.debug("Skipping %s, already generated", name)
            return False
        self._names.add(name)
        return True

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)
