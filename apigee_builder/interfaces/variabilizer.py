"""URL variabilization interface.

Defines the abstract base class for strategies that turn per-environment
backend URLs into a single KVM-backed URL template.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any


class BaseUrlVariabilizer(ABC):
    """Abstract base class for URL variabilization strategies.

    Implementations are pure: no I/O, no shared mutable state, and a fresh
    result for every call.
    """

    @abstractmethod
    def variabilize(self, servers: Sequence[Any], starting_index: int = 1) -> Any:
        """Variabilize a set of server URLs.

        Args:
            servers: ServerDescriptor objects, typically one per environment.
            starting_index: First KVM index to allocate, so several calls
                can share one non-overlapping index range.

        Returns:
            A VariabilizationResult. Malformed URLs never raise; they are
            parsed heuristically.

        Raises:
            ValueError: If ``starting_index`` is lower than 1.
        """

    @property
    @abstractmethod
    def environments(self) -> tuple[str, ...]:
        """Return the supported environment ids, in order."""
