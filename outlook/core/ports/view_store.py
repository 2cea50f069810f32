"""
ViewStore Port - Interface for loading accuracy view configurations.

Implementations can be file-based (YAML) or database-backed.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from outlook.core.domain.view import AccuracyView


class ViewStore(ABC):
    """
    Abstract interface for accuracy view storage.

    Implementations:
    - YamlViewStore: File-based configuration
    """

    @abstractmethod
    async def list_views(self) -> list["AccuracyView"]:
        """
        List all configured views.

        Returns:
            List of AccuracyView objects, in catalog order
        """
        ...

    @abstractmethod
    async def get_view(self, name: str) -> "AccuracyView | None":
        """
        Get a specific view by name.

        Args:
            name: View name

        Returns:
            AccuracyView if found, None otherwise
        """
        ...
