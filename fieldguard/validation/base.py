from abc import ABC, abstractmethod
from typing import Any


class UniquenessChecker(ABC):
    """Contract for the backend behind ``Validator.is_unique``."""

    @abstractmethod
    def exists(self, table: str, column: str, value: Any) -> bool:
        """Report whether ``table`` already has a row with ``column = value``.

        Implementations must bind ``value`` as a query parameter, never
        interpolate it into the query text.

        Raises:
            StorageError: if the backend query fails for any reason.
        """
