"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services.

    A use case runs inside one request-scoped unit of work: either all of its
    writes are committed or none are.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
