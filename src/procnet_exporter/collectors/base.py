"""
Defines the abstract interface for connection sources.

A connection source produces the list of currently open network connections
together with their owning processes. Implementations differ only in how
they obtain that list (parsing a listing utility's text output, or querying
the OS per process); everything downstream depends on this interface alone.
"""

import logging
from abc import ABC, abstractmethod
from typing import List

from ..models.connections import ConnectionRecord

logger = logging.getLogger(__name__)


class AbstractConnectionSource(ABC):
    """
    Abstract base class for connection sources.

    Subclasses implement `acquire`, which returns a fresh list of
    ConnectionRecord objects on every call and keeps no state between calls.
    """

    name: str = "abstract"

    def __init__(self, acquisition_timeout: float = 10.0, **kwargs):
        """
        Initializes the AbstractConnectionSource.

        Args:
            acquisition_timeout: Upper bound in seconds for one acquisition.
                Exceeding it makes `acquire` raise SourceUnavailable.
            **kwargs: Additional keyword arguments specific to an implementation.
        """
        self.acquisition_timeout = acquisition_timeout
        logger.info(
            f"Initializing {self.__class__.__name__} with timeout: "
            f"{acquisition_timeout}s, extra_args: {kwargs}"
        )

    @abstractmethod
    def acquire(self) -> List[ConnectionRecord]:
        """
        Returns all connections currently visible to this source.

        Protocol and state fields carry the raw tokens reported by the
        underlying mechanism; normalization happens downstream.

        Raises:
            SourceUnavailable: If no listing could be obtained at all.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(timeout={self.acquisition_timeout})"
