"""
Contains base class for request pipelines
"""
from abc import ABC, abstractmethod
from typing import Any


class Pipeline(ABC):
    """
    Orchestrates fan-out fetch -> enrichment/ranking for one endpoint.
    """

    name: str

    @abstractmethod
    async def run(self, *args: Any, **kwargs: Any) -> Any:
        """
        Execute the pipeline.
        Per-source and per-item failures are recovered inside; an empty
        result is a valid outcome.
        """
        raise NotImplementedError
