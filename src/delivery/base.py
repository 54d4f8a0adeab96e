"""
Module to contain base class for Delivery channels
"""
from abc import ABC, abstractmethod
from typing import List

from core.entities import BreakingItem


class DeliveryChannel(ABC):
    """
    Base interface for breaking-news notification channels.
    """

    name: str

    @abstractmethod
    async def deliver(self, *, headline: str, entries: List[BreakingItem]) -> None:
        """
        Deliver the headlines.
        Must raise exceptions on failure (handled upstream).
        """
        raise NotImplementedError
