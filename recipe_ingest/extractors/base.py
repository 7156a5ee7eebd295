"""
Base Content Strategy.

This module defines the interface every extraction tier implements.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from bs4 import BeautifulSoup

from ..models.recipe import ExtractedContent, Outcome


class ContentStrategy(ABC):
    """Abstract base class for recipe content extraction tiers.

    A strategy receives the parsed page and the content gathered so far, and
    returns a partial ExtractedContent. Only fields left unset by earlier
    tiers are taken from it.
    """

    name: str = "strategy"

    @abstractmethod
    def extract(self, soup: BeautifulSoup, current: ExtractedContent) -> Outcome[ExtractedContent]:
        """Extract whatever recipe sections this tier can find.

        Args:
            soup: The parsed HTML document
            current: Content collected by earlier tiers

        Returns:
            Outcome wrapping a partial ExtractedContent and any warnings
        """
