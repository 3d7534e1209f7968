"""
Incremental search over the document rows.
"""

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union

from ..core.document import Document
from ..core.viewport import ViewState, Viewport

logger = logging.getLogger(__name__)


class SearchDirection(IntEnum):
    FORWARD = 1
    BACKWARD = -1


@dataclass(frozen=True)
class QueryChanged:
    """The search query was edited; the search restarts from the top."""

    query: str


@dataclass(frozen=True)
class Advance:
    """Step to the next match in a direction."""

    direction: SearchDirection


@dataclass(frozen=True)
class Confirm:
    """Leave search keeping the cursor on the current match."""


@dataclass(frozen=True)
class Cancel:
    """Leave search and put the cursor back where it was."""


SearchEvent = Union[QueryChanged, Advance, Confirm, Cancel]


@dataclass(frozen=True)
class SearchResult:
    """Position of a match in buffer coordinates."""

    row: int
    column: int


class SearchController:
    """
    State machine driving an interactive search.

    Created when search starts; it remembers the cursor and scroll position
    so that cancelling restores them exactly.
    """

    def __init__(self, document: Document, view: Viewport) -> None:
        self.document = document
        self.view = view
        self.query = ""
        self.last_match: Optional[int] = None
        self.direction = SearchDirection.FORWARD
        self.active = True
        self.saved: ViewState = view.save()

    def reset(self) -> None:
        self.last_match = None
        self.direction = SearchDirection.FORWARD

    def handle(self, event: SearchEvent) -> Optional[SearchResult]:
        """
        Process a search event.

        Args:
            event: The event produced by the search prompt

        Returns:
            The match the cursor moved to, if any
        """

        if not self.active:
            return None

        if isinstance(event, QueryChanged):
            self.query = event.query
            self.reset()
            return self.step()

        if isinstance(event, Advance):
            self.direction = event.direction
            return self.step()

        if isinstance(event, Cancel):
            self.view.restore(self.saved)

        self.reset()
        self.active = False
        return None

    def step(self) -> Optional[SearchResult]:
        """Find the next row containing the query, wrapping around the document."""

        if not self.query:
            return None

        if self.last_match is None:
            self.direction = SearchDirection.FORWARD

        numrows = self.document.numrows
        current = -1 if self.last_match is None else self.last_match

        for _ in range(numrows):
            current += self.direction
            if current == -1:
                current = numrows - 1
            elif current == numrows:
                current = 0

            column = self.document.rows[current].chars.find(self.query)
            if column == -1:
                continue

            self.last_match = current
            self.view.cy = current
            self.view.cx = column
            self.view.rowoff = numrows
            logger.debug("Match for %r at %d:%d", self.query, current, column)
            return SearchResult(current, column)

        return None
