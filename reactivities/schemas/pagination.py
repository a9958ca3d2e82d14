"""
Cursor-paginated list wrapper.
"""
from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class CursorPage(BaseModel, Generic[T]):
    """
    One page of a date-ordered feed.

    ``next_cursor`` and ``next_cursor_id`` identify the first row of the
    following page (the cursor is inclusive). Both are None at the end of
    the feed. Send both back: with a bare ``next_cursor`` the next page
    starts at the first row of that date, so a run of equal dates longer
    than the page repeats instead of advancing.
    """
    items: List[T] = []
    next_cursor: Optional[datetime] = None
    next_cursor_id: Optional[str] = None
