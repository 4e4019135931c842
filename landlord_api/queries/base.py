"""
Base class for owner-scoped, read-only reporting queries.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from datetime import date
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)


class OwnerQuery:
    """
    A named, parameterized read-only query over one owner's data.

    Subclasses implement :meth:`fetch` and document their output row shape.
    ``today`` is injectable so date-relative results are reproducible.
    """

    name = "owner_query"

    def __init__(self, db: AsyncSession, owner_id: int, today: Optional[date] = None):
        self.db = db
        self.owner_id = owner_id
        self.today = today or date.today()

    async def fetch(self) -> Any:
        raise NotImplementedError

    def _log(self, rows: List[Dict[str, Any]]) -> None:
        logger.debug(f"{self.name}: {len(rows)} row(s) for user {self.owner_id}")
