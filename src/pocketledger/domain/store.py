"""Shared behaviour for in-memory stores backed by the database."""

import threading
from typing import Callable, Optional

import structlog

from pocketledger.database.base import Database
from pocketledger.domain.errors import PersistError

logger = structlog.get_logger(__name__)


class Store:
    """Base class for stores that apply changes in memory, then persist.

    Every mutation runs under ``lock``. Persistence failures never undo the
    in-memory change; they are logged and kept on ``last_save_error`` so the
    caller can show a warning.
    """

    def __init__(self, db: Database):
        """Initialize store.

        Args:
            db: Database instance
        """
        self.db = db
        self.lock = threading.RLock()
        self.last_save_error: Optional[PersistError] = None

    def _persist(self, write: Callable[..., None], *args) -> bool:
        """Call a database write, recording a PersistError instead of raising it.

        Returns:
            True if the write succeeded
        """
        return self._persist_each([(write, *args)])

    def _persist_each(self, writes: list[tuple]) -> bool:
        """Run several writes for one compound mutation.

        Every write is attempted; ``last_save_error`` keeps the first failure.
        """
        first_error: Optional[PersistError] = None
        for write, *args in writes:
            try:
                write(*args)
            except PersistError as e:
                logger.warning(
                    "persist_failed",
                    store=type(self).__name__,
                    entity=e.entity,
                    entity_id=e.entity_id,
                    error=str(e),
                )
                if first_error is None:
                    first_error = e
        self.last_save_error = first_error
        return first_error is None
