# /healthchain/services/ledger.py
import threading
import logging

from sqlalchemy.exc import SQLAlchemyError

from healthchain.extensions import db
from healthchain.exceptions import LedgerWriteError
from healthchain.models.ledger_models import LedgerEntry

logger = logging.getLogger(__name__)


class LedgerStore:
    """
    Append-only ledger persisted in the application database.

    Appends are serialized so that row ids follow the order in which entries
    became durable. read_all() always goes back to the database.
    """

    def __init__(self):
        self._lock = threading.Lock()

    def append(self, entry_type, tx_id, timestamp=None, **payload):
        """Persists one entry and commits before returning it."""
        entry = LedgerEntry(tx_id=tx_id, type=entry_type, payload=payload)
        if timestamp is not None:
            entry.timestamp = timestamp

        with self._lock:
            try:
                db.session.add(entry)
                db.session.commit()
            except SQLAlchemyError as e:
                db.session.rollback()
                logger.error(f"Ledger append failed for {entry_type} tx={tx_id}: {e}")
                raise LedgerWriteError(f'ledger write failed: {e.__class__.__name__}')

        return entry

    def read_all(self, entry_type=None):
        """Replays every entry in insertion order, optionally filtered by type."""
        # Drop identity-map state so rows are reloaded from storage
        db.session.expire_all()
        query = LedgerEntry.query
        if entry_type:
            query = query.filter_by(type=entry_type)
        return query.order_by(LedgerEntry.id.asc()).all()

    def count(self):
        return LedgerEntry.query.count()
