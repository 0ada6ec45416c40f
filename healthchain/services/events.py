# /healthchain/services/events.py
import threading
import logging
from datetime import datetime, timezone

from healthchain.models.audit_models import AuditEntry
from healthchain.utils.ids import new_tx_id

logger = logging.getLogger(__name__)


class EventRecorder:
    """
    Writes the audit entry and the ledger entry of one operation as a unit.

    Both entries share a freshly generated transaction id. The ledger is
    written first; the audit entry is only recorded once the ledger append
    has committed, so a failed append leaves neither behind.
    """

    def __init__(self, ledger, audit_trail, id_factory=new_tx_id):
        self.ledger = ledger
        self.audit_trail = audit_trail
        self.id_factory = id_factory
        self._lock = threading.Lock()

    def emit(self, action, actor_id, target_id, ledger_type, **payload):
        """
        Records one operation.

        Returns:
            AuditEntry: the audit entry, carrying the shared tx_id and timestamp

        Raises LedgerWriteError if the durable append fails.
        """
        tx_id = self.id_factory()
        timestamp = datetime.now(timezone.utc)
        entry = AuditEntry(
            tx_id=tx_id,
            action=action,
            actor_id=actor_id,
            target_id=target_id,
            timestamp=timestamp,
        )

        with self._lock:
            self.ledger.append(ledger_type, tx_id, timestamp=timestamp, **payload)
            self.audit_trail.record(entry)

        logger.debug(f"Recorded {action} tx={tx_id}")
        return entry
