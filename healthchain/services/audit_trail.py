# /healthchain/services/audit_trail.py
import threading
import logging

AUDIT_LOGGER_NAME = 'HIPAA_AUDIT'


class AuditTrail:
    """In-memory mirror of privileged actions, lost on restart."""

    def __init__(self, audit_logger=None):
        self._entries = []
        self._lock = threading.Lock()
        self.audit_logger = audit_logger or logging.getLogger(AUDIT_LOGGER_NAME)

    def record(self, entry):
        with self._lock:
            self._entries.append(entry)
        self.audit_logger.info(
            f"TxID='{entry.tx_id}', Action='{entry.action}', Actor='{entry.actor_id}', Target='{entry.target_id}'"
        )
        return entry

    def read_all(self):
        with self._lock:
            return list(self._entries)

    def __len__(self):
        with self._lock:
            return len(self._entries)
