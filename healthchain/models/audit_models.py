# /healthchain/models/audit_models.py
from dataclasses import dataclass, asdict
from datetime import datetime

GRANT_CONSENT = 'GRANT_CONSENT'
REVOKE_CONSENT = 'REVOKE_CONSENT'
ADD_RECORD = 'ADD_RECORD'
READ_RECORDS = 'READ_RECORDS'
DOWNLOAD_DECRYPT = 'DOWNLOAD_DECRYPT'


@dataclass(frozen=True)
class AuditEntry:
    """One privileged operation, as seen by the in-memory audit trail."""
    tx_id: str
    action: str
    actor_id: str
    target_id: str
    timestamp: datetime

    def to_dict(self):
        data = asdict(self)
        data['timestamp'] = self.timestamp.isoformat()
        return data
