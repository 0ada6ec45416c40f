# /healthchain/models/ledger_models.py
from datetime import datetime, timezone
from healthchain.extensions import db

CONSENT_GRANTED = 'CONSENT_GRANTED'
CONSENT_REVOKED = 'CONSENT_REVOKED'
RECORD_ADDED = 'RECORD_ADDED'
READ_RECORDS = 'READ_RECORDS'
DOWNLOAD_DECRYPT = 'DOWNLOAD_DECRYPT'


def _utcnow():
    return datetime.now(timezone.utc)


def _isoformat(value):
    if value is None:
        return None
    # SQLite hands back naive datetimes; everything is stored as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class LedgerEntry(db.Model):
    """Durable, append-only event ledger. Rows are never updated or deleted."""
    __tablename__ = 'ledger_entries'

    # Autoincrement id is the total order of the ledger
    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    tx_id = db.Column(db.String(64), unique=True, nullable=False, index=True)
    type = db.Column(db.String(50), nullable=False, index=True)
    payload = db.Column(db.JSON, nullable=False, default=dict)
    timestamp = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)

    def to_dict(self):
        """Flat representation: type, payload fields, tx and timestamp."""
        entry = {'type': self.type}
        entry.update(self.payload or {})
        entry['tx'] = self.tx_id
        entry['timestamp'] = _isoformat(self.timestamp)
        return entry

    def __repr__(self):
        return f"<LedgerEntry {self.id} {self.type} {self.tx_id}>"
