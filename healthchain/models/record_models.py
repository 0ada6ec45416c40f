# /healthchain/models/record_models.py
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class EncryptedRecord:
    """Metadata for an encrypted record. The ciphertext lives in blob storage under `handle`."""
    record_id: str
    patient_id: str
    provider_id: str
    handle: str
    iv: str
    created_at: datetime
    filename: str | None = None

    def to_dict(self):
        """Convert record metadata to a dictionary for API responses."""
        return {
            'record_id': self.record_id,
            'patient_id': self.patient_id,
            'provider_id': self.provider_id,
            'filename': self.filename or self.handle,
            'date': self.created_at.isoformat(),
        }

    @property
    def download_name(self):
        """Filename offered when the decrypted record is downloaded."""
        if self.filename:
            return self.filename
        return self.handle.rsplit('.enc', 1)[0]
