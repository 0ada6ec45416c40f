# /healthchain/models/consent_models.py
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ConsentGrant:
    """
    The latest consent decision for one (patient, provider) pair.

    A new decision supersedes the previous one as a whole; instances are never
    edited.
    """
    patient_id: str
    provider_id: str
    granted: bool
    timestamp: datetime
    tx_id: str
