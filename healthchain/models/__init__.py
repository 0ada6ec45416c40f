from .ledger_models import LedgerEntry
from .consent_models import ConsentGrant
from .record_models import EncryptedRecord
from .audit_models import AuditEntry
from .directory_models import Patient, Provider
