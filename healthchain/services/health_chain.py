# /healthchain/services/health_chain.py
import logging

from flask import current_app

from healthchain.extensions import db
from healthchain.utils.encryption_util import RecordCipher
from healthchain.utils.storage_util import BlobStorage
from healthchain.utils.ids import new_tx_id, new_record_id
from healthchain.services.ledger import LedgerStore
from healthchain.services.audit_trail import AuditTrail
from healthchain.services.events import EventRecorder
from healthchain.services.consent_registry import ConsentRegistry
from healthchain.services.access_gate import AccessGate
from healthchain.services.record_store import RecordStore
from healthchain.services.directory import Directory

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'healthchain'


class HealthChain:
    """
    Owns the consent registry, record store, audit trail and ledger of one
    running service, and exposes the operations callers may invoke.

    Created by the application factory and torn down with close(). Ledger
    operations need an application context.
    """

    def __init__(self, upload_folder, patients=(), providers=(), cipher=None,
                 tx_id_factory=new_tx_id, record_id_factory=new_record_id, audit_logger=None):
        self.cipher = cipher or RecordCipher()
        self.storage = BlobStorage(upload_folder)
        self.ledger = LedgerStore()
        self.audit_trail = AuditTrail(audit_logger)
        self.recorder = EventRecorder(self.ledger, self.audit_trail, id_factory=tx_id_factory)
        self.registry = ConsentRegistry(self.recorder)
        self.gate = AccessGate(self.registry)
        self.records = RecordStore(self.gate, self.cipher, self.storage, self.recorder,
                                   id_factory=record_id_factory)
        self.directory = Directory(patients, providers)

    @classmethod
    def from_app(cls, app, **kwargs):
        """Builds the service from the Flask app's configuration."""
        chain = cls(
            upload_folder=app.config['UPLOAD_FOLDER'],
            patients=app.config.get('SEED_PATIENTS', ()),
            providers=app.config.get('SEED_PROVIDERS', ()),
            audit_logger=getattr(app, 'audit_logger', None),
            **kwargs
        )
        app.extensions[EXTENSION_KEY] = chain
        logger.info(f"HealthChain started (uploads: {app.config['UPLOAD_FOLDER']})")
        return chain

    # --- Consent ---
    def grant_consent(self, patient_id, provider_id):
        return self.registry.grant(patient_id, provider_id)

    def revoke_consent(self, patient_id, provider_id):
        return self.registry.revoke(patient_id, provider_id)

    def is_active(self, patient_id, provider_id):
        return self.registry.is_active(patient_id, provider_id)

    # --- Records ---
    def add_record(self, patient_id, provider_id, data, filename=None):
        return self.records.add_record(patient_id, provider_id, data, filename=filename)

    def list_records(self, patient_id, provider_id):
        return self.records.list_records_for(patient_id, provider_id)

    def decrypt_record(self, record_id, provider_id):
        return self.records.read_decrypted(record_id, provider_id)

    def get_record(self, record_id):
        return self.records.get(record_id)

    # --- Logs ---
    def read_audit(self):
        return self.audit_trail.read_all()

    def read_ledger(self, entry_type=None):
        return self.ledger.read_all(entry_type)

    # --- Directory ---
    def list_patients(self):
        return self.directory.list_patients()

    def list_providers(self):
        return self.directory.list_providers()

    def close(self):
        """Releases database connections. Must run inside an app context."""
        db.session.remove()
        db.engine.dispose()
        logger.info("HealthChain stopped")


def get_healthchain():
    """Returns the HealthChain owned by the current application."""
    return current_app.extensions[EXTENSION_KEY]
