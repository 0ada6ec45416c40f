# /healthchain/services/record_store.py
import threading
import logging

from healthchain.exceptions import (
    InvalidArgument, NotFound, CipherError, DecryptionFailed, HealthChainError
)
from healthchain.models.record_models import EncryptedRecord
from healthchain.models import audit_models, ledger_models
from healthchain.services.validation import require_ids
from healthchain.utils.ids import new_record_id

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Encrypted record metadata, with every write and disclosure behind the gate.

    Ciphertext is kept in blob storage; this store only holds metadata.
    """

    def __init__(self, gate, cipher, storage, recorder, id_factory=new_record_id):
        self.gate = gate
        self.cipher = cipher
        self.storage = storage
        self.recorder = recorder
        self.id_factory = id_factory
        self._records = {}
        self._lock = threading.Lock()

    def add_record(self, patient_id, provider_id, plaintext, filename=None):
        """
        Encrypts and stores a new record for the patient.

        Consent is checked once here; a later revoke does not remove the record.
        The pair's consent cannot change between the check and the write.

        Returns:
            tuple: (EncryptedRecord, tx_id)
        """
        require_ids(patient_id=patient_id, provider_id=provider_id)
        if plaintext is None:
            raise InvalidArgument('file required')

        with self.gate.guard(patient_id, provider_id):
            self.gate.require(patient_id, provider_id)
            record, tx_id = self._store(patient_id, provider_id, plaintext, filename)

        logger.info(f"Record {record.record_id} added for {patient_id} by {provider_id}")
        return record, tx_id

    def _store(self, patient_id, provider_id, plaintext, filename):
        iv, ciphertext = self.cipher.encrypt(plaintext)
        record_id = self.id_factory()
        handle = self.storage.handle_for(record_id)
        self.storage.save(handle, iv, ciphertext)

        try:
            event = self.recorder.emit(
                audit_models.ADD_RECORD, provider_id, record_id, ledger_models.RECORD_ADDED,
                recordId=record_id, patientId=patient_id, providerId=provider_id,
            )
        except HealthChainError:
            # Clean up the blob if the ledger write fails
            self.storage.delete(handle)
            raise

        record = EncryptedRecord(
            record_id=record_id,
            patient_id=patient_id,
            provider_id=provider_id,
            handle=handle,
            iv=iv.hex(),
            created_at=event.timestamp,
            filename=filename,
        )
        with self._lock:
            self._records[record_id] = record
        return record, event.tx_id

    def list_records_for(self, patient_id, requesting_provider_id):
        """
        Lists every record of the patient, whoever uploaded it.

        Returns:
            tuple: (list of EncryptedRecord, tx_id)
        """
        require_ids(patient_id=patient_id, provider_id=requesting_provider_id)

        with self.gate.guard(patient_id, requesting_provider_id):
            self.gate.require(patient_id, requesting_provider_id)

            with self._lock:
                records = [r for r in self._records.values() if r.patient_id == patient_id]

            event = self.recorder.emit(
                audit_models.READ_RECORDS, requesting_provider_id, patient_id, ledger_models.READ_RECORDS,
                patientId=patient_id, providerId=requesting_provider_id,
            )
        return records, event.tx_id

    def get(self, record_id):
        with self._lock:
            return self._records.get(record_id)

    def read_decrypted(self, record_id, requesting_provider_id):
        """
        Decrypts a record for a provider holding current consent from its patient.

        Returns:
            tuple: (plaintext bytes, tx_id)
        """
        require_ids(record_id=record_id, provider_id=requesting_provider_id)

        record = self.get(record_id)
        if record is None:
            raise NotFound()

        with self.gate.guard(record.patient_id, requesting_provider_id):
            self.gate.require(record.patient_id, requesting_provider_id)
            plaintext = self._decrypt(record)

            event = self.recorder.emit(
                audit_models.DOWNLOAD_DECRYPT, requesting_provider_id, record_id, ledger_models.DOWNLOAD_DECRYPT,
                recordId=record_id, actor=requesting_provider_id,
            )
        return plaintext, event.tx_id

    def _decrypt(self, record):
        try:
            iv, ciphertext = self.storage.load(record.handle)
        except ValueError as e:
            logger.error(f"Blob for record {record.record_id} is unreadable: {e}")
            raise DecryptionFailed()

        try:
            return self.cipher.decrypt(ciphertext, iv)
        except CipherError as e:
            logger.error(f"Decrypt error for record {record.record_id}: {e}")
            raise DecryptionFailed()

    def __len__(self):
        with self._lock:
            return len(self._records)
