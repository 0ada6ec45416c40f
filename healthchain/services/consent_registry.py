# /healthchain/services/consent_registry.py
import threading
import logging

from healthchain.models.consent_models import ConsentGrant
from healthchain.models import audit_models, ledger_models
from healthchain.services.validation import require_ids

logger = logging.getLogger(__name__)


class ConsentRegistry:
    """
    Live view of consent: the latest decision per (patient, provider) pair.

    Earlier decisions are only kept in the ledger. Writers of the same pair
    are serialized by a per-pair lock; the view is updated only after the
    decision's audit and ledger entries have been written.
    """

    def __init__(self, recorder):
        self.recorder = recorder
        self._grants = {}
        self._view_lock = threading.Lock()
        self._pair_locks = {}
        self._pair_locks_guard = threading.Lock()

    def _pair_lock(self, pair):
        with self._pair_locks_guard:
            lock = self._pair_locks.get(pair)
            if lock is None:
                lock = self._pair_locks[pair] = threading.Lock()
            return lock

    def pair_guard(self, patient_id, provider_id):
        """
        Lock held by grant/revoke of this pair. Holding it keeps the pair's
        consent fixed; the lock is not reentrant.
        """
        return self._pair_lock((patient_id, provider_id))

    def _supersede(self, patient_id, provider_id, granted):
        require_ids(patient_id=patient_id, provider_id=provider_id)
        pair = (patient_id, provider_id)

        if granted:
            action, ledger_type = audit_models.GRANT_CONSENT, ledger_models.CONSENT_GRANTED
        else:
            action, ledger_type = audit_models.REVOKE_CONSENT, ledger_models.CONSENT_REVOKED

        with self._pair_lock(pair):
            event = self.recorder.emit(
                action, patient_id, provider_id, ledger_type,
                patientId=patient_id, providerId=provider_id,
            )
            grant = ConsentGrant(
                patient_id=patient_id,
                provider_id=provider_id,
                granted=granted,
                timestamp=event.timestamp,
                tx_id=event.tx_id,
            )
            with self._view_lock:
                self._grants[pair] = grant

        logger.info(f"Consent {'granted' if granted else 'revoked'}: {patient_id} -> {provider_id} (tx={event.tx_id})")
        return grant, event.tx_id

    def grant(self, patient_id, provider_id):
        """Makes the pair's consent active. Returns (ConsentGrant, tx_id)."""
        return self._supersede(patient_id, provider_id, True)

    def revoke(self, patient_id, provider_id):
        """Makes the pair's consent inactive. Returns (ConsentGrant, tx_id)."""
        return self._supersede(patient_id, provider_id, False)

    def get(self, patient_id, provider_id):
        with self._view_lock:
            return self._grants.get((patient_id, provider_id))

    def is_active(self, patient_id, provider_id):
        """True only if the latest decision for this exact pair is a grant."""
        grant = self.get(patient_id, provider_id)
        return grant is not None and grant.granted

    def list_for_patient(self, patient_id):
        with self._view_lock:
            return [g for (pid, _), g in self._grants.items() if pid == patient_id]
