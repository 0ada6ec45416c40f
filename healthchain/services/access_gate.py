# /healthchain/services/access_gate.py
import logging

from healthchain.exceptions import AccessDenied

logger = logging.getLogger(__name__)


class AccessGate:
    """Decides whether a provider may write or read a patient's records."""

    def __init__(self, registry):
        self.registry = registry

    def check(self, patient_id, provider_id):
        """Allow (True) only on an active consent; every other outcome denies."""
        try:
            return self.registry.is_active(patient_id, provider_id) is True
        except Exception:
            logger.exception(f"Consent lookup failed for {patient_id} -> {provider_id}; denying")
            return False

    def guard(self, patient_id, provider_id):
        """Holds the pair's consent fixed while a check and the work it allows run."""
        return self.registry.pair_guard(patient_id, provider_id)

    def require(self, patient_id, provider_id):
        if not self.check(patient_id, provider_id):
            logger.info(f"Access denied: {provider_id} has no active consent from {patient_id}")
            raise AccessDenied()
