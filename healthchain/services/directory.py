# /healthchain/services/directory.py
from healthchain.models.directory_models import Patient, Provider


class Directory:
    """Patients and providers known at bootstrap. Consent does not consult it."""

    def __init__(self, patients=(), providers=()):
        self._patients = {pid: Patient(pid, name) for pid, name in patients}
        self._providers = {pid: Provider(pid, name) for pid, name in providers}

    def list_patients(self):
        return list(self._patients.values())

    def list_providers(self):
        return list(self._providers.values())
