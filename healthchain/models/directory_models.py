# /healthchain/models/directory_models.py
from dataclasses import dataclass


@dataclass(frozen=True)
class Patient:
    patient_id: str
    name: str

    def to_dict(self):
        return {'patient_id': self.patient_id, 'name': self.name}


@dataclass(frozen=True)
class Provider:
    provider_id: str
    name: str

    def to_dict(self):
        return {'provider_id': self.provider_id, 'name': self.name}
