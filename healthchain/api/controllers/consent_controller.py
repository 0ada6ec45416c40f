# /healthchain/api/controllers/consent_controller.py
from flask import request, jsonify
from healthchain.services import get_healthchain


def _consent_args():
    data = request.get_json(silent=True) or {}
    return data.get('patient_id'), data.get('provider_id')


def grant_consent():
    """Grant a provider access to a patient's records."""
    patient_id, provider_id = _consent_args()
    grant, tx = get_healthchain().grant_consent(patient_id, provider_id)
    return jsonify({'ok': True, 'tx': tx, 'timestamp': grant.timestamp.isoformat()}), 200


def revoke_consent():
    """Revoke a provider's access to a patient's records."""
    patient_id, provider_id = _consent_args()
    grant, tx = get_healthchain().revoke_consent(patient_id, provider_id)
    return jsonify({'ok': True, 'tx': tx, 'timestamp': grant.timestamp.isoformat()}), 200
