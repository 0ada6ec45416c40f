# /healthchain/api/controllers/directory_controller.py
from datetime import datetime, timezone
from flask import jsonify
from healthchain.services import get_healthchain


def get_status():
    """Backend health check."""
    return jsonify({
        'ok': True,
        'msg': 'HealthChain backend is running',
        'now': datetime.now(timezone.utc).isoformat()
    }), 200


def get_patients():
    patients = get_healthchain().list_patients()
    return jsonify({'ok': True, 'patients': [p.to_dict() for p in patients]}), 200


def get_providers():
    providers = get_healthchain().list_providers()
    return jsonify({'ok': True, 'providers': [p.to_dict() for p in providers]}), 200
