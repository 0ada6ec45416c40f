# /healthchain/api/controllers/log_controller.py
from flask import request, jsonify
from healthchain.services import get_healthchain


def get_audit():
    """In-memory audit trail of this process."""
    entries = get_healthchain().read_audit()
    return jsonify({'ok': True, 'audit': [e.to_dict() for e in entries]}), 200


def get_ledger():
    """Durable ledger, replayed from the database. Optional ?type= filter."""
    entry_type = request.args.get('type')
    entries = get_healthchain().read_ledger(entry_type)
    return jsonify({'ok': True, 'ledger': [e.to_dict() for e in entries]}), 200
