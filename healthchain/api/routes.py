# /healthchain/api/routes.py

from . import api_bp
from healthchain.extensions import limiter
from healthchain.utils.decorators import log_access
from .controllers import consent_controller, record_controller, directory_controller, log_controller


# --- Status & Directory Endpoints ---
@api_bp.route('/status', methods=['GET'])
def status():
    return directory_controller.get_status()

@api_bp.route('/patients', methods=['GET'])
def get_patients():
    return directory_controller.get_patients()

@api_bp.route('/providers', methods=['GET'])
def get_providers():
    return directory_controller.get_providers()


# --- Consent Endpoints ---
@api_bp.route('/consent/grant', methods=['POST'])
@limiter.limit("30 per minute")
@log_access("GRANT_CONSENT")
def grant_consent():
    return consent_controller.grant_consent()

@api_bp.route('/consent/revoke', methods=['POST'])
@limiter.limit("30 per minute")
@log_access("REVOKE_CONSENT")
def revoke_consent():
    return consent_controller.revoke_consent()


# --- Record Endpoints ---
@api_bp.route('/add-record', methods=['POST'])
@limiter.limit("20 per minute")
@log_access("ADD_RECORD")
def add_record():
    return record_controller.add_record()

@api_bp.route('/records/<string:patient_id>/<string:provider_id>', methods=['GET'])
@log_access("READ_RECORDS")
def list_records(patient_id, provider_id):
    return record_controller.list_records(patient_id, provider_id)

@api_bp.route('/decrypt/<string:record_id>', methods=['GET'])
@log_access("DOWNLOAD_DECRYPT")
def decrypt_record(record_id):
    return record_controller.decrypt_record(record_id)


# --- Audit & Ledger Endpoints ---
@api_bp.route('/audit', methods=['GET'])
def get_audit():
    return log_controller.get_audit()

@api_bp.route('/ledger', methods=['GET'])
def get_ledger():
    return log_controller.get_ledger()
