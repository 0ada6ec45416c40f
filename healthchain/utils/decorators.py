# /healthchain/utils/decorators.py
from functools import wraps
from flask import request, current_app, make_response
from healthchain.exceptions import HealthChainError


def log_access(action):
    """
    Writes the outcome of a request to the HIPAA audit log, including denials.

    This is request-level logging only; the audit trail and the ledger are
    written by the services for successful operations.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            ip_address = request.remote_addr
            actor = _claimed_actor()

            try:
                raw_response = f(*args, **kwargs)
                response = make_response(raw_response)

                success = response.status_code < 400
                current_app.audit_logger.info(
                    f"Action='{action}', Actor='{actor}', IP='{ip_address}', "
                    f"Success='{success}', Status='{response.status_code}'"
                )
                return response

            except HealthChainError as e:
                current_app.audit_logger.warning(
                    f"Action='{action}', Actor='{actor}', IP='{ip_address}', "
                    f"Success='False', Status='{e.status_code}', Details='{e.message}'"
                )
                raise

        return decorated_function
    return decorator


def _claimed_actor():
    """The identity the caller asserts; it is not verified."""
    if request.view_args and request.view_args.get('provider_id'):
        return request.view_args['provider_id']
    for key in ('provider_id', 'patient_id'):
        value = request.args.get(key) or request.form.get(key)
        if value:
            return value
    if request.is_json:
        data = request.get_json(silent=True) or {}
        if isinstance(data, dict):
            return data.get('patient_id') or data.get('provider_id')
    return None
