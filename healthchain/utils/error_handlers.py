# /healthchain/utils/error_handlers.py
from flask import jsonify, current_app
from werkzeug.exceptions import RequestEntityTooLarge
from healthchain.exceptions import HealthChainError, LedgerWriteError


def register_error_handlers(app):
    @app.errorhandler(HealthChainError)
    def healthchain_error(error):
        if isinstance(error, LedgerWriteError):
            current_app.audit_logger.error(f"Ledger write failed, operation aborted: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'ok': False, 'error': 'Resource not found'}), 404

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(error):
        return jsonify({'ok': False, 'error': 'file too large'}), 413

    @app.errorhandler(429)
    def rate_limited(error):
        return jsonify({'ok': False, 'error': 'rate limit exceeded'}), 429

    @app.errorhandler(500)
    def internal_error(error):
        current_app.audit_logger.error(f"Internal server error: {str(error)}")
        return jsonify({'ok': False, 'error': 'server error'}), 500
