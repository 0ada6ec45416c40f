# /healthchain/exceptions.py


class HealthChainError(Exception):
    """Base class for every failure the core reports to its caller."""
    status_code = 500
    message = 'server error'

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self):
        return {'ok': False, 'error': self.message}


class InvalidArgument(HealthChainError):
    status_code = 400
    message = 'invalid argument'


class AccessDenied(HealthChainError):
    status_code = 403
    message = 'access denied: no active consent'


class NotFound(HealthChainError):
    status_code = 404
    message = 'record not found'


class StorageMissing(HealthChainError):
    """Record metadata exists but its encrypted blob does not."""
    status_code = 404
    message = 'encrypted file missing'


class CipherError(HealthChainError):
    message = 'cipher error'


class DecryptionFailed(CipherError):
    message = 'decryption failed'


class LedgerWriteError(HealthChainError):
    """The durable ledger append failed; the operation did not take effect."""
    message = 'ledger write failed'
