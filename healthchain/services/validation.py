# /healthchain/services/validation.py
from healthchain.exceptions import InvalidArgument


def require_ids(**ids):
    """Raises InvalidArgument naming every identifier that is missing or empty."""
    missing = [name for name, value in ids.items()
               if not isinstance(value, str) or not value]
    if missing:
        raise InvalidArgument(' & '.join(missing) + ' required')
