# /healthchain/utils/ids.py
import secrets


def new_tx_id():
    """Opaque transaction id joining an operation's audit and ledger entries."""
    return '0x' + secrets.token_hex(12)


def new_record_id():
    return '0x' + secrets.token_hex(8)
