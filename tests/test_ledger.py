"""
Tests for the durable ledger and the paired audit/ledger emission.
"""

import pytest

from healthchain.exceptions import LedgerWriteError
from healthchain.models.ledger_models import CONSENT_GRANTED, CONSENT_REVOKED
from healthchain.services import get_healthchain
from conftest import make_app


def test_append_and_replay_in_order(chain):
    chain.ledger.append('CUSTOM', '0xa1', note='first')
    chain.ledger.append('CUSTOM', '0xa2', note='second')

    entries = chain.read_ledger()
    assert [e.tx_id for e in entries] == ['0xa1', '0xa2']
    assert entries[0].to_dict()['note'] == 'first'


def test_entry_serializes_flat(chain):
    chain.grant_consent('pat-1', 'doc-1')
    entry = chain.read_ledger()[0].to_dict()

    assert entry['type'] == CONSENT_GRANTED
    assert entry['patientId'] == 'pat-1'
    assert entry['providerId'] == 'doc-1'
    assert entry['tx'].startswith('0x')
    assert entry['timestamp'].endswith('+00:00')


def test_filter_by_type(chain):
    chain.grant_consent('pat-1', 'doc-1')
    chain.revoke_consent('pat-1', 'doc-1')

    revoked = chain.read_ledger(CONSENT_REVOKED)
    assert len(revoked) == 1
    assert revoked[0].type == CONSENT_REVOKED


def test_ledger_survives_restart(tmp_path):
    first = make_app(tmp_path)
    with first.app_context():
        get_healthchain().grant_consent('pat-1', 'doc-1')
        get_healthchain().close()

    second = make_app(tmp_path)
    with second.app_context():
        chain = get_healthchain()
        ledger = chain.read_ledger()
        assert [e.type for e in ledger] == [CONSENT_GRANTED]
        # The audit trail and the consent view are process-lifetime only
        assert chain.read_audit() == []
        assert chain.is_active('pat-1', 'doc-1') is False

        chain.revoke_consent('pat-1', 'doc-1')
        assert [e.type for e in chain.read_ledger()] == [CONSENT_GRANTED, CONSENT_REVOKED]
        chain.close()


def test_every_operation_pairs_audit_and_ledger(granted):
    chain = granted
    record, _ = chain.add_record('pat-1', 'doc-1', b'hello')
    chain.list_records('pat-1', 'doc-1')
    chain.decrypt_record(record.record_id, 'doc-1')
    chain.revoke_consent('pat-1', 'doc-1')

    audit_tx = [e.tx_id for e in chain.read_audit()]
    ledger_tx = [e.tx_id for e in chain.read_ledger()]
    assert audit_tx == ledger_tx
    assert len(set(audit_tx)) == 5


def test_failed_ledger_write_leaves_no_audit_entry(chain):
    chain.recorder.id_factory = lambda: '0xduplicate'
    chain.grant_consent('pat-1', 'doc-1')

    with pytest.raises(LedgerWriteError):
        chain.grant_consent('pat-2', 'doc-1')

    assert chain.is_active('pat-2', 'doc-1') is False
    assert len(chain.read_audit()) == 1
    assert len(chain.read_ledger()) == 1


def test_ledger_count_never_decreases(granted):
    chain = granted
    counts = [chain.ledger.count()]
    for i in range(5):
        chain.add_record('pat-1', 'doc-1', f'note {i}'.encode())
        counts.append(chain.ledger.count())
    assert counts == sorted(counts)
    assert counts[-1] == 6
