"""
Tests for the Flask blueprint routes:
- GET /api/status, /api/patients, /api/providers
- POST /api/consent/grant, /api/consent/revoke
- POST /api/add-record
- GET /api/records/<patient_id>/<provider_id>
- GET /api/decrypt/<record_id>
- GET /api/audit, /api/ledger
"""

import io


def _grant(client, patient_id='pat-1', provider_id='doc-1'):
    return client.post('/api/consent/grant', json={'patient_id': patient_id, 'provider_id': provider_id})


def _upload(client, data=b'hello', filename='labs.txt', patient_id='pat-1', provider_id='doc-1'):
    return client.post('/api/add-record', data={
        'patient_id': patient_id,
        'provider_id': provider_id,
        'file': (io.BytesIO(data), filename),
    }, content_type='multipart/form-data')


def test_status(client):
    response = client.get('/api/status')
    assert response.status_code == 200
    assert response.get_json()['ok'] is True


def test_directory(client):
    patients = client.get('/api/patients').get_json()['patients']
    providers = client.get('/api/providers').get_json()['providers']
    assert patients == [{'patient_id': 'pat-1', 'name': 'John Doe'}]
    assert providers == [{'provider_id': 'doc-1', 'name': 'Dr. Smith'}]


def test_grant_and_revoke(client):
    response = _grant(client)
    assert response.status_code == 200
    body = response.get_json()
    assert body['ok'] is True
    assert body['tx'].startswith('0x')
    assert body['timestamp']

    response = client.post('/api/consent/revoke', json={'patient_id': 'pat-1', 'provider_id': 'doc-1'})
    assert response.status_code == 200
    assert response.get_json()['tx'] != body['tx']


def test_grant_requires_ids(client):
    response = client.post('/api/consent/grant', json={'patient_id': 'pat-1'})
    assert response.status_code == 400
    assert response.get_json() == {'ok': False, 'error': 'provider_id required'}


def test_upload_without_consent(client):
    response = _upload(client)
    assert response.status_code == 403
    assert response.get_json()['ok'] is False
    assert client.get('/api/ledger').get_json()['ledger'] == []


def test_upload_requires_file(client):
    _grant(client)
    response = client.post('/api/add-record', data={'patient_id': 'pat-1', 'provider_id': 'doc-1'})
    assert response.status_code == 400
    assert response.get_json()['error'] == 'file required'


def test_upload_list_and_decrypt(client):
    _grant(client)
    response = _upload(client, b'lab results', 'labs.txt')
    assert response.status_code == 201
    record = response.get_json()['record']
    assert record['filename'] == 'labs.txt'

    listing = client.get('/api/records/pat-1/doc-1').get_json()
    assert [r['record_id'] for r in listing['records']] == [record['record_id']]

    response = client.get(f"/api/decrypt/{record['record_id']}?provider_id=doc-1")
    assert response.status_code == 200
    assert response.data == b'lab results'
    assert 'labs.txt' in response.headers['Content-Disposition']
    assert response.headers['X-Transaction-Id'].startswith('0x')


def test_decrypt_errors(client):
    _grant(client)
    record = _upload(client).get_json()['record']

    assert client.get(f"/api/decrypt/{record['record_id']}").status_code == 400
    assert client.get('/api/decrypt/0xmissing?provider_id=doc-1').status_code == 404
    assert client.get(f"/api/decrypt/{record['record_id']}?provider_id=doc-9").status_code == 403


def test_list_without_consent(client):
    response = client.get('/api/records/pat-1/doc-1')
    assert response.status_code == 403
    assert response.get_json()['error'] == 'access denied: no active consent'


def test_audit_and_ledger(client):
    _grant(client)
    _upload(client)

    audit = client.get('/api/audit').get_json()['audit']
    ledger = client.get('/api/ledger').get_json()['ledger']
    assert [a['action'] for a in audit] == ['GRANT_CONSENT', 'ADD_RECORD']
    assert [entry['type'] for entry in ledger] == ['CONSENT_GRANTED', 'RECORD_ADDED']
    assert [a['tx_id'] for a in audit] == [entry['tx'] for entry in ledger]

    granted_only = client.get('/api/ledger?type=CONSENT_GRANTED').get_json()['ledger']
    assert len(granted_only) == 1


def test_unknown_route(client):
    response = client.get('/api/nothing-here')
    assert response.status_code == 404
    assert response.get_json()['ok'] is False


def test_show_ledger_command(app):
    with app.app_context():
        app.extensions['healthchain'].grant_consent('pat-1', 'doc-1')

    result = app.test_cli_runner().invoke(args=['show-ledger'])
    assert result.exit_code == 0
    assert 'CONSENT_GRANTED' in result.output
