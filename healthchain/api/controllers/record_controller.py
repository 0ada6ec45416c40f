# /healthchain/api/controllers/record_controller.py
from flask import request, jsonify, current_app, send_file
from werkzeug.utils import secure_filename
from healthchain.exceptions import InvalidArgument
from healthchain.services import get_healthchain
import io


def add_record():
    """Encrypt and store an uploaded file for a patient."""
    patient_id = request.form.get('patient_id')
    provider_id = request.form.get('provider_id')

    if not patient_id or not provider_id:
        raise InvalidArgument('patient_id & provider_id required')

    if 'file' not in request.files:
        raise InvalidArgument('file required')

    file = request.files['file']
    filename = secure_filename(file.filename or '') or None
    data = file.read()

    current_app.logger.info(f"Upload attempt: provider {provider_id} for patient {patient_id} ({len(data)} bytes)")

    record, tx = get_healthchain().add_record(patient_id, provider_id, data, filename=filename)
    return jsonify({'ok': True, 'record': record.to_dict(), 'tx': tx}), 201


def list_records(patient_id, provider_id):
    """List a patient's records for a consented provider."""
    records, tx = get_healthchain().list_records(patient_id, provider_id)
    return jsonify({
        'ok': True,
        'records': [r.to_dict() for r in records],
        'count': len(records),
        'tx': tx
    }), 200


def decrypt_record(record_id):
    """Download a decrypted record. The provider is named by the provider_id query param."""
    provider_id = request.args.get('provider_id')
    if not provider_id:
        raise InvalidArgument('provider_id query param required')

    chain = get_healthchain()
    plaintext, tx = chain.decrypt_record(record_id, provider_id)
    record = chain.get_record(record_id)

    response = send_file(
        io.BytesIO(plaintext),
        mimetype='application/octet-stream',
        as_attachment=True,
        download_name=record.download_name
    )
    response.headers['X-Transaction-Id'] = tx
    return response
