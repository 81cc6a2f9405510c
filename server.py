"""
r1cs-wtns Flask Server

Features:
- Upload-and-inspect of .r1cs / .wtns files
- snarkjs-style JSON export
- Robust error handling and validation
"""

import os
import re
from typing import Optional, Tuple

from flask import Flask, request, jsonify

from werkzeug.utils import secure_filename

from r1cs_wtns_py.config import Config
from r1cs_wtns_py.errors import FormatError
from r1cs_wtns_py.cli import detect_format, load_document, summarize
from r1cs_wtns_py.output.json_export import export_document

app = Flask(__name__)

# Configuration
app.config['MAX_CONTENT_LENGTH'] = 256 * 1024 * 1024  # 256MB max upload


def sanitize_filename(filename: str) -> str:
    """Sanitize filename before echoing it back."""
    filename = secure_filename(filename)
    filename = re.sub(r'[^\w\-_\.]', '_', filename)
    if len(filename) > 255:
        name, ext = os.path.splitext(filename)
        filename = name[:250] + ext
    return filename


def read_upload() -> Tuple[Optional[dict], Optional[Tuple]]:
    """
    Pull the uploaded file and requested field size out of the request.

    Returns:
        (upload, None) on success, or (None, error_response) on failure
    """
    if 'file' not in request.files:
        return None, (jsonify({'error': 'No file provided'}), 400)

    file = request.files['file']
    data = file.read()
    if len(data) < 4:
        return None, (jsonify({'error': 'File too small'}), 400)

    kind = detect_format(data)
    if kind is None:
        return None, (jsonify({'error': 'Unrecognized file magic'}), 400)

    config = Config.load(None)
    try:
        field_size = int(request.form.get('field_size', config.field_size))
    except ValueError:
        return None, (jsonify({'error': 'field_size must be an integer'}), 400)
    if field_size <= 0:
        return None, (jsonify({'error': 'field_size must be positive'}), 400)

    return {
        'filename': sanitize_filename(file.filename or ''),
        'data': data,
        'kind': kind,
        'field_size': field_size,
        'config': config,
    }, None


# ============== Routes ==============

@app.route('/api/inspect', methods=['POST'])
def inspect_file():
    """Parse an uploaded file and return its header summary."""
    upload, error = read_upload()
    if error:
        return error

    try:
        document = load_document(upload['data'], upload['field_size'])
    except FormatError as e:
        return jsonify({'error': str(e), 'type': type(e).__name__}), 400

    return jsonify({
        'filename': upload['filename'],
        'size': len(upload['data']),
        'summary': summarize(document),
    })


@app.route('/api/export', methods=['POST'])
def export_file():
    """Parse an uploaded file and return its JSON view."""
    upload, error = read_upload()
    if error:
        return error

    try:
        document = load_document(upload['data'], upload['field_size'])
    except FormatError as e:
        return jsonify({'error': str(e), 'type': type(e).__name__}), 400

    view = export_document(document, upload['config'])
    return jsonify({
        'filename': upload['filename'],
        'kind': upload['kind'],
        'data': view.to_dict(),
    })


@app.route('/api/docs')
def api_docs():
    """API documentation."""
    return jsonify({
        'name': 'r1cs-wtns API',
        'version': '0.1.0',
        'endpoints': {
            'POST /api/inspect': {
                'description': 'Parse an uploaded .r1cs or .wtns file and return its header',
                'content_type': 'multipart/form-data',
                'fields': {
                    'file': 'file blob',
                    'field_size': 'field element width in bytes (optional)'
                }
            },
            'POST /api/export': {
                'description': 'Parse an uploaded file and return its snarkjs-style JSON view',
                'content_type': 'multipart/form-data',
                'fields': {
                    'file': 'file blob',
                    'field_size': 'field element width in bytes (optional)'
                }
            }
        },
        'limits': {
            'max_upload_size': '256 MB'
        }
    })


if __name__ == '__main__':
    print("=" * 60)
    print("r1cs-wtns Server")
    print("=" * 60)
    print("API Docs: http://localhost:5000/api/docs")
    print("=" * 60)

    app.run(host='0.0.0.0', port=5000, debug=False, threaded=True)
