"""
Fishchi - Flask Application
Thin HTTP adapter over the citation engine.

Endpoints:
- POST /api/v1/sources/parse-citation - Parse a free-form citation
- POST /api/v1/sources/import-doi - Fetch a record from Crossref by DOI
- POST /api/v1/export/format-citation - In-text citation + bibliography
- POST /api/v1/export/bibliography - Bibliography only
- POST /api/v1/export/convert-style - Re-render a document's citations in a new style
- POST /api/v1/export/docx - Bibliography as a Word document
- GET /api/v1/styles - Available citation styles

The adapter is stateless: every request carries its records and citation
order. Responses use the envelope {statusCode, success, status, data, message}.
"""

import io
import os
from datetime import datetime, timezone

from flask import Flask, request, jsonify, send_file

from .models import BibliographicRecord
from .config import DEFAULT_TEMPLATE, LOCALE_ENGLISH, LANGUAGE_AUTO
from .parser import parse_citation
from .formatters import get_available_styles, is_style_supported
from .renderer import BibliographyRenderer
from .service import format_citations, convert_citation_style
from .engines.doi import fetch_crossref_by_doi
from .exporters import export_bibliography_docx
from .errors import FishchiError, InvalidInputError
from . import __version__
from .logging_utils import get_logger, log_exception, set_log_level

logger = get_logger('app')

app = Flask(__name__)
app.config['MAX_CONTENT_LENGTH'] = 16 * 1024 * 1024  # 16MB max request size
app.json.ensure_ascii = False


# =============================================================================
# RESPONSE HELPERS
# =============================================================================

def api_response(status_code, data=None, message=""):
    """JSON envelope shared by every endpoint."""
    success = 200 <= status_code < 300
    if success:
        status = 'success'
    elif 400 <= status_code < 500:
        status = 'fail'
    else:
        status = 'error'
    body = {
        'statusCode': status_code,
        'success': success,
        'status': status,
        'data': data,
        'message': message,
    }
    return jsonify(body), status_code


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidInputError("Request body must be a JSON object")
    return data


def _records_from(data):
    """BibliographicRecords from the request's 'sources' list."""
    sources = data.get('sources')
    if not isinstance(sources, list) or not sources:
        raise InvalidInputError("'sources' must be a non-empty list")
    records = []
    for i, source in enumerate(sources):
        if not isinstance(source, dict):
            raise InvalidInputError(f"Source {i} must be an object")
        record = BibliographicRecord.from_dict(source)
        if not record.id:
            record.id = str(i + 1)
        records.append(record)
    return records


def _camel_citation(converted):
    item = {'sourceId': converted['source_id'], 'inText': converted['in_text']}
    if converted.get('error'):
        item['error'] = converted['error']
    return item


@app.errorhandler(FishchiError)
def handle_engine_error(e):
    logger.info("[API] %s: %s", e.code, e.message)
    return api_response(400, {'code': e.code, 'detail': e.detail}, e.message)


# =============================================================================
# SOURCE ROUTES
# =============================================================================

@app.route('/api/v1/sources/parse-citation', methods=['POST'])
def api_parse_citation():
    """
    Parse a pasted citation into a structured record.

    Request JSON:
        { "citation": "Smith, J. (2024). Title. Journal, 15(3), 123-145." }

    Response data:
        { "record": {...}, "detected_style": "apa", "language": "english", "confidence": 100 }
    """
    data = _json_body()
    result = parse_citation(data.get('citation'))
    message = "Citation parsed successfully"
    if result.is_low_confidence:
        message = "Citation parsed with low confidence, please review the fields"
    return api_response(200, result.to_dict(), message)


@app.route('/api/v1/sources/import-doi', methods=['POST'])
def api_import_doi():
    """
    Import a source from Crossref.

    Request JSON:
        { "doi": "10.1234/jet.2024.001" }
    """
    data = _json_body()
    doi = (data.get('doi') or '').strip()
    if not doi:
        raise InvalidInputError("DOI is required")

    record = fetch_crossref_by_doi(doi)
    if record is None:
        return api_response(404, None, "No source found for this DOI in Crossref")
    return api_response(200, record.to_dict(), "Source imported successfully")


# =============================================================================
# EXPORT ROUTES
# =============================================================================

@app.route('/api/v1/export/format-citation', methods=['POST'])
def api_format_citation():
    """
    In-text citation and bibliography for one citation point.

    Request JSON:
        { "sources": [...], "style": "apa", "citedIds": ["1"], "lang": "en-US",
          "citationOrder": ["2", "1", "3"] }
    """
    data = _json_body()
    records = _records_from(data)
    result = format_citations(
        records,
        data.get('style') or DEFAULT_TEMPLATE,
        data.get('citedIds'),
        data.get('lang') or LOCALE_ENGLISH,
        data.get('citationOrder'),
    )
    return api_response(200, {'inText': result['in_text'], 'bibliography': result['bibliography']},
                        "Citation formatted successfully")


@app.route('/api/v1/export/bibliography', methods=['POST'])
def api_bibliography():
    """Bibliography HTML for a list of sources."""
    data = _json_body()
    records = _records_from(data)
    html = BibliographyRenderer().render_bibliography(
        records,
        data.get('style') or DEFAULT_TEMPLATE,
        data.get('lang') or LANGUAGE_AUTO,
        data.get('citationOrder'),
    )
    return api_response(200, {'bibliography': html}, "Bibliography generated successfully")


@app.route('/api/v1/export/convert-style', methods=['POST'])
def api_convert_style():
    """
    Convert every citation of a document to a new style.

    Request JSON:
        { "sources": [...], "sourceIds": ["2", "1"], "currentStyle": "apa",
          "newStyle": "vancouver", "lang": "auto" }
    """
    data = _json_body()
    new_style = data.get('newStyle')
    if not new_style:
        raise InvalidInputError("'newStyle' is required")

    records = _records_from(data)
    result = convert_citation_style(
        records,
        new_style,
        data.get('sourceIds'),
        data.get('lang') or LANGUAGE_AUTO,
        current_style=data.get('currentStyle'),
    )

    payload = {
        'convertedCitations': [_camel_citation(c) for c in result['converted_citations']],
        'bibliography': result['bibliography'],
        'newStyle': result['new_style'],
        'totalConverted': result['total_converted'],
        'successCount': result['success_count'],
        'errorCount': result['error_count'],
    }
    return api_response(200, payload,
                        f"Successfully converted {result['success_count']} citations to {str(new_style).upper()}")


@app.route('/api/v1/export/docx', methods=['POST'])
def api_export_docx():
    """Bibliography as a .docx download."""
    data = _json_body()
    records = _records_from(data)
    content = export_bibliography_docx(
        records,
        data.get('style') or DEFAULT_TEMPLATE,
        data.get('lang') or LANGUAGE_AUTO,
        data.get('citationOrder'),
    )
    return send_file(
        io.BytesIO(content),
        mimetype='application/vnd.openxmlformats-officedocument.wordprocessingml.document',
        as_attachment=True,
        download_name='bibliography.docx',
    )


@app.route('/api/v1/styles', methods=['GET'])
def api_styles():
    """Return available citation styles."""
    styles = get_available_styles()
    return api_response(200, {'styles': styles, 'default': DEFAULT_TEMPLATE},
                        "Available styles")


@app.route('/api/v1/styles/<path:name>', methods=['GET'])
def api_style_supported(name):
    """Check whether a style name or alias is recognized."""
    return api_response(200, {'style': name, 'supported': is_style_supported(name)})


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'version': __version__,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })


@app.errorhandler(500)
def handle_server_error(e):
    log_exception("[API] Unhandled error", getattr(e, 'original_exception', e), logger)
    return api_response(500, None, "Server error")


# =============================================================================
# MAIN
# =============================================================================

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('DEBUG', 'false').lower() == 'true'
    if debug:
        set_log_level('DEBUG')
    app.run(host='0.0.0.0', port=port, debug=debug)
