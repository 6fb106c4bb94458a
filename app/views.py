from __future__ import annotations
from flask import Blueprint, current_app, jsonify, request

from core.assemble import GRANULARITY_RECORDS
from core.errors import ScrapeError
from core.logger import Logger


bp = Blueprint('main', __name__)
log = Logger.bind(__name__)

DEFAULT_SERVICE = 'dcsc'

STATUS_BY_KIND = {
    'invalid_awb': 400,
    'unsupported_source': 400,
    'no_data': 404,
    'fetch_error': 502,
    'parse_error': 500,
}


def _fail(status: int, kind: str, message: str, **extra):
    body = {'success': False, 'kind': kind, 'error': message}
    body.update(extra)
    return jsonify(body), status


@bp.route('/api/health')
def health():
    return jsonify({'status': 'ok', 'message': 'Server is running'})


@bp.route('/api/scrape', methods=['POST', 'OPTIONS'])
def scrape():
    if request.method == 'OPTIONS':
        return '', 204
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        return _fail(400, 'invalid_request', f"request body must be a JSON object, got {type(payload).__name__}")
    service = payload.get('service') or DEFAULT_SERVICE
    awb_number = payload.get('awbNumber') or ''
    granularity = payload.get('granularity') or GRANULARITY_RECORDS
    log.info(f"scrape request service={service} awb={awb_number} granularity={granularity}")
    scraper = current_app.extensions['scraper']
    try:
        result = scraper.run(service, awb_number, granularity=granularity)
    except ScrapeError as e:
        status = STATUS_BY_KIND.get(e.kind, 500)
        log.warn(f"scrape failed kind={e.kind} status={status} error={e.message}")
        return _fail(status, e.kind, e.message, service=service, awb_number=awb_number)
    except ValueError as e:
        return _fail(400, 'invalid_request', str(e))
    except Exception as e:  # noqa: BLE001
        log.exception(f"scrape crashed error={e}")
        return _fail(500, 'internal_error', str(e))
    data = result['data']
    log.info(f"scrape ok service={data['service_code']} tables={data['total_tables']} url={result['url']}")
    return jsonify({'success': True, 'data': data, 'url': result['url']})
