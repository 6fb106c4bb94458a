from app import create_app
from core.errors import FetchError, NoDataFoundError, UnsupportedSourceError
from core.config import ScrapeConfig
from core.scrape import Scrape, process_html


GMR_HTML = '<table id="grd1"><tr><td>A</td><td>B</td></tr><tr><td>1</td><td>2</td></tr></table>'


class FakeScraper:

    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def run(self, service, awb_number, granularity='records'):
        self.calls.append((service, awb_number, granularity))
        if self.error:
            raise self.error
        return {'data': process_html(service, GMR_HTML, awb_number=awb_number, granularity=granularity), 'url': 'https://example.test'}


def _client(scraper):
    app = create_app({'TESTING': True}, scraper=scraper)
    return app.test_client()


def test_health():
    resp = _client(FakeScraper()).get('/api/health')
    assert resp.status_code == 200
    assert resp.get_json() == {'status': 'ok', 'message': 'Server is running'}
    assert resp.headers['Access-Control-Allow-Origin'] == '*'


def test_scrape_ok():
    scraper = FakeScraper()
    resp = _client(scraper).post('/api/scrape', json={'service': 'gmr', 'awbNumber': '05700359741'})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['success'] is True
    assert body['url'] == 'https://example.test'
    assert body['data']['tables'][0]['data'] == [{'A': '1', 'B': '2'}]
    assert scraper.calls == [('gmr', '05700359741', 'records')]


def test_scrape_defaults_to_dcsc():
    scraper = FakeScraper(error=NoDataFoundError('No Data Found'))
    resp = _client(scraper).post('/api/scrape', json={'awbNumber': '05700359741'})
    assert scraper.calls[0][0] == 'dcsc'
    assert resp.status_code == 404
    assert resp.get_json()['kind'] == 'no_data'


def test_scrape_error_statuses():
    cases = [
        (UnsupportedSourceError('C', ['dcsc', 'gmr']), 400, 'unsupported_source'),
        (FetchError('timeout'), 502, 'fetch_error'),
        (ValueError('unknown granularity'), 400, 'invalid_request'),
        (RuntimeError('boom'), 500, 'internal_error'),
    ]
    for error, status, kind in cases:
        resp = _client(FakeScraper(error=error)).post('/api/scrape', json={'service': 'C', 'awbNumber': '1'})
        assert resp.status_code == status
        body = resp.get_json()
        assert body['success'] is False
        assert body['kind'] == kind


def test_preflight():
    resp = _client(FakeScraper()).open('/api/scrape', method='OPTIONS')
    assert resp.status_code == 204
    assert 'POST' in resp.headers['Access-Control-Allow-Methods']


def test_non_object_body_rejected():
    scraper = FakeScraper()
    client = _client(scraper)
    for body in (['gmr', '05700359741'], 'gmr', 42):
        resp = client.post('/api/scrape', json=body)
        assert resp.status_code == 400
        assert resp.get_json()['kind'] == 'invalid_request'
    assert scraper.calls == []


class HtmlClient:

    def __init__(self, config):
        self.config = config

    def fetch(self, source_key, awb):
        return GMR_HTML

    def describe_url(self, source_key, awb):
        return f"https://example.test/{source_key}/{awb}"

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return None


def test_numeric_awb_number_accepted():
    scraper = Scrape(config=ScrapeConfig(timezone='UTC'), client_factory=HtmlClient)
    resp = _client(scraper).post('/api/scrape', json={'service': 'gmr', 'awbNumber': 5700359741})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['data']['awb_number'] == '5700359741'
    assert body['url'] == 'https://example.test/gmr/5700359741'
