import json

import run
from core.errors import FetchError
from core.scrape import process_html


HTML = '<table><tr><td>SHIPMENT DETAILS</td></tr><tr><td>Date</td><td>Status</td></tr><tr><td>05-Jan-24</td><td>Arrived</td></tr></table>'


class FakeScraper:

    def __init__(self, error=None):
        self.error = error

    def run(self, service, awb_number, granularity='records'):
        if self.error:
            raise self.error
        return {'data': process_html(service, HTML, awb_number=awb_number, granularity=granularity), 'url': 'u'}


def test_run_prints_and_dumps(tmp_path, capsys):
    args = run.build_parser().parse_args(['--service', 'dcsc', '--awb', '05700359741', '--dump-dir', str(tmp_path)])
    assert run.App(FakeScraper()).run(args) == 0
    out = capsys.readouterr().out
    assert '"section_title": "SHIPMENT DETAILS"' in out
    files = list(tmp_path.glob('awb_05700359741_*.json'))
    assert len(files) == 1
    assert json.loads(files[0].read_text(encoding='utf-8'))['total_tables'] == 1


def test_run_failure_exit_code():
    args = run.build_parser().parse_args(['--service', 'gmr', '--awb', '1'])
    assert run.App(FakeScraper(error=FetchError('down'))).run(args) == 1


def test_run_prompts_when_missing(monkeypatch):
    answers = iter(['q'])
    monkeypatch.setattr('builtins.input', lambda prompt: next(answers))
    args = run.build_parser().parse_args([])
    assert run.App(FakeScraper()).run(args) == 0
