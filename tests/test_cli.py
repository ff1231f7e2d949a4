import json
import sys

import pytest

from netlog_synth.bin import synthesize
from netlog_synth.bin.synthesize_all import synthesize_all


@pytest.fixture(autouse=True)
def no_logging_setup(monkeypatch):
    monkeypatch.setattr(synthesize, "setup_logging", lambda *args, **kwargs: None)


def run_cli(monkeypatch, *argv):
    monkeypatch.setattr(sys, "argv", ["netlog-synth", *argv])
    synthesize.main()


def test_writes_devtools_log(tmp_path, monkeypatch, capsys):
    fixture = tmp_path / "records.json"
    fixture.write_text(json.dumps([{"url": "https://testingurl.com/", "statusCode": 404}]))
    output = tmp_path / "out" / "log.json"

    run_cli(monkeypatch, str(fixture), "-o", str(output), "--verify")

    devtools_log = json.loads(output.read_text())
    assert [event["method"] for event in devtools_log][-1] == "Network.loadingFinished"
    assert len(devtools_log) == 4
    assert "Wrote 4 events" in capsys.readouterr().out


def test_missing_input_exits(tmp_path, monkeypatch):
    with pytest.raises(SystemExit) as exc_info:
        run_cli(monkeypatch, str(tmp_path / "missing.json"), "-o", str(tmp_path / "o.json"))

    assert exc_info.value.code == 1


def test_malformed_fixture_exits(tmp_path, monkeypatch, capsys):
    fixture = tmp_path / "records.json"
    fixture.write_text(json.dumps([{"startTime": 2000, "endTime": 1000}]))

    with pytest.raises(SystemExit):
        run_cli(monkeypatch, str(fixture), "-o", str(tmp_path / "o.json"), "-q")

    assert "exceeds" in capsys.readouterr().err
    assert not (tmp_path / "o.json").exists()


def test_fixture_must_be_array(tmp_path):
    fixture = tmp_path / "records.json"
    fixture.write_text(json.dumps({"url": "https://example.com/"}))

    with pytest.raises(TypeError):
        synthesize.load_fixture(str(fixture))


def test_synthesize_all(tmp_path):
    fixtures_dir = tmp_path / "fixtures"
    fixtures_dir.mkdir()
    (fixtures_dir / "good.json").write_text(json.dumps([{}, {"failed": True}]))
    (fixtures_dir / "bad.json").write_text(json.dumps([{"requestId": "1:redirect"}]))
    output_dir = tmp_path / "logs"

    failures = synthesize_all(fixtures_dir, output_dir, verify=True)

    assert list(failures) == ["bad.json"]
    assert "has no original request" in failures["bad.json"]
    devtools_log = json.loads((output_dir / "good.devtoolslog.json").read_text())
    assert len(devtools_log) == 6
    assert not (output_dir / "bad.devtoolslog.json").exists()


def test_synthesize_all_skips_existing(tmp_path):
    fixtures_dir = tmp_path / "fixtures"
    fixtures_dir.mkdir()
    (fixtures_dir / "page.json").write_text(json.dumps([{}]))
    output_dir = tmp_path / "logs"
    output_dir.mkdir()
    existing = output_dir / "page.devtoolslog.json"
    existing.write_text("[]")

    synthesize_all(fixtures_dir, output_dir)
    assert existing.read_text() == "[]"

    synthesize_all(fixtures_dir, output_dir, force=True)
    assert len(json.loads(existing.read_text())) == 4
