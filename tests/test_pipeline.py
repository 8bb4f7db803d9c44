import json
import logging

import pytest

from easyseas import pipeline


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    saved_level, saved_handlers = root.level, root.handlers[:]
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def data_file(tmp_path, sample_data):
    path = tmp_path / "cruises.json"
    path.write_text(json.dumps(sample_data), encoding="utf-8")
    return path


def test_run_pipeline_writes_report(tmp_path, data_file):
    output = tmp_path / "report.html"
    result = pipeline.run_pipeline("availability", data_file=data_file, output_html=output)
    assert result == output
    assert "Symphony of the Seas" in output.read_text(encoding="utf-8")


def test_run_pipeline_emails_report(tmp_path, data_file, monkeypatch):
    sent = []
    monkeypatch.setattr(pipeline, "send_email", lambda subject, html_body: sent.append((subject, html_body)))
    pipeline.run_pipeline("offers", data_file=data_file, output_html=tmp_path / "offers.html", email=True)
    assert len(sent) == 1
    assert sent[0][0] == pipeline.EMAIL_SUBJECTS["offers"]
    assert "Club Royale Select" in sent[0][1]


def test_run_pipeline_rejects_unknown_mode(tmp_path, data_file):
    with pytest.raises(ValueError):
        pipeline.run_pipeline("weekly", data_file=data_file, output_html=tmp_path / "x.html")


def test_arg_parser_defaults():
    args = pipeline.build_arg_parser().parse_args([])
    assert args.mode == "availability"
    assert args.sort == "soonest"
    assert args.schedule_at is None
    assert not args.email


def test_arg_parser_rejects_unsupported_sort():
    with pytest.raises(SystemExit):
        pipeline.build_arg_parser().parse_args(["--sort", "longest"])


def test_main_cli_success(tmp_path, data_file):
    output = tmp_path / "offers.html"
    code = pipeline.main_cli(["--mode", "offers", "--data", str(data_file), "--output", str(output),
                              "--sort", "highest-value", "--log-level", "WARNING"])
    assert code == 0
    assert output.exists()


def test_main_cli_reports_failure(tmp_path):
    code = pipeline.main_cli(["--data", str(tmp_path / "missing.json"), "--output", str(tmp_path / "x.html"),
                              "--log-level", "WARNING"])
    assert code == 1
