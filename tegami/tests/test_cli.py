import json
from unittest import mock

from tegami import cli

MESSAGE = (
    b"From: sender@example.com\r\n"
    b"Content-Type: text/html\r\n\r\n"
    b"<h1>Build failed</h1>Line one<br>Line two\r\n"
)


def test_process_prints_both_forms(tmp_path, capsys):
    sample = tmp_path / "sample.eml"
    sample.write_bytes(MESSAGE)

    assert cli.main(["process", str(sample)]) == 0

    result = json.loads(capsys.readouterr().out)
    assert result["html"] == "<h1>Build failed</h1>Line one\nLine two"
    assert result["markdown"].startswith("# Build failed")


def test_process_writes_output_file(tmp_path):
    sample = tmp_path / "sample.eml"
    sample.write_bytes(MESSAGE)
    output = tmp_path / "out.json"

    assert cli.main(["process", str(sample), "--output", str(output)]) == 0
    assert json.loads(output.read_text(encoding="utf-8"))["html"].startswith("<h1>")


def test_process_reports_errors(tmp_path, capsys):
    sample = tmp_path / "broken.eml"
    sample.write_bytes(b"not a header\r\n\r\nbody")

    assert cli.main(["process", str(sample)]) == 1
    assert capsys.readouterr().out.startswith("Error:")


def test_serve_rejects_invalid_configuration(monkeypatch, capsys):
    monkeypatch.setenv("TEGAMI_SMTP_PORT", "not-a-port")
    assert cli.main(["serve"]) == 1
    assert "Invalid numeric setting" in capsys.readouterr().out


def test_serve_reports_bind_failure(monkeypatch):
    monkeypatch.delenv("TEGAMI_TELEGRAM_BOT_TOKEN", raising=False)
    monkeypatch.delenv("TEGAMI_DISCORD_WEBHOOK_URL", raising=False)
    controller = mock.Mock()
    controller.start.side_effect = OSError("Address already in use")

    with mock.patch.object(cli, "create_gateway", return_value=controller) as create:
        assert cli.main(["serve", "--host", "127.0.0.1", "--port", "2526"]) == 1

    config = create.call_args.args[0]
    assert config.address == "127.0.0.1:2526"
    controller.stop.assert_not_called()
