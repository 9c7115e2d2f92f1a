"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from scoutsearch.cli import main

pytestmark = pytest.mark.usefixtures("restore_root_logging")


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    for name in ("SCOUTSEARCH_ELASTICSEARCH__INDEX_READ", "SCOUTSEARCH_ELASTICSEARCH__INDEX_WRITE"):
        monkeypatch.delenv(name, raising=False)


class TestIndexName:
    def test_default_read_mode(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["index-name", "--suffix", "orders"])
        assert capsys.readouterr().out.strip() == "read_orders"

    def test_uses_config_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        config = tmp_path / "config.yaml"
        config.write_text("elasticsearch:\n  index-write: myapp_write_1\n")

        main(["--config", str(config), "index-name", "-s", "orders", "-m", "write"])

        assert capsys.readouterr().out.strip() == "myapp_write_1_orders"

    def test_missing_config_exits(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--config", str(tmp_path / "nope.yaml"), "index-name", "-s", "orders"])
        assert exc.value.code == 1

    def test_invalid_mode_rejected_by_parser(self) -> None:
        with pytest.raises(SystemExit):
            main(["index-name", "-s", "orders", "-m", "archive"])


class TestPutMapping:
    def test_sends_mapping(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        mapping = tmp_path / "mapping.yaml"
        mapping.write_text("title:\n  type: text\n")
        client = MagicMock()
        client.indices.put_mapping.return_value = {"acknowledged": True}

        with patch("scoutsearch.engines.elasticsearch.client.create_client", return_value=client):
            main(["put-mapping", "-s", "orders", "-f", str(mapping)])

        client.indices.put_mapping.assert_called_once()
        kwargs = client.indices.put_mapping.call_args.kwargs
        assert kwargs["index"] == "write_orders"
        assert kwargs["body"]["properties"] == {"title": {"type": "text"}}
        assert json.loads(capsys.readouterr().out) == {"acknowledged": True}

    def test_missing_mapping_file_exits(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["put-mapping", "-s", "orders", "-f", str(tmp_path / "missing.yaml")])
        assert exc.value.code == 1

    def test_engine_error_exits(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        from scoutsearch.engines.base.exceptions import ConfigurationError

        mapping = tmp_path / "mapping.json"
        mapping.write_text('{"title": {"type": "text"}}')

        with (
            patch(
                "scoutsearch.engines.elasticsearch.client.create_client",
                side_effect=ConfigurationError("opensearch-py package is required."),
            ),
            pytest.raises(SystemExit) as exc,
        ):
            main(["put-mapping", "-s", "orders", "-f", str(mapping)])

        assert exc.value.code == 1
        assert "opensearch-py package is required." in capsys.readouterr().err


def test_logs_carry_command_context(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    mapping = tmp_path / "mapping.yaml"
    mapping.write_text("title:\n  type: text\n")
    client = MagicMock()
    client.indices.put_mapping.return_value = {"acknowledged": True}

    with patch("scoutsearch.engines.elasticsearch.client.create_client", return_value=client):
        main(["put-mapping", "-s", "orders", "-f", str(mapping)])

    records = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line.startswith("{")]
    record = next(r for r in records if r["event"] == "Putting mapping on write_orders")
    assert record["command"] == "put-mapping"
    assert record["suffix"] == "orders"
    assert record["level"] == "info"
