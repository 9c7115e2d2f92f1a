"""Tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from scoutsearch.config.settings import ElasticsearchSettings, Settings


class TestElasticsearchSettings:
    def test_defaults(self) -> None:
        es = ElasticsearchSettings()
        assert es.backend == "opensearch"
        assert es.index_read is None
        assert es.index_write is None
        assert es.dynamic_date_formats == ["yyyy-MM-dd HH:mm:ss||yyyy-MM-dd"]
        assert es.chunk_size == 500

    def test_hyphenated_index_keys(self) -> None:
        es = ElasticsearchSettings.model_validate({"index-read": "app_read_1", "index-write": "app_write_1"})
        assert es.index_read == "app_read_1"
        assert es.index_write == "app_write_1"

    def test_hosts_from_json_string(self) -> None:
        es = ElasticsearchSettings(hosts='["http://a:9200", "http://b:9200"]')  # type: ignore[arg-type]
        assert es.hosts == ["http://a:9200", "http://b:9200"]

    def test_hosts_from_plain_string(self) -> None:
        es = ElasticsearchSettings(hosts="http://a:9200")  # type: ignore[arg-type]
        assert es.hosts == ["http://a:9200"]


class TestSettings:
    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SCOUTSEARCH_ELASTICSEARCH__INDEX_READ", "env_read")
        monkeypatch.setenv("SCOUTSEARCH_OBSERVABILITY__LOG_FORMAT", "console")

        settings = Settings(_env_file=None)  # type: ignore[call-arg]

        assert settings.elasticsearch.index_read == "env_read"
        assert settings.observability.log_format == "console"

    def test_from_yaml(self, tmp_path: Path) -> None:
        config = tmp_path / "scoutsearch.yaml"
        config.write_text(
            "elasticsearch:\n"
            "  backend: elasticsearch\n"
            "  index-read: myapp_read_1\n"
            "  index-write: myapp_write_1\n"
            "  mapping_type: doc\n"
        )

        settings = Settings.from_yaml(config)

        assert settings.elasticsearch.backend == "elasticsearch"
        assert settings.elasticsearch.index_read == "myapp_read_1"
        assert settings.elasticsearch.index_write == "myapp_write_1"
        assert settings.elasticsearch.mapping_type == "doc"

    def test_from_yaml_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Settings.from_yaml(tmp_path / "missing.yaml")
