"""Tests for configuration loading."""

import json
from pathlib import Path

import pytest

from remote_call.config import ConfigError, RemoteCallOptions, load_options


@pytest.fixture
def project_path():
    return Path(__file__).parent / "fixtures" / "project"


class TestRemoteCallOptions:
    def test_defaults_to_empty_function_paths(self):
        assert RemoteCallOptions().function_paths == []

    def test_from_mapping(self):
        options = RemoteCallOptions.from_mapping({"function_paths": ["server/api/*"]})

        assert options.function_paths == ["server/api/*"]

    @pytest.mark.parametrize("data", [None, {}, {"function_paths": None}])
    def test_missing_paths_are_empty(self, data):
        assert RemoteCallOptions.from_mapping(data).function_paths == []

    @pytest.mark.parametrize(
        "data",
        [["server/*"], {"function_paths": "server/*"}, {"function_paths": ["ok", 3]}],
    )
    def test_rejects_malformed_options(self, data):
        with pytest.raises(ConfigError):
            RemoteCallOptions.from_mapping(data)


class TestLoadOptions:
    def test_reads_options_under_config_key(self, project_path):
        options = load_options(project_path / "remote-call.json")

        assert options.function_paths == ["server/api/*", "server/utils/**"]

    def test_reads_bare_options_object(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text(json.dumps({"function_paths": ["lib/"]}))

        assert load_options(path).function_paths == ["lib/"]

    def test_invalid_json_is_config_error(self, tmp_path):
        path = tmp_path / "options.json"
        path.write_text("{not json")

        with pytest.raises(ConfigError) as exc_info:
            load_options(path)
        assert exc_info.value.source == str(path)

    def test_missing_file_is_config_error(self, tmp_path):
        with pytest.raises(ConfigError):
            load_options(tmp_path / "missing.json")
