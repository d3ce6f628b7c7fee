"""Tests for environment parsing in the settings module.

Run with: pytest tests/test_settings.py -v
"""

from config.settings import env_bool, env_list


class TestEnvironmentHelpers:
    def test_env_list_splits_and_strips(self, monkeypatch):
        monkeypatch.setenv("CINEMA_TEST_HOSTS", " api.example.com, ,localhost ")
        assert env_list("CINEMA_TEST_HOSTS") == ["api.example.com", "localhost"]

    def test_env_list_falls_back_to_default(self, monkeypatch):
        monkeypatch.delenv("CINEMA_TEST_HOSTS", raising=False)
        assert env_list("CINEMA_TEST_HOSTS", "localhost,127.0.0.1") == ["localhost", "127.0.0.1"]

    def test_env_bool_accepts_common_truthy_spellings(self, monkeypatch):
        for raw in ["1", "true", "Yes", " on "]:
            monkeypatch.setenv("CINEMA_TEST_FLAG", raw)
            assert env_bool("CINEMA_TEST_FLAG") is True
        monkeypatch.setenv("CINEMA_TEST_FLAG", "off")
        assert env_bool("CINEMA_TEST_FLAG") is False
