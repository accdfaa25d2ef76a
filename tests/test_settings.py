from dataclasses import fields
from pathlib import Path

import pytest

from base.exceptions import ConfigurationError
from config.settings import Settings

from conftest import make_settings


def test_valid_openai_settings():
    settings = make_settings()

    assert settings.validate() is settings
    assert not settings.corpus_enabled


def test_missing_openai_key():
    with pytest.raises(ConfigurationError, match="OPENAI_APIKEY"):
        make_settings(openai_api_key=None).validate()


def test_watsonx_requires_key_and_project():
    with pytest.raises(ConfigurationError) as exc_info:
        make_settings(llm_provider="watsonx").validate()

    assert "WATSONX_APIKEY" in str(exc_info.value)
    assert "WATSONX_PROJECT_ID" in str(exc_info.value)

    make_settings(llm_provider="watsonx", watsonx_api_key="k", watsonx_project_id="p").validate()


def test_unknown_provider_and_mode():
    with pytest.raises(ConfigurationError, match="LLM_PROVIDER"):
        make_settings(llm_provider="anthropic").validate()
    with pytest.raises(ConfigurationError, match="ANSWER_MODE"):
        make_settings(answer_mode="poetry").validate()


def test_corpus_mode_requires_readable_file(tmp_path):
    with pytest.raises(ConfigurationError, match="CORPUS_PATH"):
        make_settings(answer_mode="corpus").validate()
    with pytest.raises(ConfigurationError):
        make_settings(answer_mode="corpus", corpus_path=str(tmp_path / "missing.txt")).validate()

    corpus = tmp_path / "corpus.txt"
    corpus.write_text("hello", encoding="utf-8")
    assert make_settings(answer_mode="corpus", corpus_path=str(corpus)).validate().corpus_enabled


def test_chunk_and_policy_bounds():
    with pytest.raises(ConfigurationError, match="CHUNK_OVERLAP"):
        make_settings(chunk_overlap=200).validate()
    with pytest.raises(ConfigurationError, match="LLM_MAX_RETRIES"):
        make_settings(max_retries=-1).validate()
    with pytest.raises(ConfigurationError, match="LLM_TIMEOUT"):
        make_settings(request_timeout=-1.0).validate()


def test_environment_is_read(monkeypatch):
    monkeypatch.setenv("LLM_PROVIDER", "WatsonX")
    monkeypatch.setenv("LLM_MAX_TOKENS", "128")
    monkeypatch.setenv("ANSWER_MODE", "direct")

    settings = Settings()

    assert settings.llm_provider == "watsonx"
    assert settings.max_tokens == 128
    assert settings.answer_mode == "direct"


def test_bad_number_in_environment(monkeypatch):
    monkeypatch.setenv("LLM_MAX_TOKENS", "lots")

    with pytest.raises(ConfigurationError, match="LLM_MAX_TOKENS"):
        Settings()


def test_filesystem_paths_are_limited_to_logs():
    settings = make_settings()

    path_fields = sorted(f.name for f in fields(Settings) if f.type is Path)

    assert path_fields == ["logs_path", "project_root"]
    assert settings.logs_path == settings.project_root / "logs"
