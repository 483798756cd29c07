"""Tests for configuration and tracing setup."""

import os
from unittest.mock import patch

import pytest
from langchain_openai import AzureChatOpenAI, ChatOpenAI

from paperlink.config.llm_providers import get_llm
from paperlink.config.settings import Settings, get_settings
from paperlink.errors import LLMNotConfiguredError
from paperlink.observability.tracing import ResearchTracer, configure_langsmith, traced


class TestSettings:
    """Tests for Settings class."""

    def test_default_values(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
            assert settings.openai_model == "gpt-4o"
            assert settings.langchain_project == "paperlink"
            assert settings.llm_temperature == 0.0
            assert settings.max_document_chars == 8000
            assert settings.validity_threshold == 0.3
            assert settings.confidence_ceiling == 95.0
            assert settings.max_source_papers == 5

    def test_thresholds_from_environment(self):
        with patch.dict(os.environ, {"VALIDITY_THRESHOLD": "0.5", "CONFIDENCE_CEILING": "90"}):
            settings = Settings(_env_file=None)
            assert settings.validity_threshold == 0.5
            assert settings.confidence_ceiling == 90.0

    def test_openai_configured(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-test"}):
            settings = Settings(_env_file=None)
            assert settings.openai_api_key == "sk-test"
            assert settings.is_llm_configured()
            assert not settings.is_azure_configured()

    def test_azure_configured(self):
        env = {
            "AZURE_OPENAI_ENDPOINT": "https://test.openai.azure.com",
            "AZURE_OPENAI_API_KEY": "azure-key",
            "AZURE_OPENAI_DEPLOYMENT_NAME": "gpt-4o",
        }
        with patch.dict(os.environ, env):
            settings = Settings(_env_file=None)
            assert settings.is_azure_configured()
            assert settings.is_llm_configured()

    def test_langsmith_configured(self):
        with patch.dict(os.environ, {"LANGCHAIN_API_KEY": "ls-test"}):
            settings = Settings(_env_file=None)
            assert settings.is_langsmith_configured()


class TestLLMProviders:
    """Tests for LLM provider functions."""

    def test_not_configured(self):
        assert not get_settings().is_llm_configured()

    def test_get_llm_raises_without_config(self):
        with pytest.raises(LLMNotConfiguredError, match="No LLM provider configured"):
            get_llm()

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            get_llm(settings=Settings(_env_file=None))

    def test_openai_model(self):
        settings = Settings(_env_file=None, OPENAI_API_KEY="sk-test")
        llm = get_llm(settings=settings)
        assert isinstance(llm, ChatOpenAI)
        assert llm.model_name == "gpt-4o"

    def test_model_override(self):
        settings = Settings(_env_file=None, OPENAI_API_KEY="sk-test")
        llm = get_llm(model_override="gpt-4o-mini", settings=settings)
        assert llm.model_name == "gpt-4o-mini"

    def test_azure_takes_priority(self):
        settings = Settings(
            _env_file=None,
            OPENAI_API_KEY="sk-test",
            AZURE_OPENAI_ENDPOINT="https://test.openai.azure.com",
            AZURE_OPENAI_API_KEY="azure-key",
            AZURE_OPENAI_DEPLOYMENT_NAME="gpt-4o",
        )
        assert isinstance(get_llm(settings=settings), AzureChatOpenAI)

    def test_cached_settings_follow_environment(self):
        with patch.dict(os.environ, {"OPENAI_API_KEY": "sk-test"}):
            get_settings.cache_clear()
            assert get_settings().is_llm_configured()


class TestTracing:
    """Tests for LangSmith wiring without credentials."""

    def test_configure_without_key(self):
        assert configure_langsmith(Settings(_env_file=None)) is None

    def test_tracer_disabled(self):
        tracer = ResearchTracer(Settings(_env_file=None))
        assert not tracer.is_enabled

        with tracer.span("noop") as run:
            assert run is None

        tracer.log_search("q", num_papers=1, num_results=0, top_score=0.0)
        tracer.log_error(RuntimeError("boom"), {"query": "q"})

    def test_span_propagates_errors(self):
        tracer = ResearchTracer(Settings(_env_file=None))
        with pytest.raises(RuntimeError):
            with tracer.span("failing"):
                raise RuntimeError("boom")

    def test_traced_passes_through(self):
        @traced("double")
        def double(x):
            return x * 2

        assert double(21) == 42
        assert double.__name__ == "double"
