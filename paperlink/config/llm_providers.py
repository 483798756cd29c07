"""
LLM provider abstraction for OpenAI and Azure OpenAI.

Configured via environment variables:
- Default: OpenAI (OPENAI_API_KEY, OPENAI_MODEL)
- Azure: Set AZURE_OPENAI_ENDPOINT, AZURE_OPENAI_API_KEY and
  AZURE_OPENAI_DEPLOYMENT_NAME

Azure settings override OpenAI when fully configured. The core treats the
returned chat model as an opaque text-completion call.
"""

from typing import Optional

from langchain_core.language_models import BaseChatModel
from langchain_openai import AzureChatOpenAI, ChatOpenAI

from ..errors import LLMNotConfiguredError
from .settings import Settings, get_settings


def get_llm(
    model_override: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> BaseChatModel:
    """
    Get LLM instance based on configuration.

    Priority:
    1. Azure OpenAI if AZURE_OPENAI_* env vars are all set
    2. OpenAI (default)

    Args:
        model_override: Override the configured model name
        settings: Settings to read instead of the cached instance

    Returns:
        Configured LLM instance

    Raises:
        LLMNotConfiguredError: If no LLM provider is configured
    """
    settings = settings or get_settings()

    if settings.is_azure_configured():
        return AzureChatOpenAI(
            azure_endpoint=settings.azure_openai_endpoint,
            api_key=settings.azure_openai_api_key,
            deployment_name=settings.azure_openai_deployment_name,
            api_version=settings.azure_openai_api_version,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
        )

    if not settings.openai_api_key:
        raise LLMNotConfiguredError(
            "No LLM provider configured. Set OPENAI_API_KEY or "
            "AZURE_OPENAI_ENDPOINT + AZURE_OPENAI_API_KEY + AZURE_OPENAI_DEPLOYMENT_NAME"
        )

    return ChatOpenAI(
        api_key=settings.openai_api_key,
        model=model_override or settings.openai_model,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
    )
