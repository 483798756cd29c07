"""
Application settings with environment variable support.

Configuration is loaded from environment variables with optional .env file.
Azure OpenAI settings override OpenAI when fully configured. All extraction,
retrieval and grounding thresholds are tunable here.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # OpenAI settings (default provider)
    openai_api_key: Optional[str] = Field(default=None, alias="OPENAI_API_KEY")
    openai_model: str = Field(default="gpt-4o", alias="OPENAI_MODEL")

    # Azure OpenAI settings (overrides OpenAI if all are set)
    azure_openai_endpoint: Optional[str] = Field(
        default=None, alias="AZURE_OPENAI_ENDPOINT"
    )
    azure_openai_api_key: Optional[str] = Field(
        default=None, alias="AZURE_OPENAI_API_KEY"
    )
    azure_openai_deployment_name: Optional[str] = Field(
        default=None, alias="AZURE_OPENAI_DEPLOYMENT_NAME"
    )
    azure_openai_api_version: str = Field(
        default="2024-02-15-preview", alias="AZURE_OPENAI_API_VERSION"
    )

    # LangSmith settings
    langchain_api_key: Optional[str] = Field(default=None, alias="LANGCHAIN_API_KEY")
    langchain_project: str = Field(default="paperlink", alias="LANGCHAIN_PROJECT")
    langchain_tracing_v2: bool = Field(default=True, alias="LANGCHAIN_TRACING_V2")

    # LLM behavior settings
    llm_temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    llm_max_tokens: int = Field(default=1000, ge=1)

    # Extraction
    min_stream_chars: int = Field(default=20, ge=0)
    min_combined_chars: int = Field(default=100, ge=0)
    max_document_chars: int = Field(default=8000, ge=1)
    min_document_chars: int = Field(default=50, ge=0)

    # Sectioning
    section_max_chars: int = Field(default=1000, ge=1)
    min_section_chars: int = Field(default=100, ge=0)
    max_paragraph_sections: int = Field(default=10, ge=1)
    max_chunk_sections: int = Field(default=5, ge=1)

    # Hypothesis grounding
    validity_threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    confidence_ceiling: float = Field(default=95.0, ge=0.0, le=100.0)
    derived_from_weight: float = Field(default=0.8, ge=0.0, le=1.0)
    paper_node_importance: float = Field(default=0.8, ge=0.0, le=1.0)

    # RAG behavior
    max_source_papers: int = Field(default=5, ge=1)
    min_confidence_threshold: float = Field(default=70.0, ge=0.0, le=100.0)
    require_multiple_sources: bool = Field(default=True)
    prompt_text_chars: int = Field(default=2000, ge=1)
    prompt_max_sections: int = Field(default=3, ge=0)
    search_top_n: int = Field(default=10, ge=1)
    min_relevance: float = Field(default=0.1, ge=0.0, le=1.0)
    relevant_content_threshold: float = Field(default=0.3, ge=0.0, le=1.0)
    chat_context_sections: int = Field(default=3, ge=1)

    def is_azure_configured(self) -> bool:
        """Check if Azure OpenAI is fully configured."""
        return all([
            self.azure_openai_endpoint,
            self.azure_openai_api_key,
            self.azure_openai_deployment_name,
        ])

    def is_llm_configured(self) -> bool:
        """Check if any text-completion backend is configured."""
        return bool(self.openai_api_key) or self.is_azure_configured()

    def is_langsmith_configured(self) -> bool:
        """Check if LangSmith is configured."""
        return self.langchain_api_key is not None


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
