from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")

    # RouterNitro API
    nitro_base_url: str = Field(
        default="https://api.nitroswap.routernitro.com",
        description="Base URL of the RouterNitro aggregator API",
        validation_alias=AliasChoices("nitro_base_url", "ROUTER_NITRO_API", "ROUTER_NITRO_BASE_URL"),
    )
    nitro_explorer_url: str = Field(
        default="https://routernitro.com",
        description="Public RouterNitro site used to build chain links",
    )
    nitro_user_agent: str = Field(default="RouterNitro API Client", description="User-Agent sent to RouterNitro")
    nitro_chain_page_limit: int = Field(
        default=200,
        ge=1,
        description="Number of chains fetched for chain lookups",
    )
    nitro_seed_page_limit: int = Field(
        default=50,
        ge=1,
        description="Number of chains fetched when seeding the vector collection",
    )
    request_timeout_seconds: int = Field(default=30, description="Request timeout")

    # LLM Provider Settings
    llm_provider: str = Field(default="openai", description="Default LLM provider")
    openai_api_key: str = Field(default="", description="OpenAI API key")
    anthropic_api_key: str = Field(default="", description="Anthropic API key")

    # LLM Configuration
    llm_model: str = Field(default="gpt-4o", description="Default LLM model")
    max_tokens: int = Field(default=1000, description="Maximum tokens for LLM response")
    temperature: float = Field(default=0.0, description="LLM temperature used for parameter extraction")
    provider_models_catalog: Dict[str, List[Dict[str, Any]]] = Field(
        default_factory=lambda: {
            "openai": [
                {
                    "id": "gpt-4o",
                    "label": "GPT-4o",
                    "description": "Reliable structured extraction.",
                    "default": True,
                },
                {
                    "id": "gpt-4o-mini",
                    "label": "GPT-4o mini",
                    "description": "Cheaper extraction for simple queries.",
                },
            ],
            "anthropic": [
                {
                    "id": "claude-sonnet-4-20250514",
                    "label": "Claude Sonnet 4",
                    "description": "Balanced depth and latency for daily use.",
                    "default": True,
                },
            ],
        },
        description="Provider models metadata surfaced to clients",
    )

    # Vector store (seeder)
    mongodb_uri: str = Field(
        default="",
        description="MongoDB connection string for the chain metadata collection",
        validation_alias=AliasChoices("mongodb_uri", "MONGODB_URI"),
    )
    mongodb_database: str = Field(default="information_database", description="Database holding chain documents")
    mongodb_collection: str = Field(default="chaindetails", description="Collection holding chain documents")
    vector_index_name: str = Field(default="vector_index", description="Atlas vector search index name")
    embedding_model: str = Field(default="text-embedding-3-small", description="OpenAI embedding model")
    embedding_dimensions: int = Field(default=1536, description="Embedding vector dimensions")

    @property
    def has_openai_key(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def has_anthropic_key(self) -> bool:
        return bool(self.anthropic_api_key)

    @property
    def has_llm_key(self) -> bool:
        """Check if we have an API key for the configured LLM provider"""
        if self.llm_provider.lower() in ["anthropic", "claude"]:
            return self.has_anthropic_key
        elif self.llm_provider.lower() in ["openai", "gpt"]:
            return self.has_openai_key
        return False

    def resolve_default_model(self, provider: str) -> str:
        provider_lower = provider.lower()
        options = self.provider_models_catalog.get(provider_lower, [])
        for option in options:
            default_flag = option.get("default")
            if isinstance(default_flag, str):
                is_default = default_flag.lower() in {"true", "1", "yes"}
            else:
                is_default = bool(default_flag)
            if is_default:
                return option.get("id", self.llm_model)
        if options:
            return options[0].get("id", self.llm_model)
        return self.llm_model

    def resolve_provider_for_model(self, model_id: str) -> Optional[str]:
        target = (model_id or "").strip().lower()
        if not target:
            return None
        for provider, options in self.provider_models_catalog.items():
            for option in options:
                option_id = option.get("id")
                if option_id and option_id.lower() == target:
                    return provider
        return None


# Global settings instance
settings = Settings()
