"""
Purpose:
- Centralized configuration using pydantic-settings.
- Reads from environment variables and optional .env file.
- Keeps model, search and scraping knobs tunable without code changes.
"""

# --- Purpose: robust settings with env-file support and safe handling of extra keys.
from typing import Annotated, List, Optional
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124 Safari/537.36"
)

class Settings(BaseSettings):
    # Pydantic v2 config (env file + ignore unexpected env vars)
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",          # <-- prevents crashes if extra env vars exist
    )

    # API host/port
    host: str = Field(default="0.0.0.0", description="Bind address for FastAPI/Uvicorn")
    port: int = Field(default=3000, description="Port for FastAPI/Uvicorn")

    # CORS
    cors_allow_origins: list[str] = Field(default=["*"], description="Allowed origins for browser apps")

    log_level: str = Field(default="INFO")

    # ---- Local model (Ollama) ----
    ollama_base_url: str = Field(default="http://localhost:11434")
    ollama_model: str = Field(default="llama3.1:8b")
    ollama_temperature: float = Field(default=0.2)
    ollama_num_predict: int = Field(default=256)   # bounded reply length
    ollama_timeout: float = Field(default=60.0)    # generation is slow

    # ---- Search config ----
    # Google Custom Search: GOOGLE_API_KEY, GOOGLE_CSE_CX
    google_api_key: Optional[str] = None
    google_cse_cx: Optional[str] = None

    # SEARCH_DOMAINS is comma separated, e.g. "fragrantica.com,parfumo.net"
    search_domains: Annotated[List[str], NoDecode] = Field(
        default=["fragrantica.com", "parfumo.net", "basenotes.com"],
        description="Domain allow-list; every search is restricted to these sites."
    )
    # Optional text file with one URL/domain per line, merged with search_domains.
    search_whitelist_file: Optional[Path] = Field(default=None)
    search_max_results: int = Field(default=6, description="Default cap on search results")
    search_timeout: float = Field(default=20.0)

    # ---- Scraping ----
    scrape_timeout: float = Field(default=15.0)
    scrape_user_agent: str = Field(default=DEFAULT_USER_AGENT)

    @field_validator("search_domains", mode="before")
    @classmethod
    def _split_domains(cls, v):
        if isinstance(v, str):
            return [d.strip() for d in v.split(",") if d.strip()]
        return v

settings = Settings()
