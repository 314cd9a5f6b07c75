"""Central configuration via Pydantic Settings. All values driven by env vars."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # API Keys
    google_api_key: str = ""

    # LLM / Gemini
    gemini_model: str = "gemini-2.0-flash"
    report_temperature: float = 0.3
    report_max_tokens: int = 4000
    summary_temperature: float = 0.2
    summary_max_tokens: int = 300
    generation_timeout_seconds: float = 120.0

    # Prompt budgets (characters)
    source_excerpt_chars: int = 1000
    summary_input_chars: int = 3000

    # Source selection
    default_max_sources: int = 15
    default_time_range_days: int = 30
    quality_floor: float = 0.3
    expansion_search_limit: int = 10
    max_expansion_keywords: int = 10

    # Report wording
    market_label: str = "Indian HR Market"

    # Storage paths
    sqlite_db_path: str = "data/reports.db"
    render_output_dir: str = "data/reports"

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    model_config = {"env_file": ".env", "env_prefix": "REPORT_"}
