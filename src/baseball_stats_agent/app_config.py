from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from baseball_stats_agent.model_registry import DEFAULT_MODEL_KEY, ModelRegistry
from baseball_stats_agent.turn_engine import DEFAULT_MAX_TOOL_ROUNDS

DEFAULT_CONNECTION_STRING = (
    "Driver={ODBC Driver 18 for SQL Server};Server=localhost\\SQLEXPRESS;"
    "Database=lahman2024;Trusted_Connection=yes;TrustServerCertificate=yes;"
)

API_KEY_ENV_VAR = "ANTHROPIC_API_KEY"
CONNECTION_STRING_ENV_VAR = "BASEBALL_DB_CONNECTION_STRING"


@dataclass
class RuntimeEnv:
    anthropic_api_key: str
    connection_string: str | None


@dataclass
class AppConfig:
    model_key: str
    max_tokens: int
    temperature: float
    max_tool_rounds: int
    connection_string: str
    models: ModelRegistry
    log_level: str
    log_consumers: list | None


def load_json_config(path: Path | None = None) -> dict:
    config_path = path or Path.cwd() / "config.json"
    if config_path.exists():
        with open(config_path) as f:
            return json.load(f)
    return {}


def parse_app_config(config: dict, env: RuntimeEnv | None = None) -> AppConfig:
    models = ModelRegistry.from_config(config.get("Models"))
    model_key = str(config.get("Model", DEFAULT_MODEL_KEY)).strip().lower()
    if models.resolve(model_key) is None:
        raise ValueError(f"Unknown model {model_key!r}. Available: {', '.join(models.keys())}")

    connection_string = (
        (env.connection_string if env else None)
        or config.get("ConnectionString")
        or DEFAULT_CONNECTION_STRING
    )

    return AppConfig(
        model_key=model_key,
        max_tokens=int(config.get("MaxTokens", 4096)),
        temperature=float(config.get("Temperature", 1.0)),
        max_tool_rounds=int(config.get("MaxToolRounds", DEFAULT_MAX_TOOL_ROUNDS)),
        connection_string=connection_string,
        models=models,
        log_level=config.get("LogLevel", "INFO"),
        log_consumers=config.get("LogConsumers"),
    )


def resolve_runtime_env() -> RuntimeEnv:
    return RuntimeEnv(
        anthropic_api_key=os.environ.get(API_KEY_ENV_VAR, "").strip(),
        connection_string=os.environ.get(CONNECTION_STRING_ENV_VAR) or None,
    )
