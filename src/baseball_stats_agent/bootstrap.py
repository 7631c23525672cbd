from __future__ import annotations

from dataclasses import dataclass

from baseball_stats_agent.app_config import AppConfig
from baseball_stats_agent.database import SqlServerDatabase
from baseball_stats_agent.providers.anthropic_provider import AnthropicProvider
from baseball_stats_agent.session import LINE_PREFIX, ConversationSession, SessionContext
from baseball_stats_agent.system_prompt import get_system_prompt
from baseball_stats_agent.tool import Tool
from baseball_stats_agent.tool_registry import get_all
from baseball_stats_agent.turn_engine import TurnEngine


@dataclass
class AppRuntime:
    session: ConversationSession
    tools: list[Tool]


def build_database(app: AppConfig) -> SqlServerDatabase:
    return SqlServerDatabase(app.connection_string)


def bootstrap_runtime(app: AppConfig, api_key: str) -> AppRuntime:
    tools = get_all(build_database(app))
    active_model = app.models.resolve(app.model_key)
    if active_model is None:
        raise ValueError(f"Unknown model {app.model_key!r}")

    turn_engine = TurnEngine(
        provider=AnthropicProvider(api_key, line_prefix=LINE_PREFIX),
        line_prefix=LINE_PREFIX,
        max_tool_rounds=app.max_tool_rounds,
    )
    session = ConversationSession(
        context=SessionContext(registry=app.models, active_model=active_model),
        turn_runner=turn_engine,
        system_prompt=get_system_prompt(),
        tools=tools,
        max_tokens=app.max_tokens,
        temperature=app.temperature,
    )
    return AppRuntime(session=session, tools=tools)
