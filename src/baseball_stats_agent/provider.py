from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from baseball_stats_agent.cost_ledger import Usage
from baseball_stats_agent.tool import Tool


@dataclass
class ProviderReply:
    message: dict
    tool_use_blocks: list[dict] = field(default_factory=list)
    stop_reason: str | None = None
    usage: Usage = field(default_factory=Usage)


@runtime_checkable
class LLMProvider(Protocol):
    async def create_message(
        self,
        model: str,
        max_tokens: int,
        temperature: float,
        messages: list[dict],
        tools: list[dict],
    ) -> ProviderReply:
        """Send the conversation (system message first) and return one assistant reply.

        ``messages`` uses the internal roles: system, user, assistant, tool.
        """
        ...

    def convert_tools(self, tools: list[Tool]) -> list[dict]:
        """Convert Tool protocol objects to provider-specific tool schema."""
        ...
