from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from loguru import logger

from baseball_stats_agent.console import Spinner
from baseball_stats_agent.cost_ledger import Usage
from baseball_stats_agent.provider import LLMProvider
from baseball_stats_agent.tool import Tool

DEFAULT_MAX_TOOL_ROUNDS = 40


class ToolRoundLimitError(RuntimeError):
    pass


@dataclass(frozen=True)
class TurnOptions:
    model_id: str
    max_tokens: int
    temperature: float = 1.0
    tools: tuple[Tool, ...] = ()


@dataclass
class TurnResult:
    messages: list[dict]
    text: str
    usage: Usage = field(default_factory=Usage)


@runtime_checkable
class TurnRunner(Protocol):
    async def send_turn(self, history: list[dict], options: TurnOptions) -> TurnResult:
        """Run one user turn to completion, including any tool calls the model makes.

        Must not mutate ``history``; everything produced during the turn is
        returned in ``TurnResult.messages`` in order.
        """
        ...


def message_text(message: dict) -> str:
    content = message.get("content")
    if isinstance(content, str):
        return content
    return "".join(b.get("text", "") for b in content or [] if b.get("type") == "text")


class TurnEngine:
    """Model/tool round-trip loop: call the model, run requested tools, feed results back."""

    def __init__(
        self,
        *,
        provider: LLMProvider,
        line_prefix: str = "",
        max_tool_rounds: int = DEFAULT_MAX_TOOL_ROUNDS,
    ) -> None:
        self._provider = provider
        self._line_prefix = line_prefix
        self._max_tool_rounds = max_tool_rounds

    async def send_turn(self, history: list[dict], options: TurnOptions) -> TurnResult:
        tool_map = {t.name: t for t in options.tools}
        converted_tools = self._provider.convert_tools(list(options.tools))
        new_messages: list[dict] = []
        usage = Usage()
        tool_rounds = 0

        while True:
            reply = await self._provider.create_message(
                options.model_id,
                options.max_tokens,
                options.temperature,
                history + new_messages,
                converted_tools,
            )
            usage = usage + reply.usage
            new_messages.append(reply.message)

            if not reply.tool_use_blocks:
                if reply.stop_reason == "max_tokens":
                    logger.warning(f"Response hit max_tokens ({options.max_tokens}); reply is truncated")
                return TurnResult(messages=new_messages, text=message_text(reply.message), usage=usage)

            tool_rounds += 1
            if tool_rounds > self._max_tool_rounds:
                raise ToolRoundLimitError(
                    f"Model requested tools more than {self._max_tool_rounds} times in one turn"
                )

            tool_names = ", ".join(b["name"] for b in reply.tool_use_blocks)
            with Spinner(prefix=self._line_prefix, label=f" Running {tool_names}..."):
                tool_results = await self.execute_tools(reply.tool_use_blocks, tool_map)
            new_messages.append({"role": "tool", "content": tool_results})

    async def execute_tools(self, tool_use_blocks: list[dict], tool_map: dict[str, Tool]) -> list[dict]:
        # Sequential, in the order the model asked for them.
        results: list[dict] = []
        for block in tool_use_blocks:
            results.append(await self._run_one(block, tool_map))
        return results

    async def _run_one(self, block: dict, tool_map: dict[str, Tool]) -> dict:
        tool_name = block["name"]
        tool_use_id = block["id"]
        tool = tool_map.get(tool_name)

        if tool is None:
            logger.warning(f"Model requested unknown tool {tool_name!r}")
            return {
                "type": "tool_result",
                "tool_use_id": tool_use_id,
                "content": f'Error: unknown tool "{tool_name}"',
                "is_error": True,
            }

        try:
            result = await tool.execute(block.get("input") or {})
        except Exception as ex:
            logger.error(f"Tool {tool_name} raised: {ex}")
            return {
                "type": "tool_result",
                "tool_use_id": tool_use_id,
                "content": f'Error executing tool "{tool_name}": {ex}',
                "is_error": True,
            }

        return {
            "type": "tool_result",
            "tool_use_id": tool_use_id,
            "content": result,
        }
