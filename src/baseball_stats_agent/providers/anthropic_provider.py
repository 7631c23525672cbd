import anthropic
from loguru import logger
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from baseball_stats_agent.console import RETRY_ATTEMPTS, Spinner, log_retry
from baseball_stats_agent.cost_ledger import Usage
from baseball_stats_agent.provider import ProviderReply
from baseball_stats_agent.tool import Tool


def to_anthropic_messages(messages: list[dict]) -> tuple[str, list[dict]]:
    """Split internal history into Anthropic's (system, messages) pair.

    System messages become the ``system`` parameter; ``tool`` messages are sent
    as user turns carrying ``tool_result`` blocks.
    """
    system_parts: list[str] = []
    converted: list[dict] = []
    for msg in messages:
        role = msg["role"]
        if role == "system":
            system_parts.append(msg["content"])
        elif role == "tool":
            converted.append({"role": "user", "content": msg["content"]})
        else:
            converted.append({"role": role, "content": msg["content"]})
    return "\n\n".join(system_parts), converted


class AnthropicProvider:
    def __init__(self, api_key: str, *, line_prefix: str = ""):
        self._client = anthropic.AsyncAnthropic(api_key=api_key)
        self._line_prefix = line_prefix

    def convert_tools(self, tools: list[Tool]) -> list[dict]:
        return [
            {
                "name": t.name,
                "description": t.description,
                "input_schema": t.input_schema,
            }
            for t in tools
        ]

    @retry(
        retry=retry_if_exception_type((
            anthropic.RateLimitError,
            anthropic.APIConnectionError,
            anthropic.APITimeoutError,
        )),
        wait=wait_exponential(multiplier=10, min=10, max=320),
        stop=stop_after_attempt(RETRY_ATTEMPTS),
        before_sleep=log_retry,
        reraise=True,
    )
    async def create_message(
        self,
        model: str,
        max_tokens: int,
        temperature: float,
        messages: list[dict],
        tools: list[dict],
    ) -> ProviderReply:
        system_prompt, api_messages = to_anthropic_messages(messages)
        logger.debug(
            f"API request: model={model}, max_tokens={max_tokens}, "
            f"messages={len(api_messages)}, tools={len(tools)}"
        )
        with Spinner(prefix=self._line_prefix):
            response = await self._client.messages.create(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                system=system_prompt,
                messages=api_messages,
                tools=tools,
            )

        usage = Usage(
            input_tokens=response.usage.input_tokens or 0,
            output_tokens=response.usage.output_tokens or 0,
        )
        logger.debug(
            f"API response: stop_reason={response.stop_reason}, "
            f"input_tokens={usage.input_tokens}, output_tokens={usage.output_tokens}"
        )

        assistant_content: list[dict] = []
        tool_use_blocks: list[dict] = []
        for block in response.content:
            if block.type == "text":
                assistant_content.append({"type": "text", "text": block.text})
            elif block.type == "tool_use":
                tool_block = {
                    "type": "tool_use",
                    "id": block.id,
                    "name": block.name,
                    "input": block.input,
                }
                assistant_content.append(tool_block)
                tool_use_blocks.append(tool_block)

        return ProviderReply(
            message={"role": "assistant", "content": assistant_content},
            tool_use_blocks=tool_use_blocks,
            stop_reason=response.stop_reason,
            usage=usage,
        )
