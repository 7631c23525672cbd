from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum

from loguru import logger

from baseball_stats_agent.commands.router import CommandRouter
from baseball_stats_agent.cost_ledger import CostLedger, format_cost, format_turn_usage
from baseball_stats_agent.model_registry import ModelDescriptor, ModelRegistry
from baseball_stats_agent.tool import Tool
from baseball_stats_agent.turn_engine import TurnOptions, TurnRunner


LINE_PREFIX = "assistant> "


class TurnState(Enum):
    IDLE = "idle"
    AWAITING_MODEL_RESPONSE = "awaiting_model_response"
    ROLLED_BACK = "rolled_back"


@dataclass
class SessionContext:
    """Process-wide session state: the model registry, the active model and the cost ledger."""

    registry: ModelRegistry
    active_model: ModelDescriptor
    ledger: CostLedger = field(default_factory=CostLedger)

    def switch_model(self, key: str) -> ModelDescriptor | None:
        descriptor = self.registry.resolve(key)
        if descriptor is not None:
            self.active_model = descriptor
        return descriptor


class ConversationSession:
    def __init__(
        self,
        *,
        context: SessionContext,
        turn_runner: TurnRunner,
        system_prompt: str,
        tools: list[Tool],
        max_tokens: int = 4096,
        temperature: float = 1.0,
    ) -> None:
        self._context = context
        self._turn_runner = turn_runner
        self._tools = tuple(tools)
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._messages: list[dict] = [{"role": "system", "content": system_prompt}]
        self._state = TurnState.IDLE
        self._running = True

        self._command_router = CommandRouter(
            on_quit=self._on_quit,
            on_clear=self._on_clear,
            on_usage=self._on_usage,
            on_model=self._on_model,
            on_help=self._on_help,
        )

    @property
    def context(self) -> SessionContext:
        return self._context

    @property
    def history(self) -> list[dict]:
        return list(self._messages)

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def running(self) -> bool:
        return self._running

    async def handle_input(self, user_input: str) -> bool:
        """Process one line of input. Returns False once the user has asked to quit."""
        trimmed = user_input.strip()
        if not trimmed:
            return self._running
        if self._command_router.try_handle(trimmed):
            return self._running
        await self._run_turn(trimmed)
        return self._running

    async def _run_turn(self, user_message: str) -> None:
        checkpoint = len(self._messages)
        self._messages.append({"role": "user", "content": user_message})
        self._state = TurnState.AWAITING_MODEL_RESPONSE

        options = TurnOptions(
            model_id=self._context.active_model.model_id,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
            tools=self._tools,
        )
        try:
            result = await self._turn_runner.send_turn(list(self._messages), options)
        except asyncio.CancelledError:
            self._rollback(checkpoint)
            raise
        except Exception as ex:
            logger.error(f"Turn failed: {type(ex).__name__}: {ex}")
            self._rollback(checkpoint)
            print(f"\nError: {ex}")
            print("[Conversation rolled back to prevent corruption. Try 'clear' if issues persist.]\n")
            return

        self._messages.extend(result.messages)
        # Bill at the model in effect when the usage came back
        model = self._context.active_model
        cost = self._context.ledger.record_usage(model, result.usage)
        self._state = TurnState.IDLE

        print(f"\n{LINE_PREFIX}{result.text}\n")
        print(format_turn_usage(model.key, result.usage, cost))
        print(f"{self._context.ledger.format_session_total()}\n")

    def _rollback(self, checkpoint: int) -> None:
        discarded = len(self._messages) - checkpoint
        del self._messages[checkpoint:]
        self._state = TurnState.ROLLED_BACK
        logger.warning(f"Rolled back {discarded} message(s) to checkpoint length {checkpoint}")
        self._state = TurnState.IDLE

    def _on_quit(self) -> None:
        self._running = False

    def _on_clear(self) -> None:
        del self._messages[1:]
        logger.info("Conversation cleared")
        print("[Conversation cleared]\n")

    def _on_usage(self) -> None:
        ledger = self._context.ledger
        print("\n=== SESSION USAGE ===")
        print(f"Current model: {self._context.active_model.key.upper()}")
        print(f"Input tokens:  {ledger.session_input_tokens:,}")
        print(f"Output tokens: {ledger.session_output_tokens:,}")
        print(f"Total tokens:  {ledger.session_total_tokens:,}")
        print(f"Est. cost:     {format_cost(ledger.session_cost)}")
        print(f"Messages:      {len(self._messages) - 1} (excluding system)\n")

    def _on_model(self, key: str) -> None:
        available = ", ".join(self._context.registry.keys())
        if not key:
            current = self._context.active_model
            print(f"[Current model: {current.key.upper()} ({current.description}). Available: {available}]\n")
            return
        descriptor = self._context.switch_model(key)
        if descriptor is None:
            print(f"[Unknown model. Available: {available}]\n")
            return
        logger.info(f"Switched model to {descriptor.key} ({descriptor.model_id})")
        print(f"[Switched to {descriptor.key.upper()}: {descriptor.description}]\n")

    def _on_help(self) -> None:
        keys = self._context.registry.keys()
        print("Commands:")
        print("  quit | exit       end the session")
        print("  clear             forget the conversation (cost totals are kept)")
        print("  usage             show token usage and estimated cost")
        print(f"  model <key>       switch model ({', '.join(keys)})")
        print("  help              show this list\n")
