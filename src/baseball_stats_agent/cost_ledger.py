from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from baseball_stats_agent.model_registry import ModelDescriptor

_PER_MILLION = Decimal(1_000_000)
_CENT = Decimal("0.01")
_TEN_THOUSANDTH = Decimal("0.0001")


@dataclass(frozen=True)
class Usage:
    input_tokens: int = 0
    output_tokens: int = 0

    def __add__(self, other: Usage) -> Usage:
        return Usage(
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
        )

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


def compute_cost(model: ModelDescriptor, usage: Usage) -> Decimal:
    return (
        usage.input_tokens * model.input_price_per_million / _PER_MILLION
        + usage.output_tokens * model.output_price_per_million / _PER_MILLION
    )


def format_cost(cost: Decimal) -> str:
    """Sub-cent amounts get four decimals so small turns don't display as $0.00.

    Midpoints round away from zero ($0.00125 -> $0.0013).
    """
    if cost < _CENT:
        return f"${cost.quantize(_TEN_THOUSANDTH, rounding=ROUND_HALF_UP)}"
    return f"${cost.quantize(_CENT, rounding=ROUND_HALF_UP)}"


def format_turn_usage(model_key: str, usage: Usage, cost: Decimal) -> str:
    return (
        f"[{model_key.upper()} | Tokens: {usage.input_tokens:,} in / {usage.output_tokens:,} out "
        f"| Cost: {format_cost(cost)}]"
    )


class CostLedger:
    """Running token and cost totals for the process lifetime. Never reset."""

    def __init__(self) -> None:
        self._input_tokens = 0
        self._output_tokens = 0
        self._cost = Decimal(0)

    @property
    def session_input_tokens(self) -> int:
        return self._input_tokens

    @property
    def session_output_tokens(self) -> int:
        return self._output_tokens

    @property
    def session_total_tokens(self) -> int:
        return self._input_tokens + self._output_tokens

    @property
    def session_cost(self) -> Decimal:
        return self._cost

    def record_usage(self, model: ModelDescriptor, usage: Usage) -> Decimal:
        cost = compute_cost(model, usage)
        self._input_tokens += usage.input_tokens
        self._output_tokens += usage.output_tokens
        self._cost += cost
        return cost

    def format_session_total(self) -> str:
        return (
            f"[Session total: {self._input_tokens:,} in / {self._output_tokens:,} out "
            f"| {format_cost(self._cost)}]"
        )
