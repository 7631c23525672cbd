from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable


@dataclass(frozen=True)
class ModelDescriptor:
    key: str
    model_id: str
    input_price_per_million: Decimal
    output_price_per_million: Decimal
    description: str


# Pricing per million tokens (USD).
DEFAULT_MODELS: dict[str, dict[str, Any]] = {
    "sonnet": {
        "Id": "claude-sonnet-4-20250514",
        "InputPer1M": "3.00",
        "OutputPer1M": "15.00",
        "Description": "Best quality, lower rate limits",
    },
    "haiku": {
        "Id": "claude-3-haiku-20240307",
        "InputPer1M": "0.25",
        "OutputPer1M": "1.25",
        "Description": "Fast & cheap, higher rate limits",
    },
}

DEFAULT_MODEL_KEY = "haiku"


def _normalize_key(key: str) -> str:
    return key.strip().lower()


def parse_model_table(table: dict[str, dict[str, Any]]) -> list[ModelDescriptor]:
    descriptors: list[ModelDescriptor] = []
    for key, entry in table.items():
        try:
            descriptors.append(
                ModelDescriptor(
                    key=_normalize_key(key),
                    model_id=str(entry["Id"]),
                    input_price_per_million=Decimal(str(entry["InputPer1M"])),
                    output_price_per_million=Decimal(str(entry["OutputPer1M"])),
                    description=str(entry.get("Description", "")),
                )
            )
        except (KeyError, TypeError, ArithmeticError) as ex:
            raise ValueError(f"Invalid model entry {key!r}: {ex}") from ex
    return descriptors


class ModelRegistry:
    def __init__(self, descriptors: Iterable[ModelDescriptor]):
        self._models: dict[str, ModelDescriptor] = {}
        for d in descriptors:
            self._models[d.key] = d
        if not self._models:
            raise ValueError("Model registry requires at least one model")

    @classmethod
    def from_config(cls, overrides: dict[str, dict[str, Any]] | None = None) -> ModelRegistry:
        """Build from ``DEFAULT_MODELS``; config entries add models or replace defaults by key."""
        table = {**DEFAULT_MODELS, **(overrides or {})}
        return cls(parse_model_table(table))

    def resolve(self, key: str) -> ModelDescriptor | None:
        return self._models.get(_normalize_key(key))

    def keys(self) -> list[str]:
        return list(self._models)
