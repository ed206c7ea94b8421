"""Parameter sweeps: comma-separated value lists expanded into config variants."""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from typing import Any

from walletclone.config import StrategyConfig

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_U64_MAX = 2**64 - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_UINT_RE = re.compile(r"\+?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)",
    re.IGNORECASE,
)


@dataclass
class SweepConfig:
    """Optional comma-separated value lists, one per sweepable parameter."""

    buy_sol_values: str | None = None
    max_age_secs_values: str | None = None
    min_buy_count_values: str | None = None
    min_unique_buyers_values: str | None = None
    min_total_buy_sol_values: str | None = None
    max_sell_count_values: str | None = None
    min_buy_sell_ratio_values: str | None = None
    take_profit_bps_values: str | None = None
    stop_loss_bps_values: str | None = None
    max_concurrent_positions_values: str | None = None
    exit_on_sell_count_values: str | None = None


# (sweep field, config field, value kind), in expansion order.
_SWEPT_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("buy_sol_values", "buy_sol", "float"),
    ("max_age_secs_values", "max_age_secs", "int"),
    ("min_buy_count_values", "min_buy_count", "uint"),
    ("min_unique_buyers_values", "min_unique_buyers", "uint"),
    ("min_total_buy_sol_values", "min_total_buy_sol", "float"),
    ("max_sell_count_values", "max_sell_count", "uint"),
    ("min_buy_sell_ratio_values", "min_buy_sell_ratio", "float"),
    ("take_profit_bps_values", "take_profit_bps", "int"),
    ("stop_loss_bps_values", "stop_loss_bps", "int"),
    ("max_concurrent_positions_values", "max_concurrent_positions", "uint"),
    ("exit_on_sell_count_values", "exit_on_sell_count", "uint"),
)


def _parse_value(text: str, kind: str) -> Any:
    if kind == "float":
        if not _FLOAT_RE.fullmatch(text):
            raise ValueError("invalid float literal")
        return float(text)
    if kind == "int":
        if not _INT_RE.fullmatch(text):
            raise ValueError("invalid digit found in string")
        value = int(text)
        if not _I64_MIN <= value <= _I64_MAX:
            raise ValueError("number out of range for an integer")
        return value
    if kind == "uint":
        if not _UINT_RE.fullmatch(text):
            raise ValueError("invalid digit found in string")
        value = int(text)
        if value > _U64_MAX:
            raise ValueError("number too large to fit in target type")
        return value
    raise ValueError(f"unknown value kind '{kind}'")


def parse_csv_values(raw: str | None, label: str, kind: str) -> list[Any] | None:
    """Parse a comma-separated list of ``kind`` values ("float", "int" or "uint").

    Returns ``None`` when ``raw`` is ``None``; blank entries are skipped, and a
    list with no entries left is an error.
    """
    if raw is None:
        return None
    values = []
    for piece in raw.split(","):
        text = piece.strip()
        if not text:
            continue
        try:
            values.append(_parse_value(text, kind))
        except ValueError as error:
            raise ValueError(f"invalid {label} entry '{text}': {error}") from None
    if not values:
        raise ValueError(f"{label} cannot be empty")
    return values


def build_sweep_variants(
    base: StrategyConfig, sweep: SweepConfig
) -> list[StrategyConfig]:
    """Expand ``base`` into the cartesian product of every swept value list."""
    variants = [dataclasses.replace(base, strategy_config=None)]
    for sweep_field, config_field, kind in _SWEPT_FIELDS:
        values = parse_csv_values(getattr(sweep, sweep_field), sweep_field, kind)
        if values is None:
            values = [getattr(base, config_field)]
        variants = [
            dataclasses.replace(variant, **{config_field: value})
            for variant in variants
            for value in values
        ]
    return variants