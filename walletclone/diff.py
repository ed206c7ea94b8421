"""Field-by-field comparison of two strategy configurations."""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass, field
from typing import Any

from walletclone.config import StrategyConfig

# Compared fields in report order, with their value kind.
_DIFF_FIELDS: tuple[tuple[str, str], ...] = (
    ("strategy", "str"),
    ("starting_sol", "float"),
    ("buy_sol", "float"),
    ("max_age_secs", "int"),
    ("min_buy_count", "int"),
    ("min_unique_buyers", "int"),
    ("min_net_buy_sol", "float"),
    ("take_profit_bps", "int"),
    ("stop_loss_bps", "int"),
    ("max_hold_secs", "int"),
    ("min_total_buy_sol", "float"),
    ("max_sell_count", "int"),
    ("min_buy_sell_ratio", "float"),
    ("max_concurrent_positions", "int"),
    ("exit_on_sell_count", "int"),
    ("trading_fee_bps", "int"),
    ("slippage_bps", "int"),
)


@dataclass
class StrategyFieldDiff:
    """One changed field; ``numeric_delta`` is right minus left for numbers."""

    field: str
    left: Any
    right: Any
    numeric_delta: float | None


@dataclass
class StrategyDiff:
    """All fields that differ between two configurations."""

    family_changed: bool
    changed_field_count: int
    changed_fields: list[StrategyFieldDiff] = field(default_factory=list)


def _round_to(value: float, decimals: int) -> float:
    factor = 10.0**decimals
    scaled = value * factor
    if math.isnan(scaled) or math.isinf(scaled):
        return scaled / factor
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) / factor


def _field_diff(name: str, kind: str, left: Any, right: Any) -> StrategyFieldDiff | None:
    if kind == "str":
        if left == right:
            return None
        return StrategyFieldDiff(name, left, right, None)
    if kind == "float":
        if not abs(left - right) > sys.float_info.epsilon:
            return None
        return StrategyFieldDiff(name, left, right, _round_to(right - left, 6))
    if left == right:
        return None
    return StrategyFieldDiff(name, left, right, float(right - left))


def strategy_diff_output(left: StrategyConfig, right: StrategyConfig) -> StrategyDiff:
    """Compare two configurations field by field."""
    changed = [
        diff
        for name, kind in _DIFF_FIELDS
        if (diff := _field_diff(name, kind, getattr(left, name), getattr(right, name)))
        is not None
    ]
    return StrategyDiff(
        family_changed=left.strategy != right.strategy,
        changed_field_count=len(changed),
        changed_fields=changed,
    )