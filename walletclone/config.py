"""Strategy configuration: defaults, TOML overrides and (de)serialisation."""

from __future__ import annotations

import dataclasses
import math
import sys
import time
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

LAMPORTS_PER_SOL = 1_000_000_000
_U64_MAX = 2**64 - 1

# Field name -> value kind. The order matches the serialised layout.
_FIELD_KINDS: dict[str, str] = {
    "strategy": "str",
    "starting_sol": "float",
    "buy_sol": "float",
    "max_age_secs": "int",
    "min_buy_count": "uint",
    "min_unique_buyers": "uint",
    "min_net_buy_sol": "float",
    "take_profit_bps": "int",
    "stop_loss_bps": "int",
    "max_hold_secs": "int",
    "min_total_buy_sol": "float",
    "max_sell_count": "uint",
    "min_buy_sell_ratio": "float",
    "max_concurrent_positions": "uint",
    "exit_on_sell_count": "uint",
    "trading_fee_bps": "uint",
    "slippage_bps": "uint",
}

# Command-line defaults; a value equal to its default may be overridden by a file.
_DEFAULTS: dict[str, Any] = {
    "strategy": "momentum",
    "starting_sol": 10.0,
    "buy_sol": 0.2,
    "max_age_secs": 45,
    "min_buy_count": 3,
    "min_unique_buyers": 3,
    "min_net_buy_sol": 0.3,
    "take_profit_bps": 2500,
    "stop_loss_bps": 1200,
    "max_hold_secs": 90,
    "min_total_buy_sol": 0.8,
    "max_sell_count": 1,
    "min_buy_sell_ratio": 4.0,
    "max_concurrent_positions": 3,
    "exit_on_sell_count": 3,
    "trading_fee_bps": 100,
    "slippage_bps": 50,
}


def _coerce(name: str, value: Any) -> Any:
    """Check a field value against its kind and return it normalised."""
    kind = _FIELD_KINDS[name]
    if kind == "str":
        if not isinstance(value, str):
            raise ValueError(f"invalid type for `{name}`: expected a string")
        return value
    if isinstance(value, bool):
        raise ValueError(f"invalid type for `{name}`: expected a number")
    if kind == "float":
        if not isinstance(value, (int, float)):
            raise ValueError(f"invalid type for `{name}`: expected a number")
        return float(value)
    if not isinstance(value, int):
        raise ValueError(f"invalid type for `{name}`: expected an integer")
    if kind == "uint" and value < 0:
        raise ValueError(f"invalid value for `{name}`: expected a non-negative integer")
    return value


@dataclass
class StrategyConfig:
    """Parameters of one strategy run; defaults are the momentum defaults."""

    strategy: str = "momentum"
    strategy_config: Path | None = None
    starting_sol: float = 10.0
    buy_sol: float = 0.2
    max_age_secs: int = 45
    min_buy_count: int = 3
    min_unique_buyers: int = 3
    min_net_buy_sol: float = 0.3
    take_profit_bps: int = 2500
    stop_loss_bps: int = 1200
    max_hold_secs: int = 90
    min_total_buy_sol: float = 0.8
    max_sell_count: int = 1
    min_buy_sell_ratio: float = 4.0
    max_concurrent_positions: int = 3
    exit_on_sell_count: int = 3
    trading_fee_bps: int = 100
    slippage_bps: int = 50

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of every field."""
        data = dataclasses.asdict(self)
        data["strategy_config"] = (
            None if self.strategy_config is None else str(self.strategy_config)
        )
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StrategyConfig:
        """Build a config from a mapping holding every field."""
        if not isinstance(data, Mapping):
            raise ValueError("strategy config must be a mapping")
        values: dict[str, Any] = {}
        for name in _FIELD_KINDS:
            if name not in data:
                raise ValueError(f"missing field `{name}`")
            values[name] = _coerce(name, data[name])
        raw_path = data.get("strategy_config")
        if raw_path is not None and not isinstance(raw_path, (str, Path)):
            raise ValueError("invalid type for `strategy_config`: expected a path")
        return cls(
            strategy_config=None if raw_path is None else Path(raw_path), **values
        )


def merge_strategy_config(
    cli: StrategyConfig, file_values: Mapping[str, Any]
) -> StrategyConfig:
    """Overlay file values on the fields the command line left at their defaults."""
    merged: dict[str, Any] = {}
    for name in _FIELD_KINDS:
        cli_value = getattr(cli, name)
        default = _DEFAULTS[name]
        if name == "min_buy_sell_ratio":
            changed = abs(cli_value - default) > sys.float_info.epsilon
        else:
            changed = cli_value != default
        if changed:
            merged[name] = cli_value
        else:
            file_value = file_values.get(name)
            merged[name] = default if file_value is None else _coerce(name, file_value)
    return StrategyConfig(strategy_config=cli.strategy_config, **merged)


def resolve_strategy_config(config: StrategyConfig) -> StrategyConfig:
    """Apply the TOML file named by ``strategy_config``, if any."""
    if config.strategy_config is None:
        return dataclasses.replace(config)
    with open(config.strategy_config, "rb") as handle:
        document = tomllib.load(handle)
    table = document.get("strategy")
    if not isinstance(table, dict):
        raise ValueError("missing field `strategy`")
    return merge_strategy_config(config, table)


def serialize_strategy_config(config: StrategyConfig) -> dict[str, Any]:
    """Resolve a config and return it as a JSON-ready mapping."""
    return resolve_strategy_config(config).to_dict()


def deserialize_strategy_config(value: Mapping[str, Any]) -> StrategyConfig:
    """Rebuild a config from its serialised mapping."""
    return StrategyConfig.from_dict(value)


def generate_run_group_id(prefix: str) -> str:
    """Return ``<prefix>-<unix milliseconds>``."""
    return f"{prefix}-{time.time_ns() // 1_000_000}"


def sol_to_lamports(sol: float) -> int:
    """Convert SOL to lamports, rounding half away from zero and saturating."""
    value = sol * LAMPORTS_PER_SOL
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return _U64_MAX
    return min(math.floor(value + 0.5), _U64_MAX)


def lamports_to_sol(lamports: int) -> float:
    """Convert lamports to SOL."""
    return lamports / LAMPORTS_PER_SOL