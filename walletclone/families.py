"""Strategy family defaults and ranking of clone-fit candidates."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from walletclone.config import StrategyConfig
from walletclone.scoring import StrategyCloneCandidate
from walletclone.sweep import SweepConfig, build_sweep_variants


@dataclass
class CloneFitSummary:
    """Candidates of a clone fit, best first."""

    candidates: list[StrategyCloneCandidate] = field(default_factory=list)


def _float_key(value: float) -> float:
    # NaN sorts above every number, as a total order on floats would place it.
    return math.inf if math.isnan(value) else value


def rank_candidates(candidates: Iterable[StrategyCloneCandidate]) -> CloneFitSummary:
    """Order candidates by clone score, then F1, then ending equity, all descending."""
    ranked = sorted(
        candidates,
        key=lambda candidate: (
            _float_key(candidate.score.overall),
            _float_key(candidate.score.f1),
            candidate.report.ending_equity_lamports,
        ),
        reverse=True,
    )
    return CloneFitSummary(candidates=ranked)


_FAMILY_DEFAULTS: dict[str, dict[str, object]] = {
    "momentum": {
        "strategy": "momentum",
        "buy_sol": 0.2,
        "max_age_secs": 45,
        "min_buy_count": 3,
        "min_unique_buyers": 3,
        "min_net_buy_sol": 0.3,
        "take_profit_bps": 2_500,
        "stop_loss_bps": 1_200,
        "max_hold_secs": 90,
        "min_total_buy_sol": 0.8,
        "max_sell_count": 1,
        "min_buy_sell_ratio": 4.0,
        "max_concurrent_positions": 3,
        "exit_on_sell_count": 3,
    },
    "early_flow": {
        "strategy": "early_flow",
        "buy_sol": 0.15,
        "max_age_secs": 20,
        "min_buy_count": 4,
        "min_unique_buyers": 4,
        "min_net_buy_sol": 0.3,
        "take_profit_bps": 1_800,
        "stop_loss_bps": 900,
        "max_hold_secs": 45,
        "min_total_buy_sol": 0.8,
        "max_sell_count": 1,
        "min_buy_sell_ratio": 4.0,
        "max_concurrent_positions": 3,
        "exit_on_sell_count": 3,
    },
    "breakout": {
        "strategy": "breakout",
        "buy_sol": 0.18,
        "max_age_secs": 35,
        "min_buy_count": 5,
        "min_unique_buyers": 5,
        "min_net_buy_sol": 0.7,
        "take_profit_bps": 2_200,
        "stop_loss_bps": 900,
        "max_hold_secs": 75,
        "min_total_buy_sol": 1.2,
        "max_sell_count": 2,
        "min_buy_sell_ratio": 3.5,
        "max_concurrent_positions": 3,
        "exit_on_sell_count": 4,
    },
    "liquidity_follow": {
        "strategy": "liquidity_follow",
        "buy_sol": 0.18,
        "max_age_secs": 55,
        "min_buy_count": 4,
        "min_unique_buyers": 4,
        "min_net_buy_sol": 0.5,
        "take_profit_bps": 2_000,
        "stop_loss_bps": 1_000,
        "max_hold_secs": 120,
        "min_total_buy_sol": 1.5,
        "max_sell_count": 3,
        "min_buy_sell_ratio": 2.5,
        "max_concurrent_positions": 4,
        "exit_on_sell_count": 4,
    },
}

_FAMILY_ALIASES = {
    "momentum": "momentum",
    "early_flow": "early_flow",
    "early-flow": "early_flow",
    "breakout": "breakout",
    "liquidity_follow": "liquidity_follow",
    "liquidity-follow": "liquidity_follow",
}


def default_strategy_config_for_family(family: str) -> StrategyConfig:
    """Return the default configuration of a strategy family."""
    canonical = _FAMILY_ALIASES.get(family)
    if canonical is None:
        raise ValueError(f"unsupported strategy family '{family}'")
    return StrategyConfig(
        starting_sol=10.0,
        trading_fee_bps=100,
        slippage_bps=50,
        **_FAMILY_DEFAULTS[canonical],
    )


def build_fit_variants(base: StrategyConfig, sweep: SweepConfig) -> list[StrategyConfig]:
    """Expand a family base config into the variants to fit."""
    return build_sweep_variants(base, sweep)