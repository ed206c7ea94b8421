"""Parameter seeds and the sweeps and configs derived from them."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from walletclone.config import StrategyConfig
from walletclone.scoring import CloneScoreBreakdown, StrategyCloneCandidate
from walletclone.sweep import SweepConfig

Dimension = tuple[str, float]


@dataclass
class ParamsSeed:
    """Starting parameters inferred from a wallet's observed behaviour."""

    buy_sol: float
    max_age_secs: int
    min_buy_count: int
    min_unique_buyers: int
    min_net_buy_sol: float
    min_total_buy_sol: float
    max_sell_count: int
    min_buy_sell_ratio: float
    max_hold_secs: int
    max_concurrent_positions: int
    exit_on_sell_count: int
    take_profit_bps: int
    stop_loss_bps: int


def round_to(value: float, decimals: int) -> float:
    """Round to ``decimals`` places, halves away from zero."""
    factor = 10.0**decimals
    scaled = value * factor
    if math.isnan(scaled) or math.isinf(scaled):
        return scaled / factor
    return math.copysign(math.floor(abs(scaled) + 0.5), scaled) / factor


def _sort_key(value: float) -> float:
    return math.inf if math.isnan(value) else value


def breakdown_dimensions(breakdown: CloneScoreBreakdown) -> list[Dimension]:
    """Return the labelled score dimensions in their fixed order."""
    return [
        ("entry timing", breakdown.entry_timing_similarity),
        ("hold time", breakdown.hold_time_similarity),
        ("size profile", breakdown.size_profile_similarity),
        ("token selection", breakdown.token_selection_similarity),
        ("exit behavior", breakdown.exit_behavior_similarity),
        ("count alignment", breakdown.count_alignment),
    ]


def weakest_dimensions(candidate: StrategyCloneCandidate) -> list[Dimension]:
    """Up to three dimensions scoring below 0.65, weakest first."""
    ordered = sorted(
        breakdown_dimensions(candidate.score.breakdown),
        key=lambda item: _sort_key(item[1]),
    )
    return [item for item in ordered if item[1] < 0.65][:3]


def strongest_dimensions(
    best_family: StrategyCloneCandidate, runner_up: StrategyCloneCandidate
) -> list[tuple[str, float, float]]:
    """Up to three dimensions where the best family leads by more than 0.02.

    Each item is ``(label, best_score, best_score - runner_up_score)``.
    """
    deltas = [
        (label, best, best - runner)
        for (label, best), (_, runner) in zip(
            breakdown_dimensions(best_family.score.breakdown),
            breakdown_dimensions(runner_up.score.breakdown),
        )
    ]
    deltas.sort(key=lambda item: _sort_key(item[2]), reverse=True)
    return [item for item in deltas if item[2] > 0.02][:3]


def strategy_from_seed(family: str, seed: ParamsSeed) -> StrategyConfig:
    """Build a full strategy config for ``family`` from a seed."""
    return StrategyConfig(
        strategy=family.replace("-", "_"),
        strategy_config=None,
        starting_sol=10.0,
        buy_sol=seed.buy_sol,
        max_age_secs=seed.max_age_secs,
        min_buy_count=seed.min_buy_count,
        min_unique_buyers=seed.min_unique_buyers,
        min_net_buy_sol=seed.min_net_buy_sol,
        take_profit_bps=seed.take_profit_bps,
        stop_loss_bps=seed.stop_loss_bps,
        max_hold_secs=seed.max_hold_secs,
        min_total_buy_sol=seed.min_total_buy_sol,
        max_sell_count=seed.max_sell_count,
        min_buy_sell_ratio=seed.min_buy_sell_ratio,
        max_concurrent_positions=seed.max_concurrent_positions,
        exit_on_sell_count=seed.exit_on_sell_count,
        trading_fee_bps=100,
        slippage_bps=50,
    )


def _ints(low: int, mid: int, high: int) -> str:
    return f"{low},{mid},{high}"


def _floats(low: float, mid: float, high: float, digits: int) -> str:
    return f"{low:.{digits}f},{mid:.{digits}f},{high:.{digits}f}"


def _at_least_one_below(value: int, step: int) -> int:
    return max(value - step, 1)


def _has_label(weakest: Sequence[Dimension], *labels: str) -> bool:
    return any(label in labels for label, _ in weakest)


def sweep_from_seed(seed: ParamsSeed, weakest: Sequence[Dimension]) -> SweepConfig:
    """A broad sweep around every seed value, widened on weak dimensions."""
    sweep = SweepConfig(
        buy_sol_values=_floats(
            max(seed.buy_sol * 0.8, 0.01), seed.buy_sol, seed.buy_sol * 1.2, 3
        ),
        max_age_secs_values=_ints(
            max(seed.max_age_secs - 8, 3), seed.max_age_secs, seed.max_age_secs + 8
        ),
        min_buy_count_values=_ints(
            _at_least_one_below(seed.min_buy_count, 1),
            seed.min_buy_count,
            seed.min_buy_count + 1,
        ),
        min_unique_buyers_values=_ints(
            _at_least_one_below(seed.min_unique_buyers, 1),
            seed.min_unique_buyers,
            seed.min_unique_buyers + 1,
        ),
        min_total_buy_sol_values=_floats(
            max(seed.min_total_buy_sol * 0.8, 0.1),
            seed.min_total_buy_sol,
            seed.min_total_buy_sol * 1.2,
            3,
        ),
        max_sell_count_values=_ints(
            max(seed.max_sell_count - 1, 0),
            seed.max_sell_count,
            seed.max_sell_count + 1,
        ),
        min_buy_sell_ratio_values=_floats(
            max(seed.min_buy_sell_ratio - 0.75, 1.0),
            seed.min_buy_sell_ratio,
            seed.min_buy_sell_ratio + 0.75,
            2,
        ),
        take_profit_bps_values=_ints(
            max(seed.take_profit_bps - 300, 300),
            seed.take_profit_bps,
            seed.take_profit_bps + 300,
        ),
        stop_loss_bps_values=_ints(
            max(seed.stop_loss_bps - 200, 100),
            seed.stop_loss_bps,
            seed.stop_loss_bps + 200,
        ),
        max_concurrent_positions_values=_ints(
            _at_least_one_below(seed.max_concurrent_positions, 1),
            seed.max_concurrent_positions,
            seed.max_concurrent_positions + 1,
        ),
        exit_on_sell_count_values=_ints(
            _at_least_one_below(seed.exit_on_sell_count, 1),
            seed.exit_on_sell_count,
            seed.exit_on_sell_count + 1,
        ),
    )

    if _has_label(weakest, "entry timing"):
        sweep.max_age_secs_values = _ints(
            max(seed.max_age_secs - 12, 3), seed.max_age_secs, seed.max_age_secs + 12
        )
        sweep.min_buy_count_values = _ints(
            _at_least_one_below(seed.min_buy_count, 2),
            seed.min_buy_count,
            seed.min_buy_count + 2,
        )
    if _has_label(weakest, "hold time", "exit behavior"):
        sweep.take_profit_bps_values = _ints(
            max(seed.take_profit_bps - 500, 300),
            seed.take_profit_bps,
            seed.take_profit_bps + 500,
        )
        sweep.exit_on_sell_count_values = _ints(
            _at_least_one_below(seed.exit_on_sell_count, 2),
            seed.exit_on_sell_count,
            seed.exit_on_sell_count + 2,
        )
    return sweep


def targeted_sweep_from_seed(
    seed: ParamsSeed, weakest: Sequence[Dimension]
) -> SweepConfig:
    """A narrow sweep over the parameters behind the two weakest dimensions."""
    sweep = SweepConfig()
    for label, _ in list(weakest)[:2]:
        if label == "entry timing":
            sweep.max_age_secs_values = _ints(
                max(seed.max_age_secs - 10, 3),
                seed.max_age_secs,
                seed.max_age_secs + 10,
            )
            sweep.min_buy_count_values = _ints(
                _at_least_one_below(seed.min_buy_count, 1),
                seed.min_buy_count,
                seed.min_buy_count + 1,
            )
            sweep.min_unique_buyers_values = _ints(
                _at_least_one_below(seed.min_unique_buyers, 1),
                seed.min_unique_buyers,
                seed.min_unique_buyers + 1,
            )
        elif label in ("hold time", "exit behavior"):
            sweep.take_profit_bps_values = _ints(
                max(seed.take_profit_bps - 400, 300),
                seed.take_profit_bps,
                seed.take_profit_bps + 400,
            )
            sweep.stop_loss_bps_values = _ints(
                max(seed.stop_loss_bps - 200, 100),
                seed.stop_loss_bps,
                seed.stop_loss_bps + 200,
            )
            sweep.exit_on_sell_count_values = _ints(
                _at_least_one_below(seed.exit_on_sell_count, 1),
                seed.exit_on_sell_count,
                seed.exit_on_sell_count + 1,
            )
        elif label == "size profile":
            sweep.buy_sol_values = _floats(
                max(seed.buy_sol * 0.85, 0.01), seed.buy_sol, seed.buy_sol * 1.15, 3
            )
        elif label == "count alignment":
            sweep.max_concurrent_positions_values = _ints(
                _at_least_one_below(seed.max_concurrent_positions, 1),
                seed.max_concurrent_positions,
                seed.max_concurrent_positions + 1,
            )
            sweep.min_buy_count_values = _ints(
                _at_least_one_below(seed.min_buy_count, 1),
                seed.min_buy_count,
                seed.min_buy_count + 1,
            )
        elif label == "token selection":
            sweep.min_total_buy_sol_values = _floats(
                max(seed.min_total_buy_sol * 0.8, 0.1),
                seed.min_total_buy_sol,
                seed.min_total_buy_sol * 1.2,
                3,
            )
            sweep.min_buy_sell_ratio_values = _floats(
                max(seed.min_buy_sell_ratio - 0.5, 1.0),
                seed.min_buy_sell_ratio,
                seed.min_buy_sell_ratio + 0.5,
                2,
            )

    if sweep.buy_sol_values is None:
        sweep.buy_sol_values = _floats(
            max(seed.buy_sol * 0.9, 0.01), seed.buy_sol, seed.buy_sol * 1.1, 3
        )
    return sweep


def targeted_rationale(weakest: Sequence[Dimension]) -> str:
    """Explain what the targeted sweep focuses on."""
    if not weakest:
        return (
            "the current family fit is coherent, so the next step is a narrow "
            "confidence-building sweep"
        )
    focus = " and ".join(label for label, _ in list(weakest)[:2])
    return f"the next experiment should focus on {focus}"