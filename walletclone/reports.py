"""Clone reports: the recommended family, observed rules and a parameter seed."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field

from walletclone.models import WalletBehaviorReport
from walletclone.outputs import FitSummary
from walletclone.scoring import StrategyCloneCandidate
from walletclone.seeds import ParamsSeed, round_to


@dataclass
class CloneReportExportSummary:
    """Where a clone report's supporting data was exported, and how much."""

    output: str
    address_dir: str | None
    index_path: str | None
    mint_count: int
    wallet_trade_count: int
    event_count: int
    shard_count: int
    sharded: bool


@dataclass
class CloneReportOutput:
    """A wallet's best-fitting family, the rules it follows and a seed to tune."""

    address: str
    recommended_base_family: str
    recommended_next_strategy_name: str
    base_fit: FitSummary
    runner_up: FitSummary
    confirmed_rules: list[str]
    tentative_rules: list[str]
    anti_patterns: list[str]
    recommended_params_seed: ParamsSeed
    export: CloneReportExportSummary | None = field(default=None)


def _fmax(left: float, right: float) -> float:
    """Maximum of two floats, ignoring a NaN on either side."""
    if math.isnan(left):
        return right
    if math.isnan(right):
        return left
    return max(left, right)


def _clamp_to_int(value: float, low: float, high: float) -> int:
    """Clamp and truncate to an integer; NaN becomes zero."""
    if math.isnan(value):
        return 0
    return int(min(max(value, low), high))


def recommended_next_strategy_name(
    family: str, avg_age_secs: float, avg_hold_secs: float
) -> str:
    """Name the variant to develop next from the base family and wallet timing."""
    if family == "early_flow":
        return "confirmed_flow" if avg_age_secs > 12.0 else "early_flow_plus"
    return "micro_momentum" if avg_hold_secs < 20.0 else "momentum_plus"


def build_clone_report(
    wallet: WalletBehaviorReport,
    best_family: StrategyCloneCandidate,
    runner_up: StrategyCloneCandidate,
    export: CloneReportExportSummary | None = None,
) -> CloneReportOutput:
    """Summarise how a wallet trades and seed parameters for cloning it."""
    summary = wallet.summary

    def _or(value: float | None, default: float) -> float:
        return default if value is None else value

    avg_buy_sol = _or(summary.avg_entry_buy_sol, 0.2)
    avg_age_secs = _or(summary.avg_entry_age_secs, 20.0)
    avg_buy_count = _or(summary.avg_entry_buy_count_before, 4.0)
    avg_unique = _or(summary.avg_entry_unique_buyers_before, 4.0)
    avg_total_buy_sol = _or(summary.avg_entry_total_buy_sol_before, 1.0)
    avg_ratio = _or(summary.avg_entry_buy_sell_ratio_before, 4.0)
    avg_hold_secs = _or(summary.avg_hold_secs_closed, 45.0)
    avg_sell_before = _or(summary.avg_entry_sell_count_before, 0.0)
    avg_net_flow = summary.avg_entry_net_flow_sol_before

    family = best_family.args.strategy

    confirmed_rules = [
        f"uses roughly fixed ticket size around {avg_buy_sol:.3f} SOL",
        "typically enters after confirmation, not at t=0; "
        f"average entry age {avg_age_secs:.1f}s",
        "requires meaningful pre-entry activity: "
        f"buys_before≈{avg_buy_count:.1f}, unique_buyers≈{avg_unique:.1f}",
        f"prefers already-hot mints: total_buy_before≈{avg_total_buy_sol:.2f} SOL, "
        f"net_flow_before≈{_or(avg_net_flow, 0.0):.2f} SOL",
        f"exits quickly; average closed hold is {avg_hold_secs:.1f}s",
    ]

    tentative_rules = [
        "may tolerate some early sell pressure before entry; "
        f"sells_before≈{avg_sell_before:.1f}",
        "buy/sell imbalance matters, but not in sniper mode; "
        f"ratio_before≈{avg_ratio:.2f}",
        "existing family fit is only moderate "
        f"(clone_score {best_family.score.overall:.4f}), "
        "so custom variant is likely needed",
    ]

    anti_patterns: list[str] = []
    if avg_age_secs > 10.0:
        anti_patterns.append("do not model this as first-seconds sniper entry")
    if avg_sell_before > 2.0:
        anti_patterns.append("do not reject every mint with any early sells")
    if avg_buy_sol < 0.35:
        anti_patterns.append("do not model this as size-scaling conviction trader")
    if summary.orphan_sell_count == 0:
        anti_patterns.append(
            "do not overfit around missing historical positions; sample window is clean"
        )

    net_flow_seed = (
        _fmax(avg_total_buy_sol * 0.6, 0.3) if avg_net_flow is None else avg_net_flow
    )
    seed = ParamsSeed(
        buy_sol=round_to(avg_buy_sol, 3),
        max_age_secs=_clamp_to_int(round_to(avg_age_secs, 0), 5.0, 120.0),
        min_buy_count=_clamp_to_int(math.floor(avg_buy_count) if math.isfinite(avg_buy_count) else avg_buy_count, 2.0, 100.0),
        min_unique_buyers=_clamp_to_int(math.floor(avg_unique) if math.isfinite(avg_unique) else avg_unique, 2.0, 100.0),
        min_net_buy_sol=round_to(_fmax(net_flow_seed, 0.1), 3),
        min_total_buy_sol=round_to(_fmax(avg_total_buy_sol, avg_buy_sol * 5.0), 3),
        max_sell_count=_clamp_to_int(math.ceil(avg_sell_before) if math.isfinite(avg_sell_before) else avg_sell_before, 0.0, 20.0),
        min_buy_sell_ratio=round_to(_fmax(avg_ratio, 1.0), 2),
        max_hold_secs=_clamp_to_int(round_to(avg_hold_secs, 0), 5.0, 300.0),
        max_concurrent_positions=3,
        exit_on_sell_count=_clamp_to_int(math.ceil(avg_sell_before) if math.isfinite(avg_sell_before) else avg_sell_before, 1.0, 6.0),
        take_profit_bps=1800,
        stop_loss_bps=900,
    )

    return CloneReportOutput(
        address=wallet.address,
        recommended_base_family=family,
        recommended_next_strategy_name=recommended_next_strategy_name(
            family, avg_age_secs, avg_hold_secs
        ),
        base_fit=FitSummary.from_candidate(best_family),
        runner_up=FitSummary.from_candidate(runner_up),
        confirmed_rules=confirmed_rules,
        tentative_rules=tentative_rules,
        anti_patterns=anti_patterns,
        recommended_params_seed=seed,
        export=None if export is None else dataclasses.replace(export),
    )