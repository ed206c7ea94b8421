import pytest

from walletclone.config import StrategyConfig
from walletclone.families import (
    CloneFitSummary,
    build_fit_variants,
    default_strategy_config_for_family,
    rank_candidates,
)
from walletclone.models import BacktestReport
from walletclone.scoring import CloneScore, CloneScoreBreakdown, StrategyCloneCandidate
from walletclone.sweep import SweepConfig


def _candidate(name, overall, f1, equity):
    breakdown = CloneScoreBreakdown(0.0, 0.0, 0.0, 0.0, 0.0, 0.0)
    score = CloneScore(
        overall=overall,
        precision=0.0,
        recall=0.0,
        f1=f1,
        matched_entries=0,
        wallet_entries=0,
        strategy_entries=0,
        avg_entry_delay_secs=None,
        avg_hold_error_secs=None,
        avg_size_error_ratio=None,
        count_alignment=0.0,
        breakdown=breakdown,
    )
    report = BacktestReport(strategy_name=name, ending_equity_lamports=equity)
    return StrategyCloneCandidate(args=StrategyConfig(), report=report, score=score)


def _names(summary):
    return [candidate.report.strategy_name for candidate in summary.candidates]


def test_momentum_family_matches_command_line_defaults():
    assert default_strategy_config_for_family("momentum") == StrategyConfig()


@pytest.mark.parametrize(
    "alias, canonical",
    [("early-flow", "early_flow"), ("liquidity-follow", "liquidity_follow")],
)
def test_aliases_resolve_to_same_config(alias, canonical):
    config = default_strategy_config_for_family(alias)
    assert config == default_strategy_config_for_family(canonical)
    assert config.strategy == canonical


def test_early_flow_defaults():
    config = default_strategy_config_for_family("early_flow")
    assert config.buy_sol == 0.15
    assert config.max_age_secs == 20
    assert config.take_profit_bps == 1_800
    assert config.strategy_config is None


def test_every_family_uses_common_broker_settings():
    for family in ("momentum", "early_flow", "breakout", "liquidity_follow"):
        config = default_strategy_config_for_family(family)
        assert config.strategy == family
        assert config.starting_sol == 10.0
        assert config.trading_fee_bps == 100
        assert config.slippage_bps == 50


def test_unknown_family_is_rejected():
    with pytest.raises(ValueError, match="unsupported strategy family 'sniper'"):
        default_strategy_config_for_family("sniper")


def test_build_fit_variants_expands_sweep():
    base = default_strategy_config_for_family("breakout")
    sweep = SweepConfig(max_age_secs_values="10,20,30", stop_loss_bps_values="500,900")
    variants = build_fit_variants(base, sweep)
    assert len(variants) == 6
    assert {v.max_age_secs for v in variants} == {10, 20, 30}
    assert all(v.strategy == "breakout" for v in variants)


def test_build_fit_variants_without_sweep_returns_base():
    base = default_strategy_config_for_family("momentum")
    assert build_fit_variants(base, SweepConfig()) == [base]


def test_rank_candidates_orders_by_score_then_f1_then_equity():
    candidates = [
        _candidate("low", 0.3, 0.9, 100),
        _candidate("tie_low_equity", 0.6, 0.5, 10),
        _candidate("tie_high_equity", 0.6, 0.5, 50),
        _candidate("tie_high_f1", 0.6, 0.7, 1),
        _candidate("best", 0.8, 0.1, 0),
    ]
    summary = rank_candidates(candidates)
    assert isinstance(summary, CloneFitSummary)
    assert _names(summary) == [
        "best",
        "tie_high_f1",
        "tie_high_equity",
        "tie_low_equity",
        "low",
    ]


def test_rank_candidates_keeps_order_of_full_ties():
    candidates = [_candidate(name, 0.5, 0.5, 7) for name in ("a", "b", "c")]
    assert _names(rank_candidates(candidates)) == ["a", "b", "c"]


def test_rank_candidates_empty():
    assert rank_candidates([]).candidates == []