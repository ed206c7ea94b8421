import pytest

from walletclone.config import StrategyConfig
from walletclone.models import BacktestReport
from walletclone.outputs import (
    FitParamsCandidate,
    FitSummary,
    InferStrategyCandidate,
    SweepResultRow,
    SweepRunSummary,
)
from walletclone.scoring import CloneScore, CloneScoreBreakdown, StrategyCloneCandidate


def make_candidate():
    breakdown = CloneScoreBreakdown(0.11, 0.22, 0.33, 0.44, 0.55, 0.66)
    score = CloneScore(
        overall=0.71,
        precision=0.6,
        recall=0.8,
        f1=0.69,
        matched_entries=4,
        wallet_entries=5,
        strategy_entries=7,
        avg_entry_delay_secs=2.5,
        avg_hold_error_secs=None,
        avg_size_error_ratio=0.1,
        count_alignment=0.66,
        breakdown=breakdown,
    )
    report = BacktestReport(
        strategy_name="early_flow",
        fills=12,
        rejections=3,
        ending_cash_lamports=9_000_000_000,
        ending_equity_lamports=10_500_000_000,
    )
    args = StrategyConfig(strategy="early_flow", buy_sol=0.15)
    return StrategyCloneCandidate(args=args, report=report, score=score)


def test_fit_summary_from_candidate():
    candidate = make_candidate()
    summary = FitSummary.from_candidate(candidate)
    assert summary.family == "early_flow"
    assert summary.clone_score == candidate.score.overall
    assert summary.f1 == candidate.score.f1
    assert summary.precision == candidate.score.precision
    assert summary.recall == candidate.score.recall
    assert summary.breakdown == candidate.score.breakdown
    assert summary.breakdown is not candidate.score.breakdown


def test_infer_strategy_candidate_from_candidate():
    candidate = make_candidate()
    row = InferStrategyCandidate.from_candidate(candidate)
    assert row.family == candidate.args.strategy
    assert row.strategy_name == candidate.report.strategy_name
    assert row.matched_entries == 4
    assert row.wallet_entries == 5
    assert row.strategy_entries == 7
    assert row.entry_delay_secs == 2.5
    assert row.hold_error_secs is None
    assert row.size_error_ratio == 0.1
    assert row.count_alignment == candidate.score.count_alignment
    assert row.fills == 12
    assert row.ending_equity_lamports == 10_500_000_000
    assert row.breakdown == candidate.score.breakdown


def test_fit_params_candidate_copies_args():
    candidate = make_candidate()
    row = FitParamsCandidate.from_candidate(candidate)
    assert row.args == candidate.args
    assert row.args is not candidate.args
    assert row.rejections == 3
    assert row.fills == 12
    assert row.clone_score == candidate.score.overall
    candidate.args.buy_sol = 0.9
    assert row.args.buy_sol == 0.15


def test_sweep_result_row_from_summary():
    config = StrategyConfig(
        strategy="breakout",
        buy_sol=0.18,
        max_age_secs=35,
        min_total_buy_sol=1.2,
        max_sell_count=2,
        min_buy_sell_ratio=3.5,
        max_concurrent_positions=4,
        exit_on_sell_count=5,
    )
    report = BacktestReport(
        strategy_name="breakout",
        fills=6,
        rejections=1,
        open_positions=2,
        ending_cash_lamports=1_000_000_000,
        ending_equity_lamports=2_500_000_000,
    )
    row = SweepResultRow.from_summary(SweepRunSummary(run_id=42, strategy=config, report=report))
    assert row.run_id == 42
    assert row.strategy_name == "breakout"
    assert row.ending_equity_sol == pytest.approx(2.5)
    assert row.ending_cash_sol == pytest.approx(1.0)
    assert (row.fills, row.rejections, row.open_positions) == (6, 1, 2)
    assert row.buy_sol == 0.18
    assert row.max_age_secs == 35
    assert row.min_total_buy_sol == 1.2
    assert row.max_sell_count == 2
    assert row.min_buy_sell_ratio == 3.5
    assert row.max_concurrent_positions == 4
    assert row.exit_on_sell_count == 5