"""Flat output records built from clone candidates and sweep runs."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from walletclone.config import StrategyConfig, lamports_to_sol
from walletclone.models import BacktestReport
from walletclone.scoring import CloneScoreBreakdown, StrategyCloneCandidate


@dataclass
class FitSummary:
    """Headline scores of one strategy family's fit."""

    family: str
    clone_score: float
    f1: float
    precision: float
    recall: float
    breakdown: CloneScoreBreakdown

    @classmethod
    def from_candidate(cls, candidate: StrategyCloneCandidate) -> FitSummary:
        score = candidate.score
        return cls(
            family=candidate.args.strategy,
            clone_score=score.overall,
            f1=score.f1,
            precision=score.precision,
            recall=score.recall,
            breakdown=dataclasses.replace(score.breakdown),
        )


@dataclass
class InferStrategyCandidate:
    """One family's clone fit, as listed when inferring a wallet's strategy."""

    family: str
    strategy_name: str
    clone_score: float
    f1: float
    precision: float
    recall: float
    matched_entries: int
    wallet_entries: int
    strategy_entries: int
    entry_delay_secs: float | None
    hold_error_secs: float | None
    size_error_ratio: float | None
    count_alignment: float
    breakdown: CloneScoreBreakdown
    fills: int
    ending_equity_lamports: int

    @classmethod
    def from_candidate(cls, candidate: StrategyCloneCandidate) -> InferStrategyCandidate:
        score = candidate.score
        return cls(
            family=candidate.args.strategy,
            strategy_name=candidate.report.strategy_name,
            clone_score=score.overall,
            f1=score.f1,
            precision=score.precision,
            recall=score.recall,
            matched_entries=score.matched_entries,
            wallet_entries=score.wallet_entries,
            strategy_entries=score.strategy_entries,
            entry_delay_secs=score.avg_entry_delay_secs,
            hold_error_secs=score.avg_hold_error_secs,
            size_error_ratio=score.avg_size_error_ratio,
            count_alignment=score.count_alignment,
            breakdown=dataclasses.replace(score.breakdown),
            fills=candidate.report.fills,
            ending_equity_lamports=candidate.report.ending_equity_lamports,
        )


@dataclass
class FitParamsCandidate:
    """One parameter variant's clone fit, with its full configuration."""

    args: StrategyConfig
    strategy_name: str
    clone_score: float
    f1: float
    precision: float
    recall: float
    matched_entries: int
    strategy_entries: int
    entry_delay_secs: float | None
    hold_error_secs: float | None
    size_error_ratio: float | None
    count_alignment: float
    breakdown: CloneScoreBreakdown
    fills: int
    rejections: int
    ending_equity_lamports: int

    @classmethod
    def from_candidate(cls, candidate: StrategyCloneCandidate) -> FitParamsCandidate:
        score = candidate.score
        return cls(
            args=dataclasses.replace(candidate.args),
            strategy_name=candidate.report.strategy_name,
            clone_score=score.overall,
            f1=score.f1,
            precision=score.precision,
            recall=score.recall,
            matched_entries=score.matched_entries,
            strategy_entries=score.strategy_entries,
            entry_delay_secs=score.avg_entry_delay_secs,
            hold_error_secs=score.avg_hold_error_secs,
            size_error_ratio=score.avg_size_error_ratio,
            count_alignment=score.count_alignment,
            breakdown=dataclasses.replace(score.breakdown),
            fills=candidate.report.fills,
            rejections=candidate.report.rejections,
            ending_equity_lamports=candidate.report.ending_equity_lamports,
        )


@dataclass
class SweepRunSummary:
    """A stored sweep run: its id, configuration and report."""

    run_id: int
    strategy: StrategyConfig
    report: BacktestReport


@dataclass
class SweepResultRow:
    """One row of a sweep results table."""

    run_id: int
    strategy_name: str
    ending_equity_sol: float
    ending_cash_sol: float
    fills: int
    rejections: int
    open_positions: int
    buy_sol: float
    max_age_secs: int
    min_total_buy_sol: float
    max_sell_count: int
    min_buy_sell_ratio: float
    max_concurrent_positions: int
    exit_on_sell_count: int

    @classmethod
    def from_summary(cls, summary: SweepRunSummary) -> SweepResultRow:
        report = summary.report
        config = summary.strategy
        return cls(
            run_id=summary.run_id,
            strategy_name=report.strategy_name,
            ending_equity_sol=lamports_to_sol(report.ending_equity_lamports),
            ending_cash_sol=lamports_to_sol(report.ending_cash_lamports),
            fills=report.fills,
            rejections=report.rejections,
            open_positions=report.open_positions,
            buy_sol=config.buy_sol,
            max_age_secs=config.max_age_secs,
            min_total_buy_sol=config.min_total_buy_sol,
            max_sell_count=config.max_sell_count,
            min_buy_sell_ratio=config.min_buy_sell_ratio,
            max_concurrent_positions=config.max_concurrent_positions,
            exit_on_sell_count=config.exit_on_sell_count,
        )