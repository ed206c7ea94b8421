"""Similarity scoring between a wallet's trades and a strategy's fills."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass

from walletclone.config import StrategyConfig
from walletclone.models import (
    BacktestReport,
    Fill,
    OrderSide,
    WalletBehaviorReport,
)

MATCH_TOLERANCE_SECS = 15


@dataclass
class StrategyRoundtrip:
    """A strategy position in one mint; ``hold_secs`` is ``None`` while open."""

    mint: str
    entry_ts: int | None
    hold_secs: int | None
    gross_buy_lamports: int


@dataclass
class CloneScoreBreakdown:
    """Per-dimension similarity scores, each in [0, 1]."""

    entry_timing_similarity: float
    hold_time_similarity: float
    size_profile_similarity: float
    token_selection_similarity: float
    exit_behavior_similarity: float
    count_alignment: float


@dataclass
class CloneScore:
    """How closely a strategy run reproduces a wallet's roundtrips."""

    overall: float
    precision: float
    recall: float
    f1: float
    matched_entries: int
    wallet_entries: int
    strategy_entries: int
    avg_entry_delay_secs: float | None
    avg_hold_error_secs: float | None
    avg_size_error_ratio: float | None
    count_alignment: float
    breakdown: CloneScoreBreakdown


@dataclass
class StrategyCloneCandidate:
    """A strategy configuration together with its run and its clone score."""

    args: StrategyConfig
    report: BacktestReport
    score: CloneScore


def _entry_order(entry_ts: int | None) -> tuple[bool, int]:
    return (entry_ts is not None, entry_ts or 0)


def _average(values: Iterable[float]) -> float | None:
    items = list(values)
    return sum(items) / len(items) if items else None


def _ratio(numerator: int, denominator: int) -> float:
    return 0.0 if denominator == 0 else numerator / denominator


def derive_strategy_roundtrips(fills: Iterable[Fill]) -> list[StrategyRoundtrip]:
    """Pair buy and sell fills per mint, newest entry first."""
    active: dict[str, StrategyRoundtrip] = {}
    roundtrips: list[StrategyRoundtrip] = []
    for fill in fills:
        if fill.side is OrderSide.BUY:
            active.pop(fill.mint, None)
            active[fill.mint] = StrategyRoundtrip(
                mint=fill.mint,
                entry_ts=fill.timestamp,
                hold_secs=None,
                gross_buy_lamports=fill.lamports,
            )
        else:
            state = active.pop(fill.mint, None)
            if state is None:
                continue
            if state.entry_ts is not None and fill.timestamp is not None:
                state.hold_secs = fill.timestamp - state.entry_ts
            roundtrips.append(state)
    roundtrips.extend(active.values())
    roundtrips.sort(key=lambda roundtrip: _entry_order(roundtrip.entry_ts), reverse=True)
    return roundtrips


def score_clone_similarity(
    wallet: WalletBehaviorReport, strategy_roundtrips: list[StrategyRoundtrip]
) -> CloneScore:
    """Match wallet roundtrips to strategy roundtrips and score the fit."""
    matched_indices: set[int] = set()
    entry_delays: list[float] = []
    hold_errors: list[float] = []
    size_errors: list[float] = []
    exit_alignment: list[float] = []

    wallet_mints = {roundtrip.mint for roundtrip in wallet.roundtrips}
    strategy_mints = {roundtrip.mint for roundtrip in strategy_roundtrips}

    for wallet_roundtrip in wallet.roundtrips:
        if wallet_roundtrip.entry_ts is None:
            continue
        best: tuple[int, int] | None = None
        for index, candidate in enumerate(strategy_roundtrips):
            if index in matched_indices or candidate.mint != wallet_roundtrip.mint:
                continue
            if candidate.entry_ts is None:
                continue
            delay = abs(candidate.entry_ts - wallet_roundtrip.entry_ts)
            if delay > MATCH_TOLERANCE_SECS:
                continue
            if best is None or delay < best[1]:
                best = (index, delay)
        if best is None:
            continue

        index, delay = best
        matched_indices.add(index)
        entry_delays.append(float(delay))
        matched = strategy_roundtrips[index]
        if wallet_roundtrip.hold_secs is not None and matched.hold_secs is not None:
            hold_errors.append(float(abs(wallet_roundtrip.hold_secs - matched.hold_secs)))
        wallet_closed = wallet_roundtrip.status == "closed"
        strategy_closed = matched.hold_secs is not None
        exit_alignment.append(1.0 if wallet_closed == strategy_closed else 0.0)
        if wallet_roundtrip.gross_buy_lamports > 0:
            size_errors.append(
                abs(wallet_roundtrip.gross_buy_lamports - matched.gross_buy_lamports)
                / wallet_roundtrip.gross_buy_lamports
            )

    matched_entries = len(matched_indices)
    wallet_entries = len(wallet.roundtrips)
    strategy_entries = len(strategy_roundtrips)
    precision = _ratio(matched_entries, strategy_entries)
    recall = _ratio(matched_entries, wallet_entries)
    f1 = 2.0 * precision * recall / (precision + recall) if precision + recall > 0 else 0.0

    avg_delay = _average(entry_delays)
    avg_hold_error = _average(hold_errors)
    avg_size_error = _average(size_errors)

    if wallet_entries == 0 and strategy_entries == 0:
        count_alignment = 1.0
    else:
        count_alignment = 1.0 - abs(wallet_entries - strategy_entries) / max(
            wallet_entries, strategy_entries, 1
        )

    if wallet_mints or strategy_mints:
        token_selection = len(wallet_mints & strategy_mints) / max(
            len(wallet_mints | strategy_mints), 1
        )
    else:
        token_selection = 1.0

    exit_average = _average(exit_alignment)
    breakdown = CloneScoreBreakdown(
        entry_timing_similarity=0.0 if avg_delay is None else 1.0 / (1.0 + avg_delay / 10.0),
        hold_time_similarity=(
            0.0 if avg_hold_error is None else 1.0 / (1.0 + avg_hold_error / 15.0)
        ),
        size_profile_similarity=(
            0.0 if avg_size_error is None else min(max(1.0 - avg_size_error, 0.0), 1.0)
        ),
        token_selection_similarity=token_selection,
        exit_behavior_similarity=0.0 if exit_average is None else exit_average,
        count_alignment=count_alignment,
    )

    overall = (
        0.25 * f1
        + 0.15 * breakdown.entry_timing_similarity
        + 0.15 * breakdown.hold_time_similarity
        + 0.1 * breakdown.size_profile_similarity
        + 0.15 * breakdown.token_selection_similarity
        + 0.1 * breakdown.exit_behavior_similarity
        + 0.1 * breakdown.count_alignment
    )

    return CloneScore(
        overall=overall,
        precision=precision,
        recall=recall,
        f1=f1,
        matched_entries=matched_entries,
        wallet_entries=wallet_entries,
        strategy_entries=strategy_entries,
        avg_entry_delay_secs=avg_delay,
        avg_hold_error_secs=avg_hold_error,
        avg_size_error_ratio=avg_size_error,
        count_alignment=count_alignment,
        breakdown=breakdown,
    )


def score_strategy_execution(
    wallet: WalletBehaviorReport,
    args: StrategyConfig,
    report: BacktestReport,
    fills: Iterable[Fill],
) -> StrategyCloneCandidate:
    """Score one strategy run against a wallet's behaviour."""
    score = score_clone_similarity(wallet, derive_strategy_roundtrips(fills))
    return StrategyCloneCandidate(
        args=dataclasses.replace(args),
        report=dataclasses.replace(report),
        score=score,
    )