"""Explanations of why one strategy family fits a wallet better than another."""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from dataclasses import dataclass

from walletclone.models import WalletBehaviorReport, WalletBehaviorSummary
from walletclone.scoring import CloneScoreBreakdown, StrategyCloneCandidate
from walletclone.seeds import round_to, strongest_dimensions, weakest_dimensions


@dataclass
class ExplainWhyOutput:
    """A readable account of the family choice for a wallet."""

    address: str
    recommended_family: str
    runner_up_family: str
    confidence: str
    decision_summary: str
    family_gap: float
    wallet_summary: WalletBehaviorSummary
    base_clone_score: float
    runner_up_clone_score: float
    base_breakdown: CloneScoreBreakdown
    runner_up_breakdown: CloneScoreBreakdown
    strengths: list[str]
    weaknesses: list[str]
    warnings: list[str]
    next_actions: list[str]


def explanation_confidence(best: float, runner_up: float) -> str:
    """Grade the family choice as "strong", "moderate" or "weak"."""
    gap = best - runner_up
    if best >= 0.65 and gap >= 0.08:
        return "strong"
    if best >= 0.5 and gap >= 0.03:
        return "moderate"
    return "weak"


def explanation_warnings(
    wallet: WalletBehaviorReport,
    best_family: StrategyCloneCandidate,
    runner_up: StrategyCloneCandidate,
    family_gap: float,
) -> list[str]:
    """Caveats on how far the explanation can be trusted."""
    warnings: list[str] = []
    if family_gap < 0.03:
        warnings.append(
            f"family choice is close: {best_family.args.strategy} and "
            f"{runner_up.args.strategy} are separated by only {family_gap:.4f} clone_score"
        )
    if best_family.score.matched_entries < 3:
        warnings.append(
            "matched entry count is small, so the explanation is directional rather than robust"
        )
    if best_family.score.breakdown.token_selection_similarity < 0.35:
        warnings.append(
            "token selection overlap is weak; the current family may capture timing "
            "but miss which mints this wallet prefers"
        )
    if best_family.score.f1 < 0.4:
        warnings.append(
            "overall fit is still partial; treat this as a base family guess, "
            "not a finished strategy"
        )
    if wallet.summary.closed_roundtrip_count < 5:
        warnings.append(
            "closed roundtrip sample is small, so hold-time and exit conclusions may be noisy"
        )
    return warnings


def explanation_next_actions(
    wallet: WalletBehaviorReport,
    best_family: StrategyCloneCandidate,
    runner_up: StrategyCloneCandidate,
    weakest: Sequence[tuple[str, float]],
) -> list[str]:
    """Concrete next steps addressing each weak dimension."""
    family = best_family.args.strategy
    actions: list[str] = []
    for label, _ in weakest:
        if label == "entry timing":
            actions.append(
                f"tighten the entry gate for {family}: retune max_age_secs, min_buy_count, "
                "min_unique_buyers, min_total_buy_sol, and min_net_buy_sol"
            )
        elif label == "hold time":
            actions.append(
                f"retune exit cadence for {family}: max_hold_secs, take_profit_bps, "
                "and stop_loss_bps are the next levers"
            )
        elif label == "size profile":
            ticket = wallet.summary.avg_entry_buy_sol
            if ticket is None:
                ticket = best_family.args.buy_sol
            actions.append(
                f"re-center buy_sol around the wallet's average ticket size ({ticket:.3f} SOL)"
            )
        elif label == "token selection":
            actions.append(
                f"token overlap is the main miss; compare {family} against "
                f"{runner_up.args.strategy} and consider adding a mint-selection filter"
            )
        elif label == "exit behavior":
            actions.append(
                "sell-pressure exits need work; tune exit_on_sell_count and "
                f"max_sell_count for {family}"
            )
        elif label == "count alignment":
            actions.append(
                "entry frequency is off; adjust selectivity and "
                f"max_concurrent_positions for {family}"
            )

    if not actions:
        actions.append(
            f"run fit-params on {family} to convert this family-level explanation "
            "into concrete thresholds"
        )

    if best_family.score.overall < 0.55:
        actions.append(
            f"keep {family} as the base family, but test {runner_up.args.strategy} "
            "as a fallback branch because the current fit is still moderate"
        )
    return actions


def clone_explain_why_output(
    wallet: WalletBehaviorReport,
    best_family: StrategyCloneCandidate,
    runner_up: StrategyCloneCandidate,
) -> ExplainWhyOutput:
    """Explain why ``best_family`` beats ``runner_up`` for this wallet."""
    best_score = best_family.score.overall
    runner_score = runner_up.score.overall
    confidence = explanation_confidence(best_score, runner_score)
    family_gap = round_to(best_score - runner_score, 4)
    strongest = strongest_dimensions(best_family, runner_up)
    weakest = weakest_dimensions(best_family)

    strengths = [
        f"{label} is a relative strength ({best:.3f} vs runner-up {best - delta:.3f}, "
        f"delta {delta:+.3f})"
        for label, best, delta in strongest
    ]
    if weakest:
        weaknesses = [f"{label} is still weak ({score:.3f})" for label, score in weakest]
    else:
        weaknesses = [
            f"{best_family.args.strategy} is the best fit, but the remaining gaps are "
            "distributed rather than concentrated in one dimension"
        ]

    lead = strongest[0][0] if strongest else "overall alignment"
    drag = weakest[0][0] if weakest else "fine-grained parameter tuning"
    decision_summary = (
        f"{best_family.args.strategy} is ahead of {runner_up.args.strategy} mainly "
        f"because {lead} fits better, but {drag} still needs work"
    )

    return ExplainWhyOutput(
        address=wallet.address,
        recommended_family=best_family.args.strategy,
        runner_up_family=runner_up.args.strategy,
        confidence=confidence,
        decision_summary=decision_summary,
        family_gap=family_gap,
        wallet_summary=dataclasses.replace(wallet.summary),
        base_clone_score=best_score,
        runner_up_clone_score=runner_score,
        base_breakdown=dataclasses.replace(best_family.score.breakdown),
        runner_up_breakdown=dataclasses.replace(runner_up.score.breakdown),
        strengths=strengths,
        weaknesses=weaknesses,
        warnings=explanation_warnings(wallet, best_family, runner_up, family_gap),
        next_actions=explanation_next_actions(wallet, best_family, runner_up, weakest),
    )