"""Trade, backtest and wallet-behaviour records."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass, field

from walletclone.config import lamports_to_sol


class OrderSide(enum.Enum):
    """Side of a fill."""

    BUY = "buy"
    SELL = "sell"


@dataclass
class Fill:
    """One executed order from a backtest."""

    mint: str
    side: OrderSide
    lamports: int
    token_amount: int = 0
    timestamp: int | None = None
    order_id: int = 0
    fee_lamports: int = 0
    execution_price_lamports_per_token: float = 0.0
    reason: str = ""


@dataclass
class BacktestReport:
    """Totals of one backtest run."""

    strategy_name: str
    processed_events: int = 0
    fills: int = 0
    rejections: int = 0
    ending_cash_lamports: int = 0
    ending_equity_lamports: int = 0
    open_positions: int = 0


@dataclass
class WalletEntryFeature:
    """Market state seen just before a wallet opened a position."""

    mint: str
    entry_seq: int
    entry_slot: int
    entry_ts: int | None
    entry_buy_lamports: int
    age_secs_before: int | None
    buy_count_before: int
    sell_count_before: int
    unique_buyers_before: int
    total_buy_lamports_before: int
    net_flow_lamports_before: int
    buy_sell_ratio_before: float


@dataclass
class WalletRoundtrip:
    """A wallet's position in one mint, from first buy to final sell."""

    mint: str
    status: str
    entry_ts: int | None
    exit_ts: int | None
    hold_secs: int | None
    gross_buy_lamports: int
    gross_sell_lamports: int

    @property
    def is_closed(self) -> bool:
        return self.status == "closed"


@dataclass
class WalletBehaviorSummary:
    """Aggregate view over a wallet's entries and roundtrips."""

    entry_count: int
    roundtrip_count: int
    closed_roundtrip_count: int
    open_roundtrip_count: int
    orphan_sell_count: int
    avg_entry_age_secs: float | None
    avg_entry_buy_count_before: float | None
    avg_entry_sell_count_before: float | None
    avg_entry_unique_buyers_before: float | None
    avg_entry_total_buy_sol_before: float | None
    avg_entry_net_flow_sol_before: float | None
    avg_entry_buy_sell_ratio_before: float | None
    avg_entry_buy_sol: float | None
    avg_hold_secs_closed: float | None


@dataclass
class WalletBehaviorReport:
    """Everything extracted about one wallet."""

    address: str
    summary: WalletBehaviorSummary
    entries: list[WalletEntryFeature] = field(default_factory=list)
    roundtrips: list[WalletRoundtrip] = field(default_factory=list)


def _average(values: Iterable[float]) -> float | None:
    total = 0.0
    count = 0
    for value in values:
        total += value
        count += 1
    return total / count if count else None


def summarize_wallet_behavior(
    entries: list[WalletEntryFeature],
    roundtrips: list[WalletRoundtrip],
    orphan_sell_count: int,
) -> WalletBehaviorSummary:
    """Average the entry features and count roundtrips by status."""
    closed = [roundtrip for roundtrip in roundtrips if roundtrip.is_closed]
    return WalletBehaviorSummary(
        entry_count=len(entries),
        roundtrip_count=len(roundtrips),
        closed_roundtrip_count=len(closed),
        open_roundtrip_count=max(len(roundtrips) - len(closed), 0),
        orphan_sell_count=orphan_sell_count,
        avg_entry_age_secs=_average(
            e.age_secs_before for e in entries if e.age_secs_before is not None
        ),
        avg_entry_buy_count_before=_average(e.buy_count_before for e in entries),
        avg_entry_sell_count_before=_average(e.sell_count_before for e in entries),
        avg_entry_unique_buyers_before=_average(e.unique_buyers_before for e in entries),
        avg_entry_total_buy_sol_before=_average(
            lamports_to_sol(e.total_buy_lamports_before) for e in entries
        ),
        avg_entry_net_flow_sol_before=_average(
            lamports_to_sol(e.net_flow_lamports_before) for e in entries
        ),
        avg_entry_buy_sell_ratio_before=_average(e.buy_sell_ratio_before for e in entries),
        avg_entry_buy_sol=_average(lamports_to_sol(e.entry_buy_lamports) for e in entries),
        avg_hold_secs_closed=_average(
            r.hold_secs for r in closed if r.hold_secs is not None
        ),
    )