# walletclone

`walletclone` compares how a single wallet trades with how a parameterised
strategy trades, and turns that comparison into scores, explanations and
parameter suggestions.

## What it covers

- **Strategy configuration** (`walletclone.config`) – `StrategyConfig` holds the
  parameters of one strategy run (momentum defaults). `resolve_strategy_config`
  reads the TOML file named by `strategy_config` and, through
  `merge_strategy_config`, fills in every field still at its default from the
  file's `[strategy]` table. `serialize_strategy_config` /
  `deserialize_strategy_config` convert to and from plain mappings,
  `generate_run_group_id` returns `<prefix>-<unix milliseconds>`, and
  `sol_to_lamports` / `lamports_to_sol` convert amounts.
- **Records** (`walletclone.models`) – `OrderSide`, `Fill`, `BacktestReport`,
  `WalletEntryFeature`, `WalletRoundtrip`, `WalletBehaviorSummary` and
  `WalletBehaviorReport`. `summarize_wallet_behavior` averages entry features
  and counts closed and open roundtrips.
- **Parameter sweeps** (`walletclone.sweep`) – `SweepConfig` holds optional
  comma-separated value lists; `parse_csv_values` parses one list and
  `build_sweep_variants` expands a base config into the Cartesian product.
  An empty list (for example `" , "`) raises `ValueError`.
- **Clone scoring** (`walletclone.scoring`) – `derive_strategy_roundtrips` pairs
  buy and sell fills per mint; `score_clone_similarity` matches them to the
  wallet's roundtrips (entries within 15 seconds) and returns a `CloneScore`
  with precision, recall, F1 and a `CloneScoreBreakdown`;
  `score_strategy_execution` wraps this into a `StrategyCloneCandidate`.
- **Families** (`walletclone.families`) – `default_strategy_config_for_family`
  gives defaults for `momentum`, `early_flow`, `breakout` and
  `liquidity_follow` (hyphenated spellings accepted), `build_fit_variants`
  expands them, and `rank_candidates` orders candidates by clone score, F1 and
  ending equity into a `CloneFitSummary`.
- **Config diffs** (`walletclone.diff`) – `strategy_diff_output` lists every
  changed field as a `StrategyFieldDiff` inside a `StrategyDiff`.
- **Seeds and targeted sweeps** (`walletclone.seeds`) – `ParamsSeed`,
  `weakest_dimensions`, `strongest_dimensions`, `strategy_from_seed`,
  `sweep_from_seed`, `targeted_sweep_from_seed` and `targeted_rationale`.
- **Output records** (`walletclone.outputs`) – `FitSummary`,
  `InferStrategyCandidate`, `FitParamsCandidate`, `SweepRunSummary` and
  `SweepResultRow`, each with a `from_candidate` / `from_summary` constructor.
- **Reports** (`walletclone.reports`, `walletclone.explain`) –
  `build_clone_report` produces confirmed and tentative rules, anti-patterns
  and a `ParamsSeed`; `clone_explain_why_output` explains why one family beats
  another, with a confidence grade, warnings and next actions.

## Installation

```
pip install .
```

There are no runtime dependencies. To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from walletclone.config import StrategyConfig
from walletclone.sweep import SweepConfig, build_sweep_variants

base = StrategyConfig()
sweep = SweepConfig(buy_sol_values="0.1,0.2", max_sell_count_values="0,1")
variants = build_sweep_variants(base, sweep)
print(len(variants))  # 4
```

A TOML file for `resolve_strategy_config`:

```toml
[strategy]
strategy = "early_flow"
buy_sol = 0.33
```

Amounts are in SOL in configurations and in lamports in fills and reports.

## What it does not do

- It does not run backtests: the `Fill` list and `BacktestReport` of a strategy
  run must come from elsewhere.
- It does not read on-chain events or build a wallet's entries and roundtrips
  from them; `WalletEntryFeature` and `WalletRoundtrip` records are supplied by
  the caller.
- It has no storage, no command-line program and no server, and it does not
  propose follow-up experiments from an experiment history.