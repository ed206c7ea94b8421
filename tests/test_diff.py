import dataclasses
from pathlib import Path

from walletclone.config import StrategyConfig
from walletclone.diff import StrategyFieldDiff, strategy_diff_output


def test_identical_configs_have_no_diff():
    diff = strategy_diff_output(StrategyConfig(), StrategyConfig())
    assert diff.family_changed is False
    assert diff.changed_field_count == 0
    assert diff.changed_fields == []


def test_strategy_change_is_a_family_change_without_delta():
    right = StrategyConfig(strategy="early_flow")
    diff = strategy_diff_output(StrategyConfig(), right)
    assert diff.family_changed is True
    assert diff.changed_fields == [
        StrategyFieldDiff("strategy", "momentum", "early_flow", None)
    ]


def test_integer_field_delta():
    left = StrategyConfig()
    right = dataclasses.replace(left, min_buy_count=left.min_buy_count + 2)
    diff = strategy_diff_output(left, right)
    assert diff.changed_field_count == 1
    entry = diff.changed_fields[0]
    assert entry.field == "min_buy_count"
    assert entry.left == left.min_buy_count
    assert entry.right == right.min_buy_count
    assert entry.numeric_delta == 2.0


def test_float_delta_is_rounded_to_six_decimals():
    left = StrategyConfig(buy_sol=0.2)
    right = StrategyConfig(buy_sol=0.3)
    diff = strategy_diff_output(left, right)
    entry = diff.changed_fields[0]
    assert entry.field == "buy_sol"
    assert entry.numeric_delta == 0.1


def test_negative_delta_direction_is_right_minus_left():
    left = StrategyConfig(stop_loss_bps=1200)
    right = StrategyConfig(stop_loss_bps=900)
    entry = strategy_diff_output(left, right).changed_fields[0]
    assert entry.numeric_delta == float(right.stop_loss_bps - left.stop_loss_bps)
    assert entry.numeric_delta < 0


def test_float_difference_within_epsilon_is_ignored():
    left = StrategyConfig(min_buy_sell_ratio=4.0)
    right = StrategyConfig(min_buy_sell_ratio=4.0 + 1e-17)
    assert strategy_diff_output(left, right).changed_field_count == 0


def test_strategy_config_path_is_not_compared():
    right = StrategyConfig(strategy_config=Path("other.toml"))
    assert strategy_diff_output(StrategyConfig(), right).changed_fields == []


def test_changed_fields_keep_declaration_order():
    left = StrategyConfig()
    right = dataclasses.replace(
        left,
        slippage_bps=left.slippage_bps + 1,
        strategy="breakout",
        max_hold_secs=left.max_hold_secs + 5,
        buy_sol=left.buy_sol * 2,
    )
    diff = strategy_diff_output(left, right)
    assert [entry.field for entry in diff.changed_fields] == [
        "strategy",
        "buy_sol",
        "max_hold_secs",
        "slippage_bps",
    ]
    assert diff.changed_field_count == len(diff.changed_fields)


def test_diff_is_antisymmetric():
    left = StrategyConfig()
    right = dataclasses.replace(left, take_profit_bps=1800, min_total_buy_sol=1.5)
    forward = strategy_diff_output(left, right)
    backward = strategy_diff_output(right, left)
    assert [e.field for e in forward.changed_fields] == [
        e.field for e in backward.changed_fields
    ]
    for f, b in zip(forward.changed_fields, backward.changed_fields):
        assert f.numeric_delta == -b.numeric_delta
        assert f.left == b.right