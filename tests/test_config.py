import json

import pytest

from walletclone.config import (
    StrategyConfig,
    deserialize_strategy_config,
    generate_run_group_id,
    lamports_to_sol,
    merge_strategy_config,
    resolve_strategy_config,
    serialize_strategy_config,
    sol_to_lamports,
)


def write_toml(tmp_path, text):
    path = tmp_path / "strategy.toml"
    path.write_text(text)
    return path


def test_resolve_strategy_config_applies_file_overrides(tmp_path):
    path = write_toml(tmp_path, '\n[strategy]\nstrategy = "early_flow"\nbuy_sol = 0.33\n')
    config = StrategyConfig(strategy_config=path)
    resolved = resolve_strategy_config(config)
    assert resolved.strategy == "early_flow"
    assert resolved.buy_sol == 0.33
    assert resolved.strategy_config == path


def test_resolve_without_file_returns_equal_copy():
    config = StrategyConfig(buy_sol=0.5)
    resolved = resolve_strategy_config(config)
    assert resolved == config
    assert resolved is not config


def test_cli_values_win_over_file(tmp_path):
    path = write_toml(tmp_path, "[strategy]\nbuy_sol = 0.33\nmax_age_secs = 60\n")
    config = StrategyConfig(strategy_config=path, buy_sol=0.5)
    resolved = resolve_strategy_config(config)
    assert resolved.buy_sol == 0.5
    assert resolved.max_age_secs == 60


def test_resolve_requires_strategy_table(tmp_path):
    path = write_toml(tmp_path, "buy_sol = 0.33\n")
    with pytest.raises(ValueError):
        resolve_strategy_config(StrategyConfig(strategy_config=path))


def test_resolve_rejects_wrong_type(tmp_path):
    path = write_toml(tmp_path, '[strategy]\nmax_age_secs = "soon"\n')
    with pytest.raises(ValueError):
        resolve_strategy_config(StrategyConfig(strategy_config=path))


def test_merge_ratio_uses_file_when_cli_is_default():
    merged = merge_strategy_config(StrategyConfig(), {"min_buy_sell_ratio": 2.5})
    assert merged.min_buy_sell_ratio == 2.5
    kept = merge_strategy_config(StrategyConfig(min_buy_sell_ratio=3.0), {"min_buy_sell_ratio": 2.5})
    assert kept.min_buy_sell_ratio == 3.0


def test_merge_empty_file_keeps_defaults():
    assert merge_strategy_config(StrategyConfig(), {}) == StrategyConfig()


def test_dict_round_trip_through_json():
    config = StrategyConfig(strategy="breakout", buy_sol=0.18, max_sell_count=2)
    restored = deserialize_strategy_config(json.loads(json.dumps(config.to_dict())))
    assert restored == config


def test_serialize_resolves_file(tmp_path):
    path = write_toml(tmp_path, '[strategy]\nstrategy = "early_flow"\n')
    data = serialize_strategy_config(StrategyConfig(strategy_config=path))
    assert data["strategy"] == "early_flow"
    assert data["strategy_config"] == str(path)


def test_deserialize_missing_field_raises():
    data = StrategyConfig().to_dict()
    del data["buy_sol"]
    with pytest.raises(ValueError, match="buy_sol"):
        deserialize_strategy_config(data)


def test_deserialize_negative_unsigned_raises():
    data = StrategyConfig().to_dict()
    data["min_buy_count"] = -1
    with pytest.raises(ValueError):
        deserialize_strategy_config(data)


def test_generate_run_group_id_has_prefix_and_millis():
    group_id = generate_run_group_id("sweep")
    prefix, _, millis = group_id.partition("-")
    assert prefix == "sweep"
    assert millis.isdigit()


def test_sol_lamport_conversion():
    assert sol_to_lamports(0.33) == 330_000_000
    assert sol_to_lamports(-1.0) == 0
    assert lamports_to_sol(sol_to_lamports(0.15)) == 0.15