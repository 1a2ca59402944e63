"""Tests for preflop/engine/ranges.py — strategy table and resolution engine."""

from __future__ import annotations

import json
import logging

import numpy as np
import pytest

from preflop.engine.deck import deal_two_cards
from preflop.engine.errors import DataIntegrityError, InvalidInputError, StrategyFormatError
from preflop.engine.hand_keys import to_range_key
from preflop.engine.positions import Scenario
from preflop.engine.ranges import (
    FALLBACK_FOLD,
    SCENARIO_NOT_FOUND,
    Action,
    ActionEntry,
    ResolutionStatus,
    StrategyTable,
    get_range_table,
    load_strategy,
    resolve_action,
    validate_strategy,
)
from tests.conftest import SAMPLE_DATA


class TestAction:
    def test_codes(self):
        assert Action.FOLD.code == "F"
        assert Action.CALL.code == "C"
        assert Action.RAISE.code == "R"

    def test_from_code(self):
        assert Action.from_code("R") is Action.RAISE
        assert Action.from_code("X") is None
        assert Action.from_code(None) is None


class TestFromDict:
    def test_stack_keys_become_ints(self, sample_strategy):
        assert sample_strategy.stacks == (40,)

    def test_entries_parsed(self, sample_strategy):
        table = sample_strategy.get_range_table(40, "CO", "BB")
        assert table["AKs"] == ActionEntry("R", 0.7)
        assert table["KQo"] == ActionEntry("C", None)

    def test_unknown_codes_are_kept(self, sample_strategy):
        table = sample_strategy.get_range_table(40, "UTG", "BB")
        assert table["KK"].code == "X"

    def test_root_not_mapping(self):
        with pytest.raises(StrategyFormatError):
            StrategyTable.from_dict([1, 2, 3])

    def test_non_numeric_stack(self):
        with pytest.raises(StrategyFormatError, match="Stack"):
            StrategyTable.from_dict({"forty": {}})

    def test_table_not_mapping(self):
        with pytest.raises(StrategyFormatError):
            StrategyTable.from_dict({"40": {"CO": {"vs_BU": ["AA"]}}})

    def test_missing_action(self):
        with pytest.raises(StrategyFormatError, match="action"):
            StrategyTable.from_dict({"40": {"CO": {"vs_BU": {"AA": {"frequency": 1.0}}}}})

    def test_bad_frequency_type(self):
        with pytest.raises(StrategyFormatError):
            StrategyTable.from_dict({"40": {"CO": {"vs_BU": {"AA": {"action": "R", "frequency": "high"}}}}})

    def test_format_error_is_integrity_error(self):
        assert issubclass(StrategyFormatError, DataIntegrityError)


class TestGetRangeTable:
    def test_known_scenario(self, sample_strategy):
        table = sample_strategy.get_range_table(40, "CO", "BB")
        assert table is not None
        assert set(table) == {"AA", "AKs", "KQo", "72o"}

    def test_read_only(self, sample_strategy):
        table = sample_strategy.get_range_table(40, "CO", "BB")
        with pytest.raises(TypeError):
            table["T9s"] = ActionEntry("R")

    def test_unsupported_stack(self, sample_strategy):
        assert sample_strategy.get_range_table(17, "CO", "BB") is None

    def test_stack_must_match_exactly(self, sample_strategy):
        assert sample_strategy.get_range_table("40", "CO", "BB") is None

    def test_opener_equals_defender(self, sample_strategy):
        assert sample_strategy.get_range_table(40, "CO", "CO") is None

    @pytest.mark.parametrize("opener,defender", [(None, "BB"), ("CO", None), ("XX", "BB"), ("", "BB")])
    def test_invalid_positions(self, sample_strategy, opener, defender):
        assert sample_strategy.get_range_table(40, opener, defender) is None

    def test_missing_pair(self, sample_strategy):
        assert sample_strategy.get_range_table(40, "CO", "BU") is None

    def test_missing_opener(self, sample_strategy):
        assert sample_strategy.get_range_table(40, "HJ", "BB") is None

    def test_supported_stack_absent_from_data(self):
        strategy = StrategyTable.from_dict(SAMPLE_DATA, supported_stacks=(40, 60))
        assert strategy.get_range_table(60, "CO", "BB") is None

    def test_warning_logged(self, sample_strategy, caplog):
        with caplog.at_level(logging.WARNING, logger="preflop.engine.ranges"):
            sample_strategy.get_range_table(40, "CO", "BU")
        assert "Range not found" in caplog.text


class TestResolveAction:
    def test_raise(self, sample_strategy):
        res = sample_strategy.resolve_action(40, "CO", "BB", "AA")
        assert res.status is ResolutionStatus.FOUND
        assert res.action is Action.RAISE
        assert res.frequency is None

    def test_frequency_reported(self, sample_strategy):
        res = sample_strategy.resolve_action(40, "CO", "BB", "AKs")
        assert res.action is Action.RAISE
        assert res.frequency == pytest.approx(0.7)

    def test_call(self, sample_strategy):
        assert sample_strategy.resolve_action(40, "CO", "BB", "KQo").action is Action.CALL

    def test_explicit_fold_is_not_fallback(self, sample_strategy):
        res = sample_strategy.resolve_action(40, "CO", "BB", "72o")
        assert res.action is Action.FOLD
        assert res.status is ResolutionStatus.FOUND
        assert not res.is_fallback

    def test_missing_hand_folds(self, sample_strategy):
        res = sample_strategy.resolve_action(40, "CO", "BB", "T9s")
        assert res == FALLBACK_FOLD
        assert res.action is Action.FOLD
        assert res.is_fallback
        assert res.is_determined

    def test_missing_scenario_is_not_fold(self, sample_strategy):
        assert sample_strategy.get_range_table(40, "CO", "BU") is None
        res = sample_strategy.resolve_action(40, "CO", "BU", "AA")
        assert res == SCENARIO_NOT_FOUND
        assert res.action is None
        assert not res.is_determined

    def test_fallback_distinct_from_not_found(self, sample_strategy):
        fallback = sample_strategy.resolve_action(40, "CO", "BB", "T9s")
        missing = sample_strategy.resolve_action(40, "CO", "BU", "T9s")
        assert fallback.status is not missing.status
        assert fallback != missing

    def test_unsupported_stack(self, sample_strategy):
        res = sample_strategy.resolve_action(17, "CO", "BB", "AA")
        assert res.status is ResolutionStatus.SCENARIO_NOT_FOUND

    def test_unknown_code_raises(self, sample_strategy, caplog):
        with caplog.at_level(logging.ERROR, logger="preflop.engine.ranges"):
            with pytest.raises(DataIntegrityError, match="'X'"):
                sample_strategy.resolve_action(40, "UTG", "BB", "KK")
        assert "Unknown action code" in caplog.text

    def test_known_entry_beside_corrupt_one(self, sample_strategy):
        assert sample_strategy.resolve_action(40, "UTG", "BB", "AA").action is Action.RAISE

    @pytest.mark.parametrize("key", ["XYZ", "KAs", "", None])
    def test_malformed_key_raises(self, sample_strategy, key):
        with pytest.raises(InvalidInputError):
            sample_strategy.resolve_action(40, "CO", "BB", key)


class TestRoundTrip:
    @pytest.mark.parametrize("code,action", [("F", Action.FOLD), ("C", Action.CALL), ("R", Action.RAISE)])
    def test_dealt_hand_resolves_verbatim(self, code, action):
        rng = np.random.default_rng(11)
        for _ in range(50):
            key = to_range_key(*deal_two_cards(rng))
            strategy = StrategyTable.from_dict(
                {"40": {"CO": {"vs_BU": {key: {"action": code, "frequency": 0.25}}}}}
            )
            res = strategy.resolve_action(40, "CO", "BU", key)
            assert res.status is ResolutionStatus.FOUND
            assert res.action is action
            assert res.frequency == 0.25


class TestScenarios:
    def test_lists_present_scenarios(self, sample_strategy):
        assert set(sample_strategy.scenarios()) == {
            Scenario("CO", "BB", 40),
            Scenario("UTG", "BB", 40),
        }

    def test_skips_malformed(self):
        strategy = StrategyTable.from_dict({"40": {"BB": {"vs_SB": {}}, "CO": {"BU": {}}}})
        assert list(strategy.scenarios()) == []


class TestValidateStrategy:
    def test_reports_unknown_code(self, sample_strategy):
        problems = validate_strategy(sample_strategy)
        assert len(problems) == 1
        assert "UTG/vs_BB/KK" in problems[0]
        assert "unknown action code" in problems[0]

    def test_reports_structure_problems(self):
        strategy = StrategyTable.from_dict(
            {
                "20": {"CO": {"vs_BU": {}}},
                "40": {
                    "BB": {"vs_SB": {}},
                    "XX": {},
                    "CO": {
                        "vs_CO": {},
                        "BU": {},
                        "vs_BB": {
                            "AKx": {"action": "R"},
                            "AA": {"action": "R", "frequency": 1.5},
                        },
                    },
                },
            }
        )
        text = "\n".join(validate_strategy(strategy))
        assert "20: stack not in supported sizes" in text
        assert "the big blind cannot open" in text
        assert "XX: unknown opener position" in text
        assert "opener and defender are the same" in text
        assert "40/CO/BU" in text
        assert "AKx: not a range key" in text
        assert "frequency 1.5 outside [0, 1]" in text

    def test_clean_table(self):
        strategy = StrategyTable.from_dict({"40": {"CO": {"vs_BU": {"AA": {"action": "R"}}}}})
        assert validate_strategy(strategy) == []


class TestLoadStrategy:
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "ranges.json"
        path.write_text(json.dumps(SAMPLE_DATA), encoding="utf-8")
        strategy = load_strategy(path)
        assert strategy.resolve_action(40, "CO", "BB", "KQo").action is Action.CALL

    def test_custom_supported_stacks(self, tmp_path):
        path = tmp_path / "ranges.json"
        path.write_text(json.dumps({"20": {"SB": {"vs_BB": {"AA": {"action": "R"}}}}}), encoding="utf-8")
        strategy = load_strategy(path, supported_stacks=(20,))
        assert strategy.get_range_table(20, "SB", "BB") is not None
        assert strategy.get_range_table(40, "SB", "BB") is None


class TestDefaultStrategy:
    def test_known_scenario(self):
        assert get_range_table(40, "CO", "BU") is not None

    def test_aces_raise(self):
        assert resolve_action(40, "CO", "BU", "AA").action is Action.RAISE

    def test_seven_deuce_folds(self):
        assert resolve_action(40, "CO", "BU", "72o").action is Action.FOLD

    def test_same_positions_not_found(self):
        assert get_range_table(40, "CO", "CO") is None

    def test_unsupported_stack(self):
        assert get_range_table(17, "CO", "BU") is None
        assert resolve_action(17, "CO", "BU", "AA") == SCENARIO_NOT_FOUND

    def test_explicit_strategy_overrides_default(self, sample_strategy):
        assert get_range_table(40, "CO", "BU", sample_strategy) is None
        assert resolve_action(40, "CO", "BU", "AA", sample_strategy) == SCENARIO_NOT_FOUND
