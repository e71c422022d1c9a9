"""
Unit tests for RuleSet validation and the share-link codec.

Run with: pytest tests/test_rules.py
"""

import base64
import json
import logging

import pytest

from decode_sim.rules import DEFAULT_RULES, RuleSet, decode_rules, encode_rules


def _b64(text: str) -> str:
    return base64.urlsafe_b64encode(text.encode()).decode().rstrip("=")


class TestRuleSet:
    """Construction always yields a valid rule set."""

    def test_defaults(self):
        assert DEFAULT_RULES.grid_size == 6
        assert DEFAULT_RULES.leave_points == 3
        assert DEFAULT_RULES.base_return_partial_points == 5
        assert DEFAULT_RULES.base_return_full_points == 10
        assert DEFAULT_RULES.movement_rp_threshold == 16

    @pytest.mark.parametrize("given, expected", [(1, 4), (4, 4), (7, 7), (10, 10), (42, 10)])
    def test_grid_size_clamped(self, given, expected):
        assert RuleSet(grid_size=given).grid_size == expected

    def test_negative_points_clamped_to_zero(self):
        rules = RuleSet(leave_points=-3, movement_rp_threshold=-1)
        assert rules.leave_points == 0
        assert rules.movement_rp_threshold == 0

    def test_non_numeric_falls_back_to_default(self):
        assert RuleSet(leave_points="lots").leave_points == 3
        assert RuleSet(grid_size=None).grid_size == 6
        assert RuleSet(grid_size=True).grid_size == 6

    def test_clamping_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="decode_sim.rules"):
            RuleSet(grid_size=99)
        assert "clamped to 10" in caplog.text

    def test_is_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT_RULES.grid_size = 8

    def test_from_dict_ignores_unknown_and_fills_missing(self):
        rules = RuleSet.from_dict({"grid_size": 8, "bogus": 1})
        assert rules.grid_size == 8
        assert rules.leave_points == DEFAULT_RULES.leave_points

    def test_replace_validates(self):
        rules = DEFAULT_RULES.replace(grid_size=3, leave_points=4)
        assert rules.grid_size == 4
        assert rules.leave_points == 4
        assert DEFAULT_RULES.grid_size == 6


class TestShareLink:
    """Encoding to and decoding from URL-safe fragments."""

    def test_round_trip(self):
        rules = RuleSet(
            grid_size=9,
            leave_points=4,
            base_return_partial_points=6,
            base_return_full_points=12,
            movement_rp_threshold=20,
        )
        assert decode_rules(encode_rules(rules)) == rules

    def test_fragment_is_url_safe(self):
        fragment = encode_rules(DEFAULT_RULES)
        assert "=" not in fragment
        assert all(c.isalnum() or c in "-_" for c in fragment)

    def test_accepts_hash_prefix(self):
        rules = RuleSet(grid_size=5)
        assert decode_rules("#rules=" + encode_rules(rules)) == rules

    @pytest.mark.parametrize("fragment", [
        "",
        "!!not base64!!",
        "a",
        _b64("hello world"),
        _b64("[1, 2, 3]"),
        _b64('{"g": 6, "l"'),
    ])
    def test_malformed_yields_defaults(self, fragment):
        assert decode_rules(fragment) == DEFAULT_RULES

    def test_truncated_fragment_yields_defaults(self):
        fragment = encode_rules(RuleSet(grid_size=9, leave_points=7))
        assert decode_rules(fragment[:-6]) == DEFAULT_RULES

    def test_malformed_is_logged(self, caplog):
        with caplog.at_level(logging.WARNING, logger="decode_sim.rules"):
            decode_rules("%%%")
        assert "using defaults" in caplog.text

    def test_out_of_range_payload_is_clamped(self):
        rules = decode_rules(_b64(json.dumps({"g": 99, "l": -5})))
        assert rules.grid_size == 10
        assert rules.leave_points == 0
        assert rules.base_return_full_points == DEFAULT_RULES.base_return_full_points

    def test_long_key_payload_accepted(self):
        rules = decode_rules(_b64(json.dumps({"grid_size": 7})))
        assert rules.grid_size == 7
