"""Tests for mod description parsing.

All inputs are synthetic description strings in the shapes the data store
produces (JSON text, plain lists, {"stats": [...]} entries).
"""

import json

import pytest

from wf_planner.models.effect import EffectBag
from wf_planner.models.mod import Mod
from wf_planner.parser.mod_text import (
    DEFAULT_ARCANE_MAX_RANK,
    arcane_description,
    arcane_max_rank,
    decode_rank_blocks,
    match_stat_rule,
    mod_description,
    normalize_label,
    parse_effect_line,
    parse_effect_text,
    parse_mod_effects,
    sanitize_display_text,
)


def _mod(description, fusion_limit=3, name="Test Mod") -> Mod:
    return Mod(
        unique_name=f"/Mods/{name.replace(' ', '')}",
        name=name,
        base_drain=4,
        fusion_limit=fusion_limit,
        description=description,
    )


@pytest.fixture
def serration() -> Mod:
    blocks = [f"+{15 * (r + 1)}% Damage" for r in range(11)]
    return _mod(json.dumps(blocks), fusion_limit=10, name="Serration")


# --- Labels ---


def test_normalize_label_strips_markup_and_notes():
    assert normalize_label("<DT_FIRE_COLOR>Heat") == "Heat"
    assert normalize_label("Critical Chance (x2 for Heavy Attacks)") == "Critical Chance"
    assert normalize_label("  Ability   Strength ") == "Ability Strength"


@pytest.mark.parametrize("label, field", [
    ("Damage", "base_damage"),
    ("Melee Damage", "base_damage"),
    ("Attack Speed", "fire_rate"),
    ("Fire Rate", "fire_rate"),
    ("<DT_FREEZE_COLOR>Cold", "cold"),
    ("Toxin Damage", "toxin"),
    ("Shield Capacity", "shield"),
    ("Energy Max", "energy"),
    ("ability range", "ability_range"),
])
def test_match_stat_rule(label, field):
    assert match_stat_rule(label) == field


def test_unknown_label_has_no_rule():
    assert match_stat_rule("Bullet Jump") is None
    assert match_stat_rule("Damage to Grineer") is None


# --- Lines and blocks ---


def test_parse_effect_line_signs():
    assert parse_effect_line("+90% Multishot") == ("multishot", pytest.approx(0.9))
    assert parse_effect_line("-55% Ability Efficiency") == (
        "ability_efficiency", pytest.approx(-0.55),
    )


def test_parse_effect_line_ignores_non_effect_text():
    assert parse_effect_line("On Kill:") is None
    assert parse_effect_line("+30 Health") is None
    assert parse_effect_line("+20% Bullet Jump") is None


def test_parse_effect_text_sums_repeated_fields():
    bag = parse_effect_text(
        "+165% Damage\n"
        "+90% <DT_FIRE_COLOR>Heat\n"
        "Flavor text that is not a stat\n"
        "+10% Damage"
    )
    assert bag.base_damage == pytest.approx(1.75)
    assert bag.heat == pytest.approx(0.9)
    assert set(bag.nonzero()) == {"base_damage", "heat"}


def test_decode_rank_blocks_shapes():
    assert decode_rank_blocks('["+10% Damage", "+20% Damage"]') == [
        "+10% Damage", "+20% Damage",
    ]
    assert decode_rank_blocks([{"stats": ["+10% Health", "+5% Armor"]}]) == [
        "+10% Health\n+5% Armor",
    ]
    assert decode_rank_blocks(["a", "b"]) == ["a", "b"]


@pytest.mark.parametrize("raw", [None, "{not json", '{"stats": []}', 42, ["ok", 7]])
def test_decode_rank_blocks_bad_data_is_empty(raw):
    assert decode_rank_blocks(raw) == []


# --- Mods ---


def test_parse_mod_effects_uses_rank_block(serration):
    assert parse_mod_effects(serration, 0).base_damage == pytest.approx(0.15)
    assert parse_mod_effects(serration, 10).base_damage == pytest.approx(1.65)


def test_rank_above_fusion_limit_is_idempotent(serration):
    at_max = parse_mod_effects(serration, serration.max_rank)
    for rank in (11, 12, 50):
        assert parse_mod_effects(serration, rank) == at_max


def test_negative_rank_uses_first_block(serration):
    assert parse_mod_effects(serration, -3) == parse_mod_effects(serration, 0)


def test_fusion_limit_caps_block_even_with_more_blocks():
    mod = _mod(["+10% Health", "+20% Health", "+30% Health"], fusion_limit=1)
    assert parse_mod_effects(mod, 2).health == pytest.approx(0.2)


def test_undecodable_description_contributes_nothing():
    assert parse_mod_effects(_mod("not json at all"), 3) == EffectBag()
    assert parse_mod_effects(_mod(None), 0) == EffectBag()


# --- Display text ---


def test_sanitize_display_text():
    assert sanitize_display_text("+90% <DT_FIRE_COLOR>Heat") == "+90%  Heat"
    assert sanitize_display_text("a < b") == "a  b"
    assert sanitize_display_text(None) == ""


def test_mod_description_defaults_to_max_rank(serration):
    assert mod_description(serration) == "+165% Damage"
    assert mod_description(serration, 0) == "+15% Damage"
    assert mod_description(_mod(None)) == ""


def test_arcane_max_rank():
    level_stats = json.dumps([{"stats": [f"+{r}% Armor"]} for r in range(6)])
    assert arcane_max_rank(level_stats) == 5
    assert arcane_max_rank([{"stats": ["x"]}, {"stats": ["y"]}]) == 1
    assert arcane_max_rank(None) == DEFAULT_ARCANE_MAX_RANK


def test_arcane_max_rank_counts_any_level_list():
    assert arcane_max_rank("[]") == 0
    assert arcane_max_rank([]) == 0
    assert arcane_max_rank('[1, 2, 3]') == 2
    assert arcane_max_rank('{"stats": []}') == DEFAULT_ARCANE_MAX_RANK


def test_arcane_description_clamps_rank():
    level_stats = [{"stats": ["On Kill:", "+10% Damage"]}, {"stats": ["On Kill:", "+20% Damage"]}]
    assert arcane_description(level_stats) == "On Kill: +20% Damage"
    assert arcane_description(level_stats, 0) == "On Kill: +10% Damage"
    assert arcane_description(level_stats, 9) == "On Kill: +20% Damage"
    assert arcane_description("garbage") == ""
