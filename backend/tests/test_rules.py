import pytest
import yaml

from config import DEFAULT_RULES_PATH
from services.rules import SECTION_ORDER, get_rules, load_rules, points_for


def test_section_weights_sum_to_one():
    weights = get_rules().section_weights
    assert set(weights) == set(SECTION_ORDER)
    assert sum(weights.values()) == pytest.approx(1.0)


def test_default_rules_are_cached():
    assert get_rules() is get_rules()
    assert get_rules(DEFAULT_RULES_PATH) is get_rules(str(DEFAULT_RULES_PATH))


def test_rules_version_present():
    assert get_rules().version


def test_keyword_tables_ordered_by_category():
    rules = get_rules()
    keywords = rules.all_keywords
    assert keywords[0] == "JavaScript"
    assert keywords[: len(rules.industry_keywords["tech"])] == rules.industry_keywords["tech"]
    assert len(keywords) >= rules.limits.keyword_report_size


def test_points_for_first_reached_tier_wins():
    tiers = [(10, 25), (5, 15), (1, 10)]
    assert points_for(tiers, 12) == 25
    assert points_for(tiers, 10) == 25
    assert points_for(tiers, 7) == 15
    assert points_for(tiers, 1) == 10
    assert points_for(tiers, 0) == 0


def test_tier_points_uses_named_table():
    rules = get_rules()
    assert rules.tier_points("skills_keywords", 15) == 30
    assert rules.tier_points("skills_keywords", 4) == 0
    # Zero minimum: achievements always earn the lowest tier
    assert rules.tier_points("achievements_metrics", 0) == 15


def test_impact_default_for_unknown_title():
    rules = get_rules()
    assert rules.impact_default == 3
    assert "Add Missing Job Requirements (2)" not in rules.impact


def test_load_rules_missing_file(tmp_path):
    with pytest.raises(RuntimeError, match="not found"):
        load_rules(tmp_path / "nope.yaml")


def test_load_rules_invalid_yaml(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("version: [unclosed\n", encoding="utf-8")
    with pytest.raises(RuntimeError, match="Invalid YAML"):
        load_rules(path)


def test_load_rules_not_a_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(RuntimeError, match="top-level mapping"):
        load_rules(path)


def test_load_rules_rejects_missing_section_weight(tmp_path):
    text = DEFAULT_RULES_PATH.read_text(encoding="utf-8").replace("  Formatting: 0.10\n", "", 1)
    path = tmp_path / "rules.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError, match="Formatting"):
        load_rules(path)


def test_word_tables_hold_only_strings():
    raw = yaml.safe_load(DEFAULT_RULES_PATH.read_text(encoding="utf-8"))
    detailed = raw["detailed_score"]
    tables = [
        raw["action_verbs"],
        raw["soft_skills"],
        raw["summary_skills"],
        raw["common_misspellings"],
        raw["job_stop_words"],
        detailed["action_verbs"],
        detailed["tech_keywords"],
        detailed["soft_keywords"],
        *raw["industry_keywords"].values(),
        *raw["section_markers"].values(),
    ]
    for table in tables:
        assert all(isinstance(word, str) for word in table), table


def test_stop_words_keep_yaml_boolean_words():
    stop_words = get_rules().job_stop_words
    assert "on" in stop_words
    assert "no" in stop_words


def test_management_table_is_empty():
    rules = get_rules()
    assert rules.industry_keywords["management"] == []
    tech = rules.industry_keywords["tech"]
    marketing = rules.industry_keywords["marketing"]
    assert rules.all_keywords[: len(tech) + len(marketing)] == tech + marketing
