"""Versioned scoring tables loaded once from ``data/ats_rules.yaml``.

Every keyword list, weight, tier and canned text used by the analyzer lives
in the YAML file so the scoring model can be tuned without touching the
control flow. The parsed tables are cached for the life of the process and
treated as read-only.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from config import settings

logger = logging.getLogger(__name__)

SECTION_ORDER = (
    "Contact",
    "Summary",
    "Experience",
    "Education",
    "Skills",
    "Achievements",
    "Formatting",
)

Tier = tuple[int, int]


class AssessmentBand(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: int
    template: str


class Limits(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary_window: int
    experience_window: int
    education_window: int
    skills_window: int
    summary_keyword_prefix: int
    contact_top_lines: int
    min_good_gpa: float
    job_title_divisor: float
    line_length_range: tuple[int, int]
    caps_ratio: float
    optimal_words: tuple[int, int]
    short_words: int
    long_words: int
    keyword_report_size: int
    keyword_critical_count: int
    keyword_important_count: int
    job_zone_window: int
    job_keyword_cap: int
    job_missing_in_improvement: int
    max_improvements: int


class DetailedScoreRules(BaseModel):
    model_config = ConfigDict(frozen=True)

    baseline: int
    structure: dict[str, int]
    structure_max: int
    content_max: int
    skills_max: int
    action_verbs: list[str]
    tech_keywords: list[str]
    soft_keywords: list[str]
    verb_tiers: list[Tier]
    metric_tiers: list[Tier]
    bullet_tiers: list[Tier]
    skill_tiers: list[Tier]
    caps_ratio_percent: float
    short_words: int
    short_penalty: int
    long_words: int
    long_penalty: int
    rating_bands: list[tuple[int, str]]


class ScoringRules(BaseModel):
    """Typed view over the YAML scoring tables."""

    model_config = ConfigDict(frozen=True)

    version: str
    section_weights: dict[str, float]
    section_labels: dict[str, str]
    industry_keywords: dict[str, list[str]]
    action_verbs: list[str]
    soft_skills: list[str]
    section_markers: dict[str, list[str]]
    summary_skills: list[str]
    common_misspellings: list[str]
    job_stop_words: list[str]
    tiers: dict[str, list[Tier]]
    points: dict[str, dict[str, int]]
    limits: Limits
    assessment_bands: list[AssessmentBand]
    strength_thresholds: dict[str, int]
    impact_default: int
    impact: dict[str, int]
    what_to_add_default: list[str]
    what_to_add: dict[str, list[str]]
    suggestion_weights: dict[str, float]
    suggestion_weight_default: float
    detailed_score: DetailedScoreRules

    @field_validator("section_weights")
    @classmethod
    def _check_sections(cls, value: dict[str, float]) -> dict[str, float]:
        missing = [s for s in SECTION_ORDER if s not in value]
        if missing:
            raise ValueError(f"section_weights missing: {', '.join(missing)}")
        if any(w <= 0 or w > 1 for w in value.values()):
            raise ValueError("section weights must be in (0, 1]")
        return value

    @property
    def all_keywords(self) -> list[str]:
        """Keyword tables flattened in category order (tech, management, marketing, general)."""
        merged: list[str] = []
        for category in ("tech", "management", "marketing", "general"):
            merged.extend(self.industry_keywords.get(category, []))
        return merged

    def tier_points(self, name: str, count: int) -> int:
        """Points for ``count`` under the named tier table (first reached minimum wins)."""
        return points_for(self.tiers[name], count)


def points_for(tiers: list[Tier], count: int) -> int:
    for minimum, points in tiers:
        if count >= minimum:
            return points
    return 0


_RULES_CACHE: dict[str, ScoringRules] = {}


def load_rules(path: str | Path) -> ScoringRules:
    """Parse and validate a rules file. Raises RuntimeError on unreadable or malformed input."""
    path = Path(path)
    if not path.exists():
        raise RuntimeError(f"Scoring rules not found at '{path}'")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise RuntimeError(f"Invalid YAML in scoring rules '{path}': {exc}") from exc

    if not isinstance(raw, dict):
        raise RuntimeError(f"Invalid scoring rules '{path}': expected a top-level mapping.")

    rules = ScoringRules.model_validate(raw)
    logger.info("Loaded scoring rules v%s from %s", rules.version, path)
    return rules


def get_rules(path: str | Path | None = None) -> ScoringRules:
    """Return the cached rules for ``path`` (defaults to ``settings.rules_path``)."""
    key = str(path or settings.rules_path)
    if key not in _RULES_CACHE:
        _RULES_CACHE[key] = load_rules(key)
    return _RULES_CACHE[key]
