from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

SectionName = Literal[
    "Contact", "Summary", "Experience", "Education", "Skills", "Achievements", "Formatting"
]
Importance = Literal["critical", "important", "nice-to-have"]
Priority = Literal["high", "medium", "low"]


class Record(BaseModel):
    """Immutable record serialised with camelCase keys."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class ScoreComponent(Record):
    name: str
    points: int
    max_points: int
    details: list[str] = []

    @model_validator(mode="after")
    def _points_within_max(self) -> "ScoreComponent":
        if not 0 <= self.points <= self.max_points:
            raise ValueError(f"{self.name}: points {self.points} outside 0..{self.max_points}")
        return self


class ContactFound(Record):
    email: bool = False
    phone: bool = False
    linkedin: bool = False


class SectionResult(Record):
    section: SectionName
    label: str = ""
    score: int = Field(0, ge=0, le=100)
    exists: bool = False
    details: list[str] = []
    weight: float = 0.0
    # Extractor-specific extras; None when not applicable to the section
    found: ContactFound | None = None
    job_count: int | None = None
    action_verb_count: int | None = None
    metric_count: int | None = None
    degrees: list[str] | None = None
    skill_count: int | None = None
    keyword_points: int | None = None


class KeywordMatch(Record):
    word: str
    found: bool
    importance: Importance


class Improvement(Record):
    section: str
    title: str
    description: str
    priority: Priority
    score_impact_percentage: float
    impact: str = ""
    what_to_add: list[str] = []


class Strength(Record):
    title: str
    description: str


class FormatCheck(Record):
    aspect: str
    status: Literal["good", "warning", "error"]
    message: str


class DetailedScore(Record):
    score: int
    rating: str
    baseline: int
    components: list[ScoreComponent] = []
    length_penalty: int = 0
    details: list[str] = []
    recommendations: list[str] = []


class SuggestionItem(Record):
    order: int
    title: str
    section: str
    description: str
    impact: str
    percentage_increase: float
    what_to_add: list[str] = []
    estimated_time_minutes: int
    difficulty_level: str


class SuggestionsSection(Record):
    current_score: int
    total_suggestions: int = 0
    high_priority_count: int = 0
    medium_priority_count: int = 0
    low_priority_count: int = 0
    high: list[SuggestionItem] = []
    medium: list[SuggestionItem] = []
    low: list[SuggestionItem] = []
    estimated_score_improvement: float = 0.0
    projected_score: float = 0.0
    summary: str = ""


class RoadmapStep(Record):
    step: int
    title: str
    section: str
    priority: Priority
    description: str
    current_score: float
    score_increment_percentage: float
    projected_score_after: float
    what_to_add: list[str] = []
    estimated_time_in_minutes: int


class Roadmap(Record):
    current_score: int
    target_score: int = 100
    score_gap_to_close: float = 0.0
    total_improvement_steps: int = 0
    steps: list[RoadmapStep] = []
    estimated_time_to_complete: int = 0
    summary: str = ""


class KeywordMatching(Record):
    score: int
    found_keywords: int
    total_keywords: int


class SectionStatus(Record):
    section: str
    score: int
    status: str
    weight: float


class SectionCompletion(Record):
    total_sections: int
    completed_sections: int
    incomplete_sections: list[str] = []
    completion_percentage: int
    breakdown: list[SectionStatus] = []


class ContentQuality(Record):
    action_verb_count: int
    total_metrics: int
    has_quantified_results: bool
    bullet_point_usage: int
    improvements: list[str] = []


class ResumeLength(Record):
    word_count: int
    line_count: int
    status: str
    recommendation: str


class JobDescriptionMatch(Record):
    matched_keywords: int
    total_keywords: int
    match_score: int
    missing_keywords: list[str] = []
    present_keywords: list[str] = []
    analysis: str = ""


class ATSAnalysis(Record):
    compatibility: str
    keyword_matching: KeywordMatching
    section_completion: SectionCompletion
    content_quality: ContentQuality
    resume_length: ResumeLength
    job_description_match: JobDescriptionMatch | None = None
    checklist: dict[str, str] = {}


class AnalysisReport(Record):
    score: int
    overall_assessment: str
    section_scores: list[SectionResult] = []
    strengths: list[Strength] = []
    improvements: list[Improvement] = []
    keywords: list[KeywordMatch] = []
    job_description_keywords: list[KeywordMatch] | None = None
    format_analysis: list[FormatCheck] = []
    summary: str = ""
    content_present: list[str] = []
    content_absent: list[str] = []
    detailed_score: DetailedScore | None = None
    suggestions: SuggestionsSection | None = None
    roadmap: Roadmap | None = None
    ats_analysis: ATSAnalysis | None = None
    rules_version: str = ""

    def section(self, name: str) -> SectionResult:
        """Look up a section result by its enum name (e.g. ``"Education"``)."""
        for result in self.section_scores:
            if result.section == name:
                return result
        raise KeyError(name)


class ExtractTextResponse(Record):
    text: str
    file_name: str = ""
    word_count: int = 0
