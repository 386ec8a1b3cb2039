"""Orchestrator: resume text (and optional job description) -> AnalysisReport.

Pipeline:
1. Section extractors (seven sub-scores)
2. Weighted aggregate score and assessment band
3. Content overview, present/absent checklist and summary text
4. Keyword report and, when given, job-description matching
5. Improvements, strengths and format checks
6. Detailed baseline score, suggestions, roadmap and ATS analysis block
"""

import logging

from models.responses import (
    AnalysisReport,
    ATSAnalysis,
    ContentQuality,
    DetailedScore,
    JobDescriptionMatch,
    KeywordMatch,
    KeywordMatching,
    ResumeLength,
    SectionCompletion,
    SectionResult,
    SectionStatus,
)
from services import recommendations
from services.content_gaps import (
    ContentOverview,
    analyze_content_gaps,
    build_summary_text,
    extract_content_overview,
)
from services.detailed_score import compute_detailed_score
from services.keyword_extractor import analyze_keywords, keyword_match_ratio, match_job_description
from services.patterns import get_patterns
from services.rules import get_rules
from services.section_parser import analyze_sections, round_half_up

logger = logging.getLogger(__name__)


def weighted_score(sections: list[SectionResult]) -> int:
    """Weighted average of the section scores, rounded half up. Returns 0-100."""
    total_weight = sum(s.weight for s in sections)
    if total_weight <= 0:
        return 0
    raw = sum(s.score * s.weight for s in sections) / total_weight
    return min(100, max(0, round_half_up(raw)))


def _compatibility(score: int) -> str:
    if score >= 80:
        return "Excellent"
    if score >= 70:
        return "Good"
    if score >= 60:
        return "Fair"
    return "Poor"


def _section_status(score: int) -> str:
    if score >= 70:
        return "Excellent"
    if score >= 50:
        return "Good"
    if score > 0:
        return "Needs Work"
    return "Missing"


def _section_completion(sections: list[SectionResult]) -> SectionCompletion:
    completed = [s for s in sections if s.exists and s.score > 0]
    return SectionCompletion(
        total_sections=len(sections),
        completed_sections=len(completed),
        incomplete_sections=[s.label for s in sections if not (s.exists and s.score > 0)],
        completion_percentage=round_half_up(len(completed) / len(sections) * 100) if sections else 0,
        breakdown=[
            SectionStatus(
                section=s.label,
                score=s.score,
                status=_section_status(s.score),
                weight=s.weight,
            )
            for s in sections
        ],
    )


def _content_quality(text: str) -> ContentQuality:
    patterns = get_patterns()
    verb_count = len(patterns.action_verbs_in(text))
    metric_count = patterns.count("metric", text)
    bullet_count = patterns.count("bullet", text)

    improvements = []
    if verb_count < 5:
        improvements.append("Use more action verbs")
    if metric_count == 0:
        improvements.append("Add quantified metrics")
    if bullet_count < 5:
        improvements.append("Use more bullet points")

    return ContentQuality(
        action_verb_count=verb_count,
        total_metrics=metric_count,
        has_quantified_results=metric_count > 0,
        bullet_point_usage=bullet_count,
        improvements=improvements,
    )


def _resume_length(text: str, word_count: int) -> ResumeLength:
    if word_count < 300:
        status, recommendation = "Too Short", "Add more details about your experience"
    elif word_count > 800:
        status, recommendation = "Too Long", "Consider condensing to fit on 2 pages"
    else:
        status, recommendation = "Optimal", "Good length for ATS"
    return ResumeLength(
        word_count=word_count,
        line_count=len(text.split("\n")),
        status=status,
        recommendation=recommendation,
    )


def _job_description_match(job_keywords: list[KeywordMatch]) -> JobDescriptionMatch:
    match_score = keyword_match_ratio(job_keywords)
    return JobDescriptionMatch(
        matched_keywords=sum(1 for k in job_keywords if k.found),
        total_keywords=len(job_keywords),
        match_score=match_score,
        missing_keywords=[k.word for k in job_keywords if not k.found][:10],
        present_keywords=[k.word for k in job_keywords if k.found][:10],
        analysis=f"Your resume matches {match_score}% of the job requirements.",
    )


def _checklist(
    text: str,
    overview: ContentOverview,
    sections: dict[str, SectionResult],
    bullet_count: int,
) -> dict[str, str]:
    patterns = get_patterns()
    contact = sections["Contact"].found
    return {
        "Simple text format (no graphics)": "Verified" if overview.word_count else "Notice",
        "Standard section headers": "Verified" if patterns.has("section_header", text) else "Warning",
        "Contact info present and clear": (
            "Verified" if contact is not None and contact.email and contact.phone else "Warning"
        ),
        "Consistent formatting": "Verified" if sections["Formatting"].score >= 70 else "Needs attention",
        "Proper use of bullet points": "Verified" if bullet_count > 5 else "Could improve",
    }


def _ats_analysis(
    text: str,
    score: int,
    section_list: list[SectionResult],
    overview: ContentOverview,
    keywords: list[KeywordMatch],
    job_keywords: list[KeywordMatch] | None,
) -> ATSAnalysis:
    sections = {s.section: s for s in section_list}
    content_quality = _content_quality(text)
    return ATSAnalysis(
        compatibility=_compatibility(score),
        keyword_matching=KeywordMatching(
            score=keyword_match_ratio(keywords),
            found_keywords=sum(1 for k in keywords if k.found),
            total_keywords=len(keywords),
        ),
        section_completion=_section_completion(section_list),
        content_quality=content_quality,
        resume_length=_resume_length(text, overview.word_count),
        job_description_match=_job_description_match(job_keywords) if job_keywords else None,
        checklist=_checklist(text, overview, sections, content_quality.bullet_point_usage),
    )


def _structure_points(detailed: DetailedScore) -> int:
    for component in detailed.components:
        if component.name == "Structure & Sections":
            return component.points
    return 0


def analyze(resume_text: str, job_description_text: str | None = None) -> AnalysisReport:
    """Score a resume and build the full report.

    Total over all strings: an empty resume yields zero sub-scores and the
    "Needs Work" band. A blank job description is treated as absent.
    """
    rules = get_rules()
    patterns = get_patterns()
    resume_text = resume_text or ""

    # --- Section extractors and weighted score ---
    section_list = analyze_sections(resume_text)
    sections = {s.section: s for s in section_list}
    score = weighted_score(section_list)

    # --- Content overview ---
    overview = extract_content_overview(resume_text)
    gaps = analyze_content_gaps(resume_text, overview)

    # --- Keywords ---
    keywords = analyze_keywords(resume_text)
    job_keywords = None
    if job_description_text and job_description_text.strip():
        job_keywords = match_job_description(resume_text, job_description_text)

    # --- Recommendations ---
    detailed = compute_detailed_score(resume_text)
    improvements = recommendations.build_improvements(sections, job_keywords)
    strengths = recommendations.build_strengths(
        sections,
        metric_count=patterns.count("metric", resume_text),
        structure_points=_structure_points(detailed),
    )

    logger.debug(
        "Analyzed resume: %d words, score=%d, detailed=%d, improvements=%d, job_keywords=%s",
        overview.word_count,
        score,
        detailed.score,
        len(improvements),
        len(job_keywords) if job_keywords is not None else "n/a",
    )

    return AnalysisReport(
        score=score,
        overall_assessment=recommendations.overall_assessment(score),
        section_scores=section_list,
        strengths=strengths,
        improvements=improvements[: rules.limits.max_improvements],
        keywords=keywords,
        job_description_keywords=job_keywords,
        format_analysis=recommendations.build_format_analysis(sections, overview.word_count),
        summary=build_summary_text(overview),
        content_present=gaps.present,
        content_absent=gaps.absent,
        detailed_score=detailed,
        suggestions=recommendations.build_suggestions(improvements, score),
        roadmap=recommendations.build_roadmap(improvements, score),
        ats_analysis=_ats_analysis(
            resume_text, score, section_list, overview, keywords, job_keywords
        ),
        rules_version=rules.version,
    )
