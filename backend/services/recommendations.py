"""Improvements, strengths and the suggestion/roadmap views built on them.

Improvements come from a fixed rule table over the section results. Each
improvement's ``scoreImpactPercentage`` is looked up by title in the rules
(default for unknown titles), and the suggestion and roadmap views turn that
into an estimated score increment by weighting it with the section weight.
"""

from models.responses import (
    FormatCheck,
    Improvement,
    KeywordMatch,
    Roadmap,
    RoadmapStep,
    SectionResult,
    Strength,
    SuggestionItem,
    SuggestionsSection,
)
from services.rules import get_rules

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}
PRIORITY_MINUTES = {"high": 15, "medium": 10, "low": 5}
PRIORITY_DIFFICULTY = {"high": "easy", "medium": "moderate", "low": "quick"}
MAX_ROADMAP_STEPS = 15

# title -> (section key, priority, description, impact)
IMPROVEMENT_TEXT: dict[str, tuple[str, str, str, str]] = {
    "Add Professional Email": (
        "Contact",
        "high",
        "Include a professional email address at the top of your resume. "
        "Use format: firstname.lastname@domain.com",
        "Critical - recruiters need to contact you",
    ),
    "Add Phone Number": (
        "Contact",
        "high",
        "Include your phone number. Format preferred: (XXX) XXX-XXXX",
        "Critical - alternative contact method",
    ),
    "Add LinkedIn Profile": (
        "Contact",
        "medium",
        "Include your LinkedIn URL. Format: linkedin.com/in/yourprofile",
        "Enhances credibility and networking",
    ),
    "Add Professional Summary": (
        "Summary",
        "high",
        "Write a 2-3 sentence professional summary highlighting your key skills, experience "
        "level, and career goals. Position it right after contact info.",
        "Creates immediate first impression",
    ),
    "Enhance Your Summary": (
        "Summary",
        "high",
        "Your summary needs more detail. Include: years of experience, key achievements, "
        "specific skills, and measurable results. Add industry keywords.",
        "Better screening by ATS and recruiters",
    ),
    "Create Work Experience Section": (
        "Experience",
        "high",
        "List your professional experience with job titles, companies, dates, and "
        "bullet-point accomplishments. Most recent first.",
        "Most important section for ATS",
    ),
    "Use Stronger Action Verbs": (
        "Experience",
        "high",
        "Start bullet points with power verbs like: Managed, Developed, Implemented, "
        "Achieved, Led, Increased, Optimized, Designed.",
        "Increases ATS matching and readability",
    ),
    "Add Quantified Results": (
        "Experience",
        "high",
        'Replace vague statements with metrics. Example: Instead of "improved sales", '
        'write "increased sales by 25% ($2M revenue)".',
        "Demonstrates measurable impact",
    ),
    "Add Education Section": (
        "Education",
        "high",
        "Include degree type, field of study, institution name, graduation date. "
        "Format: Degree Name, Major/Field - University Name (Year)",
        "Required by most ATS systems",
    ),
    "Complete Education Details": (
        "Education",
        "medium",
        "Add graduation date and degree type (B.S., M.S., etc). If GPA is 3.5+, include it.",
        "Provides required educational background",
    ),
    "Create Dedicated Skills Section": (
        "Skills",
        "high",
        "List 15-20 relevant skills. Organize by category: Technical Skills, "
        "Programming Languages, Tools, Soft Skills.",
        "Critical for keyword matching",
    ),
    "Expand Skills List": (
        "Skills",
        "medium",
        "Add more relevant skills. You have {skill_count} keywords. "
        "Aim for 15-20 industry-relevant skills.",
        "Increases keyword matching rate",
    ),
    "Improve Resume Formatting": (
        "Formatting",
        "medium",
        "Use consistent fonts, bullet points, and white space. "
        "Keep to 1 page for 0-5 years, 2 pages for 5+ years.",
        "Better ATS parsing and readability",
    ),
}

JOB_MATCH_SECTION = "Job Match"


def _improvement(title: str, **fmt) -> Improvement:
    rules = get_rules()
    section, priority, description, impact = IMPROVEMENT_TEXT[title]
    return Improvement(
        section=rules.section_labels[section],
        title=title,
        description=description.format(**fmt),
        priority=priority,
        score_impact_percentage=rules.impact.get(title, rules.impact_default),
        impact=impact,
        what_to_add=rules.what_to_add.get(title, rules.what_to_add_default),
    )


def _job_match_improvement(job_keywords: list[KeywordMatch]) -> Improvement | None:
    rules = get_rules()
    missing = [
        kw.word for kw in job_keywords if not kw.found and kw.importance == "critical"
    ][: rules.limits.job_missing_in_improvement]
    if not missing:
        return None

    title = f"Add Missing Job Requirements ({len(missing)})"
    description = (
        f"This job posting emphasizes: {', '.join(missing)}. "
        "Add these keywords where relevant in your experience."
    )
    return Improvement(
        section=JOB_MATCH_SECTION,
        title=title,
        description=description,
        priority="high",
        score_impact_percentage=rules.impact.get(title, rules.impact_default),
        impact="Critical for passing initial ATS screening",
        what_to_add=[f'Work "{word}" into your experience or skills' for word in missing],
    )


def build_improvements(
    sections: dict[str, SectionResult],
    job_keywords: list[KeywordMatch] | None = None,
) -> list[Improvement]:
    """Every improvement the rule table fires for, in rule order (uncapped)."""
    improvements: list[Improvement] = []

    found = sections["Contact"].found
    if found is None or not found.email:
        improvements.append(_improvement("Add Professional Email"))
    if found is None or not found.phone:
        improvements.append(_improvement("Add Phone Number"))
    if found is None or not found.linkedin:
        improvements.append(_improvement("Add LinkedIn Profile"))

    summary = sections["Summary"]
    if not summary.exists:
        improvements.append(_improvement("Add Professional Summary"))
    elif summary.score < 50:
        improvements.append(_improvement("Enhance Your Summary"))

    experience = sections["Experience"]
    if not experience.exists:
        improvements.append(_improvement("Create Work Experience Section"))
    elif (experience.action_verb_count or 0) < 5:
        improvements.append(_improvement("Use Stronger Action Verbs"))
    if experience.exists and experience.score < 70:
        improvements.append(_improvement("Add Quantified Results"))

    education = sections["Education"]
    if not education.exists:
        improvements.append(_improvement("Add Education Section"))
    elif education.score < 50:
        improvements.append(_improvement("Complete Education Details"))

    skills = sections["Skills"]
    if not skills.exists:
        improvements.append(_improvement("Create Dedicated Skills Section"))
    elif (skills.skill_count or 0) < 8:
        improvements.append(_improvement("Expand Skills List", skill_count=skills.skill_count or 0))

    if sections["Formatting"].score < 60:
        improvements.append(_improvement("Improve Resume Formatting"))

    if job_keywords:
        job_improvement = _job_match_improvement(job_keywords)
        if job_improvement is not None:
            improvements.append(job_improvement)

    return improvements


def build_strengths(
    sections: dict[str, SectionResult],
    metric_count: int,
    structure_points: int,
) -> list[Strength]:
    """Canned strength records for each threshold the resume clears."""
    thresholds = get_rules().strength_thresholds
    strengths: list[Strength] = []

    verb_count = sections["Experience"].action_verb_count or 0
    if verb_count >= thresholds["action_verbs"]:
        strengths.append(
            Strength(
                title="Strong Action Verbs",
                description=f"Experience uses {verb_count} distinct action verbs",
            )
        )

    if metric_count >= thresholds["metrics"]:
        strengths.append(
            Strength(
                title="Quantified Achievements",
                description=f"{metric_count} quantified results (percentages, amounts, counts)",
            )
        )

    if (sections["Skills"].keyword_points or 0) >= thresholds["keyword_points"]:
        strengths.append(
            Strength(
                title="Relevant Skills",
                description="Skills section covers a broad set of industry keywords",
            )
        )

    if structure_points >= thresholds["structure_points"]:
        strengths.append(
            Strength(
                title="Well-Structured Resume",
                description="Includes the standard sections ATS systems look for",
            )
        )

    found = sections["Contact"].found
    if found is not None and found.email and found.phone and found.linkedin:
        strengths.append(
            Strength(
                title="Complete Contact Information",
                description="Email, phone and LinkedIn profile are all present",
            )
        )

    return strengths


def overall_assessment(score: int) -> str:
    for band in get_rules().assessment_bands:
        if score >= band.min:
            return band.template.format(score=score)
    return get_rules().assessment_bands[-1].template.format(score=score)


def build_format_analysis(sections: dict[str, SectionResult], word_count: int) -> list[FormatCheck]:
    found = sections["Contact"].found
    contact_ok = found is not None and found.email and found.phone
    experience = sections["Experience"]
    education = sections["Education"]
    skill_count = sections["Skills"].skill_count or 0

    if skill_count >= 8:
        skills_status = "good"
    elif skill_count > 0:
        skills_status = "warning"
    else:
        skills_status = "error"

    if word_count <= 600:
        length_note = "Optimal (1 page)"
    elif word_count <= 800:
        length_note = "Slightly long (2 pages)"
    else:
        length_note = "Too long - consider condensing"

    return [
        FormatCheck(
            aspect="Contact Information",
            status="good" if contact_ok else "warning",
            message="All required contact details present" if contact_ok else "Missing email or phone",
        ),
        FormatCheck(
            aspect="Work Experience",
            status="good" if experience.exists else "error",
            message=f"{experience.job_count or 0} positions found" if experience.exists else "No experience listed",
        ),
        FormatCheck(
            aspect="Education",
            status="good" if education.exists else "warning",
            message=(
                f"{len(education.degrees or [])} degree(s) found"
                if education.exists
                else "Education section recommended"
            ),
        ),
        FormatCheck(
            aspect="Skills Listed",
            status=skills_status,
            message=f"{skill_count} skills found" if skill_count else "Add a dedicated skills section",
        ),
        FormatCheck(
            aspect="Length",
            status="good" if 300 <= word_count <= 800 else "warning",
            message=f"{word_count} words - {length_note}",
        ),
    ]


def score_increment(improvement: Improvement) -> float:
    """Estimated overall-score gain: the improvement's impact scaled by its section weight."""
    rules = get_rules()
    weight = rules.suggestion_weights.get(improvement.section, rules.suggestion_weight_default)
    return improvement.score_impact_percentage * weight


def _suggestion_items(improvements: list[Improvement]) -> list[SuggestionItem]:
    return [
        SuggestionItem(
            order=index,
            title=imp.title,
            section=imp.section,
            description=imp.description,
            impact=imp.impact or "Improves ATS compatibility",
            percentage_increase=round(score_increment(imp), 1),
            what_to_add=imp.what_to_add or [imp.description],
            estimated_time_minutes=PRIORITY_MINUTES[imp.priority],
            difficulty_level=PRIORITY_DIFFICULTY[imp.priority],
        )
        for index, imp in enumerate(improvements, start=1)
    ]


def build_suggestions(improvements: list[Improvement], current_score: int) -> SuggestionsSection:
    """Improvements grouped by priority, with the total estimated gain and projected score."""
    if not improvements:
        return SuggestionsSection(
            current_score=current_score,
            projected_score=current_score,
            summary="No suggestions - your resume already covers every checked area.",
        )

    grouped = {
        priority: [imp for imp in improvements if imp.priority == priority]
        for priority in PRIORITY_ORDER
    }
    total_gain = round(sum(score_increment(imp) for imp in improvements), 1)
    projected = round(min(100.0, current_score + total_gain), 1)

    return SuggestionsSection(
        current_score=current_score,
        total_suggestions=len(improvements),
        high_priority_count=len(grouped["high"]),
        medium_priority_count=len(grouped["medium"]),
        low_priority_count=len(grouped["low"]),
        high=_suggestion_items(grouped["high"]),
        medium=_suggestion_items(grouped["medium"]),
        low=_suggestion_items(grouped["low"]),
        estimated_score_improvement=total_gain,
        projected_score=projected,
        summary=(
            f"By implementing all {len(improvements)} suggestions, you could improve your score "
            f"from {current_score}% to {projected:g}% (+{total_gain:g}%)"
        ),
    )


def build_roadmap(improvements: list[Improvement], current_score: int) -> Roadmap:
    """Improvements ordered by priority then estimated gain, with a running projected score."""
    ordered = sorted(
        improvements,
        key=lambda imp: (PRIORITY_ORDER[imp.priority], -score_increment(imp)),
    )

    steps: list[RoadmapStep] = []
    cumulative = float(current_score)
    for number, imp in enumerate(ordered, start=1):
        increment = round(score_increment(imp), 2)
        before = cumulative
        cumulative = min(100.0, cumulative + increment)
        steps.append(
            RoadmapStep(
                step=number,
                title=imp.title,
                section=imp.section,
                priority=imp.priority,
                description=imp.description,
                current_score=round(before, 2),
                score_increment_percentage=increment,
                projected_score_after=round(cumulative, 2),
                what_to_add=imp.what_to_add or [imp.description],
                estimated_time_in_minutes=PRIORITY_MINUTES[imp.priority],
            )
        )

    return Roadmap(
        current_score=current_score,
        score_gap_to_close=float(100 - current_score),
        total_improvement_steps=len(steps),
        steps=steps[:MAX_ROADMAP_STEPS],
        estimated_time_to_complete=sum(step.estimated_time_in_minutes for step in steps),
        summary=(
            f"Follow these {len(steps)} improvements in order to reach 100% ATS score. "
            "High priority items should be completed first."
        ),
    )
