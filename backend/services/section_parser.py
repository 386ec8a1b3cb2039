"""Per-section resume scoring.

Each ``analyze_*`` function scans the full resume text for one section and
returns a :class:`SectionResult` with a 0-100 sub-score and human-readable
details. They are total: a missing section lowers the score, it never raises.
Point values and tiers come from the scoring rules table.
"""

import math

from models.responses import ContactFound, SectionResult
from services.patterns import get_patterns
from services.rules import Tier, get_rules, points_for


def count_words(text: str) -> int:
    return len(text.split())


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def tiered(tiers: list[Tier], count: int, messages: list[str], fallback: str) -> tuple[int, str]:
    """Points and detail message for the first tier ``count`` reaches.

    ``messages`` lines up with ``tiers``; ``{n}`` is replaced by the count.
    """
    for (minimum, _), message in zip(tiers, messages):
        if count >= minimum:
            return points_for(tiers, count), message.format(n=count)
    return 0, fallback.format(n=count)


def _result(section: str, score: int, exists: bool, details: list[str], **extras) -> SectionResult:
    rules = get_rules()
    return SectionResult(
        section=section,
        label=rules.section_labels.get(section, section),
        score=max(0, min(score, 100)),
        exists=exists,
        details=details,
        weight=rules.section_weights[section],
        **extras,
    )


def analyze_contact(text: str) -> SectionResult:
    """Email, phone and LinkedIn presence, plus a penalty when contact info isn't at the top."""
    rules = get_rules()
    patterns = get_patterns()
    points = rules.points["contact"]
    score = 0
    details: list[str] = []

    has_email = patterns.has("email", text)
    has_phone = patterns.has("phone", text)
    has_linkedin = patterns.has("linkedin", text)
    has_website = patterns.has("website", text)

    if has_email:
        score += points["email"]
        details.append("Email found")
    else:
        details.append("Missing email")

    if has_phone:
        score += points["phone"]
        details.append("Phone found")
    else:
        details.append("Missing phone")

    if has_linkedin:
        score += points["linkedin"]
        details.append("LinkedIn profile found")
    else:
        details.append("Missing LinkedIn profile")

    if has_website and not has_linkedin:
        score += points["website"]
        details.append("Portfolio/website found")

    top_lines = "\n".join(text.split("\n")[: rules.limits.contact_top_lines]).lower()
    if has_email and "email" not in top_lines and "@" not in top_lines:
        score = max(0, score - points["not_at_top_penalty"])
        details.append("Contact info not at top of resume")

    return _result(
        "Contact",
        score,
        exists=has_email or has_phone or has_linkedin,
        details=details,
        found=ContactFound(email=has_email, phone=has_phone, linkedin=has_linkedin),
    )


def analyze_summary(text: str) -> SectionResult:
    rules = get_rules()
    patterns = get_patterns()
    points = rules.points["summary"]

    window = patterns.window_after_heading("summary", text, rules.limits.summary_window)
    if window is None:
        return _result("Summary", 0, exists=False, details=["No professional summary/objective found"])

    score = points["presence"]
    details = ["Professional summary found"]

    words = count_words(window)
    if 20 <= words <= 50:
        score += points["optimal_length"]
        details.append("Optimal summary length (20-50 words)")
    elif words < 10:
        details.append("Summary too brief - add more details")
    elif words > 100:
        score += points["long_length"]
        details.append("Summary is longer than recommended")
    else:
        score += points["acceptable_length"]
        details.append("Summary length acceptable")

    # Keywords are looked for near the top of the resume, not just inside the window
    opening = text.lower()[: rules.limits.summary_keyword_prefix]
    keyword_hits = sum(
        1
        for kw in rules.industry_keywords.get("tech", []) + rules.industry_keywords.get("general", [])
        if kw.lower() in opening
    )
    gained, message = tiered(
        rules.tiers["summary_keywords"],
        keyword_hits,
        ["Contains industry keywords", "Some keywords present in summary"],
        "No industry keywords in summary",
    )
    score += gained
    details.append(message)

    if patterns.action_verbs_in(window):
        score += points["action_verb"]
        details.append("Contains action verbs")
    else:
        details.append("Add action verbs to summary")

    if patterns.has("metric", window):
        score += points["metrics"]
        details.append("Includes quantified results")
    else:
        details.append("Consider adding metrics to summary")

    return _result("Summary", score, exists=True, details=details)


def estimate_job_count(experience_text: str) -> int:
    """Rough number of positions from job-title and company-indicator hits."""
    patterns = get_patterns()
    hits = max(patterns.count("job_title", experience_text), patterns.count("company", experience_text))
    if hits == 0:
        return 0
    return math.ceil(hits / get_rules().limits.job_title_divisor)


def analyze_experience(text: str) -> SectionResult:
    rules = get_rules()
    patterns = get_patterns()

    window = patterns.window_after_heading("experience", text, rules.limits.experience_window)
    if window is None:
        return _result(
            "Experience",
            0,
            exists=False,
            details=["No work experience section found"],
            job_count=0,
            action_verb_count=0,
            metric_count=0,
        )

    score = rules.points["experience"]["presence"]
    details = ["Work experience section found"]

    job_count = estimate_job_count(window)
    gained, message = tiered(
        rules.tiers["experience_jobs"],
        job_count,
        ["Multiple positions found ({n}+)", "{n} position(s) found"],
        "Limited job experience shown",
    )
    score += gained
    details.append(message)

    verb_count = len(patterns.action_verbs_in(window))
    gained, message = tiered(
        rules.tiers["experience_action_verbs"],
        verb_count,
        ["Strong action verbs used ({n})", "Good action verbs ({n})", "Limited action verbs ({n})"],
        "No strong action verbs found",
    )
    score += gained
    details.append(message)

    metric_count = patterns.count("metric", window)
    gained, message = tiered(
        rules.tiers["experience_metrics"],
        metric_count,
        [
            "Many metrics ({n}) showing impact",
            "Good metrics ({n}) showing results",
            "Some metrics ({n}) present",
        ],
        "No quantified achievements - add metrics",
    )
    score += gained
    details.append(message)

    return _result(
        "Experience",
        score,
        exists=True,
        details=details,
        job_count=job_count,
        action_verb_count=verb_count,
        metric_count=metric_count,
    )


def analyze_education(text: str) -> SectionResult:
    rules = get_rules()
    patterns = get_patterns()
    points = rules.points["education"]

    window = patterns.window_after_heading("education", text, rules.limits.education_window)
    if window is None:
        return _result("Education", 0, exists=False, details=["No education section found"], degrees=[])

    score = points["presence"]
    details = ["Education section found"]

    # Each degree family is tested on its own so several can match
    degrees: list[str] = []
    for level, pattern in patterns.degrees.items():
        if pattern.search(window):
            score += points["per_degree"]
            degrees.append(level)
            details.append(f"{level} degree found")

    if patterns.has("institution", window):
        score += points["institution"]
        details.append("University/institution listed")
    else:
        details.append("University/institution not clearly listed")

    if patterns.has("graduation", window):
        score += points["graduation"]
        details.append("Graduation date included")
    else:
        details.append("Graduation date missing")

    gpa_match = patterns.search("gpa", window)
    if gpa_match:
        gpa = float(gpa_match.group(1))
        if gpa >= rules.limits.min_good_gpa:
            score += points["high_gpa"]
            details.append(f"Good GPA listed ({gpa})")
        else:
            details.append(f"GPA listed ({gpa})")

    return _result("Education", score, exists=True, details=details, degrees=degrees)


def analyze_skills(text: str) -> SectionResult:
    rules = get_rules()
    patterns = get_patterns()
    points = rules.points["skills"]

    window = patterns.window_after_heading("skills", text, rules.limits.skills_window)
    if window is None:
        return _result(
            "Skills",
            0,
            exists=False,
            details=["No dedicated skills section found"],
            skill_count=0,
            keyword_points=0,
        )

    score = points["presence"]
    details = ["Skills section found"]
    window_lower = window.lower()

    found = [kw for kw in rules.all_keywords if kw.lower() in window_lower]
    keyword_points, message = tiered(
        rules.tiers["skills_keywords"],
        len(found),
        ["Extensive skills listed ({n}+)", "Good variety of skills ({n})", "Moderate skills ({n})"],
        "Limited skills shown ({n})",
    )
    score += keyword_points
    details.append(message)

    if patterns.has("skill_category", window):
        score += points["categories"]
        details.append("Skills are well-organized by category")
    else:
        details.append("Consider organizing skills by category")

    if patterns.has("proficiency", window):
        score += points["proficiency"]
        details.append("Proficiency levels specified")
    else:
        details.append("Add proficiency levels to skills")

    has_soft = any(skill in window_lower for skill in rules.soft_skills)
    if found and has_soft:
        score += points["technical_and_soft"]
        details.append("Mix of technical and soft skills")
    else:
        details.append("Add both technical and soft skills")

    return _result(
        "Skills",
        score,
        exists=True,
        details=details,
        skill_count=len(found),
        keyword_points=keyword_points,
    )


def analyze_achievements(text: str) -> SectionResult:
    rules = get_rules()
    patterns = get_patterns()

    if not patterns.has("achievements", text):
        return _result("Achievements", 0, exists=False, details=["No achievements/awards section"])

    score = rules.points["achievements"]["presence"]
    details = ["Achievements section found"]

    gained, message = tiered(
        rules.tiers["achievements_metrics"],
        patterns.count("metric", text),
        [
            "Strong achievement metrics ({n})",
            "Good metrics in achievements",
            "Add quantified metrics to achievements",
        ],
        "Add quantified metrics to achievements",
    )
    score += gained
    details.append(message)

    return _result("Achievements", score, exists=True, details=details)


def analyze_formatting(text: str) -> SectionResult:
    """Layout signals over the whole text: line length, bullets, capitalization, length."""
    rules = get_rules()
    patterns = get_patterns()
    points = rules.points["formatting"]
    limits = rules.limits
    score = 0
    details: list[str] = []

    lines = [line for line in text.split("\n") if line.strip()]
    avg_line_length = sum(len(line) for line in lines) / len(lines) if lines else 0.0
    low, high = limits.line_length_range
    if low <= avg_line_length <= high:
        score += points["line_length"]
        details.append("Good line length and spacing")
    else:
        details.append("Consider adjusting spacing/line length")

    gained, message = tiered(
        rules.tiers["formatting_bullets"],
        patterns.count("bullet", text),
        ["Good use of bullet points ({n})", "Some bullet point formatting"],
        "Add more bullet points for clarity",
    )
    score += gained
    details.append(message)

    if patterns.count("all_caps", text) < len(lines) * limits.caps_ratio:
        score += points["consistent_caps"]
        details.append("Consistent formatting throughout")
    else:
        details.append("Reduce excessive capitalization")

    words = count_words(text)
    optimal_low, optimal_high = limits.optimal_words
    if optimal_low <= words <= optimal_high:
        score += points["optimal_word_count"]
        details.append(f"Optimal length ({words} words)")
    elif words < limits.short_words:
        details.append(f"Resume too short ({words} words)")
    elif words > limits.long_words:
        score += points["long_word_count"]
        details.append(f"Resume quite long ({words} words)")

    return _result("Formatting", score, exists=bool(text.strip()), details=details)


ANALYZERS = {
    "Contact": analyze_contact,
    "Summary": analyze_summary,
    "Experience": analyze_experience,
    "Education": analyze_education,
    "Skills": analyze_skills,
    "Achievements": analyze_achievements,
    "Formatting": analyze_formatting,
}


def analyze_sections(text: str) -> list[SectionResult]:
    """Run every section analyzer, in report order."""
    return [ANALYZERS[name](text) for name in ANALYZERS]
