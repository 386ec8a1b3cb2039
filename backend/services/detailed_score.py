"""Baseline-plus-components ATS score.

A second, coarser view of the resume alongside the section-weighted score:
every resume starts at the baseline and gains points for structure, content
and skills, then loses a few for spelling, capitalization and length.
"""

from models.responses import DetailedScore, ScoreComponent
from services.patterns import get_patterns
from services.rules import Tier, get_rules
from services.section_parser import count_words

_STRUCTURE_MESSAGES = {
    "contact": "Contact information present",
    "summary": "Professional summary included",
    "experience": "Work experience section",
    "education": "Education section",
    "skills": "Skills section",
}

OK, WARN, FAIL = "ok", "warning", "fail"


def _tier_note(
    tiers: list[Tier], count: int, notes: list[tuple[str, str]], notes_out: list[tuple[str, str]]
) -> int:
    """Points for ``count``; the reached tier's note is appended to ``notes_out``."""
    for (minimum, points), (status, message) in zip(tiers, notes):
        if count >= minimum:
            notes_out.append((status, message.format(n=count)))
            return points
    return 0


def _structure(text: str) -> tuple[ScoreComponent, list[tuple[str, str]]]:
    rules = get_rules().detailed_score
    points = 0
    notes = []
    for key, pattern in get_patterns().structure_checks.items():
        if pattern.search(text):
            points += rules.structure[key]
            notes.append((OK, _STRUCTURE_MESSAGES[key]))
    points = min(points, rules.structure_max)
    component = ScoreComponent(
        name="Structure & Sections",
        points=points,
        max_points=rules.structure_max,
        details=[message for _, message in notes],
    )
    return component, notes


def _content(text: str) -> tuple[ScoreComponent, list[tuple[str, str]]]:
    rules = get_rules().detailed_score
    patterns = get_patterns()
    notes = []

    verb_points = _tier_note(
        rules.verb_tiers,
        len(patterns.detailed_verbs_in(text)),
        [(OK, "Excellent action verbs ({n})"), (OK, "Good action verbs ({n})"), (WARN, "Some action verbs ({n})")],
        notes,
    )
    metric_points = _tier_note(
        rules.metric_tiers,
        patterns.count("metric", text),
        [(OK, "Strong metrics ({n})"), (OK, "Good metrics ({n})"), (WARN, "Some metrics ({n})")],
        notes,
    )
    bullet_points = _tier_note(
        rules.bullet_tiers,
        patterns.count("bullet", text),
        [(OK, "Good formatting ({n} bullets)"), (WARN, "Limited bullets ({n})")],
        notes,
    )

    points = min(verb_points + metric_points + bullet_points, rules.content_max)
    component = ScoreComponent(
        name="Content Quality",
        points=points,
        max_points=rules.content_max,
        details=[message for _, message in notes],
    )
    return component, notes


def _skills(text: str) -> tuple[ScoreComponent, list[tuple[str, str]]]:
    rules = get_rules().detailed_score
    lower = text.lower()
    found = sum(1 for kw in rules.tech_keywords + rules.soft_keywords if kw in lower)
    notes: list[tuple[str, str]] = []
    points = _tier_note(
        rules.skill_tiers,
        found,
        [
            (OK, "Extensive relevant skills ({n})"),
            (OK, "Good skill coverage ({n})"),
            (WARN, "Moderate skills ({n})"),
            (WARN, "Limited skills ({n})"),
        ],
        notes,
    )
    points = min(points, rules.skills_max)

    component = ScoreComponent(
        name="Skills & Keywords",
        points=points,
        max_points=rules.skills_max,
        details=[message for _, message in notes],
    )
    return component, notes


def _formatting_penalty(text: str, word_count: int) -> tuple[ScoreComponent, list[tuple[str, str]]]:
    rules = get_rules().detailed_score
    patterns = get_patterns()
    penalty = 0
    notes = []

    misspelled = patterns.misspellings_in(text)
    if not misspelled:
        notes.append((OK, "Clean spelling"))
    elif len(misspelled) <= 2:
        penalty += 1
        notes.append((WARN, "Minor spelling issues"))
    else:
        penalty += 2
        notes.append((FAIL, "Multiple spelling errors"))

    caps = patterns.count("all_caps_long", text)
    caps_percent = caps / word_count * 100 if word_count else 0.0
    if caps_percent > rules.caps_ratio_percent:
        penalty += 1
        notes.append((WARN, "Too many capitals"))
    else:
        notes.append((OK, "Proper capitalization"))

    component = ScoreComponent(
        name="Formatting & Spelling",
        points=penalty,
        max_points=3,
        details=[message for _, message in notes],
    )
    return component, notes


def _length_penalty(word_count: int) -> tuple[int, tuple[str, str]]:
    rules = get_rules().detailed_score
    if word_count < rules.short_words:
        return rules.short_penalty, (FAIL, f"Resume too short ({word_count} words)")
    if word_count > rules.long_words:
        return rules.long_penalty, (WARN, f"Resume quite long ({word_count} words)")
    return 0, (OK, f"Good length ({word_count} words)")


def rating_for(score: int) -> str:
    for minimum, label in get_rules().detailed_score.rating_bands:
        if score >= minimum:
            return label
    return get_rules().detailed_score.rating_bands[-1][1]


def compute_detailed_score(text: str) -> DetailedScore:
    """Baseline score adjusted by the structure/content/skills components and penalties.

    The formatting component's ``points`` holds a penalty and is subtracted.
    """
    rules = get_rules().detailed_score
    word_count = count_words(text)

    structure, structure_notes = _structure(text)
    content, content_notes = _content(text)
    skills, skills_notes = _skills(text)
    formatting, formatting_notes = _formatting_penalty(text, word_count)
    length_penalty, length_note = _length_penalty(word_count)

    raw = (
        rules.baseline
        + structure.points
        + content.points
        + skills.points
        - formatting.points
        - length_penalty
    )
    score = max(0, min(100, raw))

    notes = structure_notes + content_notes + skills_notes + formatting_notes + [length_note]
    return DetailedScore(
        score=score,
        rating=rating_for(score),
        baseline=rules.baseline,
        components=[structure, content, skills, formatting],
        length_penalty=length_penalty,
        details=[message for _, message in notes],
        recommendations=[message for status, message in notes if status != OK][:5],
    )
