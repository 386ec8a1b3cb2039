"""Keyword coverage for the resume and skill matching against a job description.

Two keyword views are produced:

* the internal report, which tests the head of the industry keyword tables
  against the resume and ranks them by position;
* the job-description match, which mines candidate skills from the posting
  (category regexes plus delimiter-split tokens) and checks each one in the
  resume.

Matching is a case-insensitive substring test in both cases.
"""

import logging
import re

from models.responses import KeywordMatch
from services.patterns import get_patterns
from services.rules import get_rules
from services.section_parser import round_half_up

logger = logging.getLogger(__name__)

_HAS_LETTER = re.compile(r"[a-zA-Z]")


def analyze_keywords(resume_text: str) -> list[KeywordMatch]:
    """Rank the first keywords of the combined tables and mark which the resume contains."""
    rules = get_rules()
    limits = rules.limits
    lower = resume_text.lower()
    critical_until = limits.keyword_critical_count
    important_until = critical_until + limits.keyword_important_count

    matches = []
    for rank, keyword in enumerate(rules.all_keywords[: limits.keyword_report_size]):
        if rank < critical_until:
            importance = "critical"
        elif rank < important_until:
            importance = "important"
        else:
            importance = "nice-to-have"
        matches.append(
            KeywordMatch(word=keyword, found=keyword.lower() in lower, importance=importance)
        )
    return matches


def keyword_match_ratio(matches: list[KeywordMatch]) -> int:
    """Percentage of matches found, 0 for an empty list."""
    if not matches:
        return 0
    return round_half_up(sum(1 for m in matches if m.found) / len(matches) * 100)


def extract_job_zone(job_description: str) -> str:
    """Text following each skills/requirements heading, or the whole posting if none is found."""
    patterns = get_patterns()
    window = get_rules().limits.job_zone_window

    zones = []
    for heading in patterns.job_zone_headings:
        for match in heading.finditer(job_description):
            zones.append(job_description[match.end(): match.end() + window])

    zone = " ".join(zones)
    if not zone.strip():
        return job_description
    return zone


def _is_potential_skill(term: str) -> bool:
    lower = term.lower()
    return (
        2 < len(lower) < 30
        and _HAS_LETTER.search(lower) is not None
        and not get_patterns().has("job_stop_word", lower)
    )


def extract_job_skills(job_description: str) -> list[str]:
    """Candidate skills from a job posting: regex hits first, then heuristic tokens.

    Lowercased, deduplicated in first-seen order, capped by the rules.
    """
    patterns = get_patterns()
    cap = get_rules().limits.job_keyword_cap
    zone = extract_job_zone(job_description)

    regex_hits: list[str] = []
    for family_pattern in patterns.job_skills.values():
        regex_hits.extend(m.group(0) for m in family_pattern.finditer(zone))

    tokens = [t.strip() for t in patterns.pattern("job_delimiter").split(zone)]
    potential = [t for t in tokens if t and _is_potential_skill(t)]

    skills: list[str] = []
    seen: set[str] = set()
    for raw in regex_hits + potential:
        skill = raw.lower().strip()
        if len(skill) <= 2 or skill in seen:
            continue
        seen.add(skill)
        skills.append(skill)
        if len(skills) >= cap:
            break
    return skills


def match_job_description(resume_text: str, job_description: str) -> list[KeywordMatch]:
    """Job skills checked against the resume.

    Every entry is reported as ``critical`` whether or not it was found;
    unlike the internal keyword report there is no ranking here.
    """
    lower = resume_text.lower()
    skills = extract_job_skills(job_description)
    logger.debug("Extracted %d job description skills", len(skills))
    return [
        KeywordMatch(word=skill, found=skill in lower, importance="critical")
        for skill in skills
    ]
