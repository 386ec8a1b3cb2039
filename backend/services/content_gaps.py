"""Content overview, present/absent checklist, and the free-text resume summary."""

from pydantic import BaseModel, ConfigDict

from services.patterns import get_patterns
from services.rules import get_rules
from services.section_parser import count_words


class ContentOverview(BaseModel):
    """Coarse facts about the resume used by the checklist and summary text."""

    model_config = ConfigDict(frozen=True)

    has_email: bool
    has_phone: bool
    has_linkedin: bool
    sections: dict[str, bool]
    estimated_years: int | None
    found_skills: list[str]
    word_count: int


class ContentGaps(BaseModel):
    model_config = ConfigDict(frozen=True)

    present: list[str]
    absent: list[str]


def extract_content_overview(text: str) -> ContentOverview:
    rules = get_rules()
    patterns = get_patterns()
    lower = text.lower()

    sections = {
        name: any(marker in lower for marker in markers)
        for name, markers in rules.section_markers.items()
    }

    years_match = patterns.search("years", text)
    estimated_years = int(years_match.group(1)) if years_match else None

    return ContentOverview(
        has_email=patterns.has("email", text),
        has_phone=patterns.has("phone", text),
        has_linkedin=patterns.has("linkedin", text),
        sections=sections,
        estimated_years=estimated_years,
        found_skills=[skill for skill in rules.summary_skills if skill in lower],
        word_count=count_words(text),
    )


def analyze_content_gaps(text: str, overview: ContentOverview) -> ContentGaps:
    """Split the expected-content checklist into what the resume has and what it lacks."""
    patterns = get_patterns()
    sections = overview.sections
    present: list[str] = []
    absent: list[str] = []

    required = {
        "Contact Information": overview.has_email and overview.has_phone,
        "Professional Summary/Objective": sections.get("summary", False),
        "Work Experience": sections.get("experience", False),
        "Education": sections.get("education", False),
        "Skills Section": sections.get("skills", False),
        "LinkedIn Profile": overview.has_linkedin,
        "Portfolio/Projects": sections.get("projects", False),
        "Certifications": sections.get("certifications", False),
    }
    for item, exists in required.items():
        (present if exists else absent).append(item)

    if patterns.has("metric", text):
        present.append("Quantified Results")
    else:
        absent.append("Quantified Results (numbers, percentages, metrics)")

    if patterns.has("any_action_verb", text):
        present.append("Action Verbs")
    else:
        absent.append("Strong Action Verbs")

    if patterns.has("bullet", text):
        present.append("Bullet Point Formatting")
    else:
        absent.append("Bullet Point Formatting")

    return ContentGaps(present=present, absent=absent)


def build_summary_text(overview: ContentOverview) -> str:
    lines = [f"**Resume Overview**: {overview.word_count} words"]

    if overview.estimated_years is not None:
        lines.append(f"**Experience**: Approximately {overview.estimated_years}+ years")

    detected = [name.title() for name, present in overview.sections.items() if present]
    lines.append(f"**Sections Included**: {', '.join(detected) or 'None detected'}")

    contact = [
        label
        for label, present in (
            ("Email", overview.has_email),
            ("Phone", overview.has_phone),
            ("LinkedIn", overview.has_linkedin),
        )
        if present
    ]
    lines.append(f"**Contact Info**: {', '.join(contact) if contact else 'Incomplete'}")

    if overview.found_skills:
        lines.append(f"**Key Skills Found**: {', '.join(overview.found_skills[:5])}")

    return "\n".join(lines)
