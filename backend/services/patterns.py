"""Precompiled regular expressions shared by every analyzer.

Patterns are compiled once per rules version and exposed through
:class:`PatternLibrary`, so analyzers never build a regex per call.
"""

import re

from services.rules import ScoringRules, get_rules

# Contact info patterns
EMAIL_RE = r"[\w.-]+@[\w.-]+\.\w+"
PHONE_RE = r"(?:\+\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}"
LINKEDIN_RE = r"(?:https?://)?(?:www\.)?linkedin\.com/in/[\w-]+"
WEBSITE_RE = r"https?://\S+|www\.\S+"

# "40%", "$2,000K", "5+ years", "12 clients", "3 team members"
METRIC_RE = r"\d+%|\$[\d,]+[KM]?|\d+\+?\s+(?:years?|months?|projects?|clients?|team(?:\s+members?)?)"
BULLET_RE = r"[•\-*]"
YEARS_RE = r"(\d+)\+?\s*(?:years?|yrs?)\b"

# Section headings: the analyzers take a fixed-size window after the first hit
SECTION_HEADINGS: dict[str, str] = {
    "summary": r"\b(?:(?:professional|executive|career)\s+)?(?:summary|objective)\b|\babout\b",
    "experience": r"work\s+experience|experience|employment\s+history",
    "education": r"education|degree|university|school|college",
    "skills": r"technical\s+skills|skills|competencies|languages|tools",
}

JOB_TITLE_RE = (
    r"\b(?:engineer|manager|developer|analyst|designer|coordinator|assistant|"
    r"specialist|lead|director|supervisor)s?\b"
)
COMPANY_RE = r"\b(?:company|inc|ltd|llc|corp|co)\b\.?|\bat\s+"

DEGREE_PATTERNS: dict[str, list[str]] = {
    "bachelor": [
        r"b\.?s\.?", r"b\.?sc\.?", r"b\.?a\.", r"b\.?tech", r"b\.?eng",
        r"bachelor(?:'?s)?", r"undergrad(?:uate)?",
    ],
    "master": [
        r"m\.?s\.?", r"m\.?sc\.?", r"m\.a\.", r"m\.?tech", r"mba",
        r"master(?:'?s)?",
    ],
    "phd": [r"ph\.?d", r"doctorate", r"doctoral"],
    "associate": [r"associate(?:'?s)?", r"a\.a\.", r"a\.s\."],
}
INSTITUTION_RE = (
    r"\b\w+\s+(?:university|college|school|institute|academy)\b"
    r"|\b(?:university|college|school|institute|academy)\s+(?:of\s+)?\w+"
)
GRADUATION_RE = r"\b(?:19|20)\d{2}\b|graduat(?:ion|ed)"
GPA_RE = r"\b(?:gpa|g\.p\.a\.?)[:\s]+([0-4]\.\d{1,2})"

SKILL_CATEGORY_RE = r"technical|soft|languages|tools|frameworks|databases"
PROFICIENCY_RE = r"expert|advanced|intermediate|beginner|proficient|fluent"
ACHIEVEMENTS_RE = r"achievements|awards|honors|recognition|certifications|published"

# Job description: headings that open a skills/requirements zone
JOB_ZONE_HEADINGS: list[str] = [
    r"skills?[:\s]*(?:required|needed|preferred)?[:\s]*",
    r"requirements?[:\s]*",
    r"qualifications?[:\s]*",
    r"technical skills?[:\s]*",
    r"key skills?[:\s]*",
    r"competenc(?:y|ies)[:\s]*",
    r"what you'll need[:\s]*",
    r"what we look for[:\s]*",
    r"experience with[:\s]*",
]

# Job description: skill families matched inside the zone
JOB_SKILL_PATTERNS: dict[str, str] = {
    "languages": r"javascript|python|java|c\+\+|c#|php|ruby|go|golang|rust|swift|kotlin|typescript|scala|perl|r|matlab|dart|lua",
    "web": r"html|css|sass|scss|less|react|angular|vue|jquery|bootstrap|tailwind|webpack|babel|npm|yarn",
    "databases": r"sql|mysql|postgresql|mongodb|redis|cassandra|elasticsearch|oracle|sqlite|dynamodb",
    "cloud": r"aws|azure|gcp|google cloud|heroku|digitalocean|linode|vercel|netlify",
    "devops": r"docker|kubernetes|jenkins|gitlab|github actions|circleci|travis|terraform|ansible|puppet|chef",
    "vcs": r"git|svn|mercurial|bitbucket|github|gitlab",
    "os": r"linux|windows|macos|ubuntu|centos|debian|redhat|fedora",
    "methodology": r"agile|scrum|kanban|tdd|bdd|ci/cd|devops|microservices|rest api|graphql|oauth|jwt",
    "office": r"excel|word|powerpoint|outlook|sharepoint|salesforce|sap|oracle erp|jira|confluence|slack|teams",
    "data": r"tableau|power bi|looker|qlik|pandas|numpy|tensorflow|pytorch|scikit-learn|matplotlib|seaborn",
    "design": r"figma|sketch|adobe|photoshop|illustrator|indesign|xd|zeplin|invision|maze",
    "project_management": r"jira|trello|asana|monday|basecamp|clickup|notion|microsoft project",
}
JOB_TOKEN_DELIMITERS = r"[,;•\-*\n\r]+"

# Section presence checks for the detailed score's structure component
STRUCTURE_CHECKS: dict[str, str] = {
    "contact": f"{EMAIL_RE}|{PHONE_RE}",
    "summary": r"professional\s+summary|objective|about\s+me|executive\s+summary",
    "experience": r"work\s+experience|experience|employment|professional\s+history",
    "education": r"education|degree|university|college",
    "skills": r"skills|technical\s+skills|competencies|tools",
}


def _word_list(words: list[str]) -> re.Pattern:
    alternation = "|".join(re.escape(w) for w in words)
    return re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)


def _word_matchers(words: list[str]) -> dict[str, re.Pattern]:
    return {word: re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE) for word in words}


def _skill_term(body: str) -> re.Pattern:
    # Lookarounds instead of \b so terms ending in "+" or "#" still match
    return re.compile(rf"(?<![\w+#])(?:{body})(?![\w+#])", re.IGNORECASE)


class PatternLibrary:
    """Compiled matchers keyed by name, plus per-word matchers for verbs and misspellings."""

    def __init__(self, rules: ScoringRules) -> None:
        self.rules_version = rules.version
        ic = re.IGNORECASE
        self._patterns: dict[str, re.Pattern] = {
            "email": re.compile(EMAIL_RE),
            "phone": re.compile(PHONE_RE),
            "linkedin": re.compile(LINKEDIN_RE, ic),
            "website": re.compile(WEBSITE_RE, ic),
            "metric": re.compile(METRIC_RE, ic),
            "bullet": re.compile(BULLET_RE),
            "all_caps": re.compile(r"\b[A-Z][A-Z]+\b"),
            "all_caps_long": re.compile(r"\b[A-Z]{3,}\b"),
            "years": re.compile(YEARS_RE, ic),
            "job_title": re.compile(JOB_TITLE_RE, ic),
            "company": re.compile(COMPANY_RE, ic),
            "institution": re.compile(INSTITUTION_RE, ic),
            "graduation": re.compile(GRADUATION_RE, ic),
            "gpa": re.compile(GPA_RE, ic),
            "skill_category": re.compile(SKILL_CATEGORY_RE, ic),
            "proficiency": re.compile(PROFICIENCY_RE, ic),
            "achievements": re.compile(ACHIEVEMENTS_RE, ic),
            "section_header": re.compile(r"experience|education|skills|summary|objective", ic),
            "any_action_verb": _word_list(rules.action_verbs),
            "job_stop_word": _word_list(rules.job_stop_words),
            "job_delimiter": re.compile(JOB_TOKEN_DELIMITERS),
        }
        self.headings: dict[str, re.Pattern] = {
            name: re.compile(pattern, ic) for name, pattern in SECTION_HEADINGS.items()
        }
        self.degrees: dict[str, re.Pattern] = {
            level: re.compile(rf"\b(?:{'|'.join(patterns)})(?=\W|$)", ic)
            for level, patterns in DEGREE_PATTERNS.items()
        }
        self.job_zone_headings: list[re.Pattern] = [
            re.compile(pattern, ic) for pattern in JOB_ZONE_HEADINGS
        ]
        self.job_skills: dict[str, re.Pattern] = {
            family: _skill_term(body) for family, body in JOB_SKILL_PATTERNS.items()
        }
        self.structure_checks: dict[str, re.Pattern] = {
            key: re.compile(pattern, ic) for key, pattern in STRUCTURE_CHECKS.items()
        }
        self._verbs = _word_matchers(rules.action_verbs)
        self._detailed_verbs = _word_matchers(rules.detailed_score.action_verbs)
        self._misspellings = _word_matchers(rules.common_misspellings)

    def pattern(self, name: str) -> re.Pattern:
        return self._patterns[name]

    def search(self, name: str, text: str) -> re.Match | None:
        return self._patterns[name].search(text)

    def find_all(self, name: str, text: str) -> list[str]:
        """All non-overlapping matches of the named pattern, as full-match strings."""
        return [m.group(0) for m in self._patterns[name].finditer(text)]

    def count(self, name: str, text: str) -> int:
        return sum(1 for _ in self._patterns[name].finditer(text))

    def has(self, name: str, text: str) -> bool:
        return self._patterns[name].search(text) is not None

    def window_after_heading(self, section: str, text: str, size: int) -> str | None:
        """Text from the first heading hit through ``size`` more characters, or None."""
        match = self.headings[section].search(text)
        if match is None:
            return None
        return text[match.start():match.end() + size]

    def action_verbs_in(self, text: str) -> list[str]:
        """Distinct action verbs (as listed in the rules) appearing in ``text``."""
        return [verb for verb, pattern in self._verbs.items() if pattern.search(text)]

    def detailed_verbs_in(self, text: str) -> list[str]:
        """Distinct verbs from the detailed-score table appearing in ``text``."""
        return [verb for verb, pattern in self._detailed_verbs.items() if pattern.search(text)]

    def misspellings_in(self, text: str) -> list[str]:
        return [word for word, pattern in self._misspellings.items() if pattern.search(text)]


_LIBRARIES: dict[str, PatternLibrary] = {}


def get_patterns(rules: ScoringRules | None = None) -> PatternLibrary:
    """Return the compiled library for ``rules`` (the configured rules by default)."""
    rules = rules or get_rules()
    library = _LIBRARIES.get(rules.version)
    if library is None:
        library = PatternLibrary(rules)
        _LIBRARIES[rules.version] = library
    return library
