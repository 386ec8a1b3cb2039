import pytest

from models.responses import Improvement, KeywordMatch
from services import recommendations
from services.section_parser import analyze_sections


def _sections(text):
    return {s.section: s for s in analyze_sections(text)}


def _missing(*words):
    return [KeywordMatch(word=w, found=False, importance="critical") for w in words]


class TestImprovements:
    def setup_method(self):
        self.weak = _sections(
            "\nJane Smith\njane.smith@email.com\n\nEXPERIENCE\nWorked at Company A\n"
            "Did various tasks related to software development\n\nWorked at Company B\n"
            "Responsible for coding and testing\n\nEDUCATION\nBachelor's Degree in Computer Science\n\n"
            "SKILLS\ncoding, testing, development\n"
        )

    def test_rule_table_for_weak_resume(self):
        titles = [imp.title for imp in recommendations.build_improvements(self.weak)]
        assert titles == [
            "Add Phone Number",
            "Add LinkedIn Profile",
            "Add Professional Summary",
            "Use Stronger Action Verbs",
            "Add Quantified Results",
            "Complete Education Details",
            "Expand Skills List",
            "Improve Resume Formatting",
        ]

    def test_improvement_fields(self):
        improvements = {imp.title: imp for imp in recommendations.build_improvements(self.weak)}
        phone = improvements["Add Phone Number"]
        assert phone.section == "Contact Information"
        assert phone.priority == "high"
        assert phone.score_impact_percentage == 5
        assert phone.what_to_add
        assert "You have 0 keywords" in improvements["Expand Skills List"].description
        assert improvements["Improve Resume Formatting"].section == "Formatting & Length"

    def test_job_match_improvement(self):
        improvements = recommendations.build_improvements(self.weak, _missing("aws", "docker"))
        job = improvements[-1]
        assert job.section == "Job Match"
        assert job.title == "Add Missing Job Requirements (2)"
        assert "aws, docker" in job.description
        assert job.score_impact_percentage == 3

    def test_job_match_names_at_most_five(self):
        improvements = recommendations.build_improvements(
            self.weak, _missing("a1", "b2", "c3", "d4", "e5", "f6", "g7")
        )
        assert improvements[-1].title == "Add Missing Job Requirements (5)"
        assert "f6" not in improvements[-1].description

    def test_no_job_match_when_everything_found(self):
        found = [KeywordMatch(word="react", found=True, importance="critical")]
        improvements = recommendations.build_improvements(self.weak, found)
        assert all(imp.section != "Job Match" for imp in improvements)


def test_strong_resume_needs_few_improvements(strong_resume):
    titles = [imp.title for imp in recommendations.build_improvements(_sections(strong_resume))]
    assert titles == ["Improve Resume Formatting"]


def test_strengths_for_strong_resume(strong_resume):
    strengths = recommendations.build_strengths(
        _sections(strong_resume), metric_count=11, structure_points=15
    )
    assert [s.title for s in strengths] == [
        "Strong Action Verbs",
        "Quantified Achievements",
        "Relevant Skills",
        "Well-Structured Resume",
        "Complete Contact Information",
    ]


def test_strengths_thresholds(weak_resume):
    strengths = recommendations.build_strengths(_sections(weak_resume), metric_count=2, structure_points=9)
    assert strengths == []


@pytest.mark.parametrize(
    "score, prefix",
    [
        (95, "Excellent Resume (95%)"),
        (81, "Very Good Resume (81%)"),
        (70, "Good Resume (70%)"),
        (60, "Acceptable Resume (60%)"),
        (23, "Needs Work (23%)"),
    ],
)
def test_overall_assessment(score, prefix):
    assert recommendations.overall_assessment(score).startswith(prefix)


def test_format_analysis(strong_resume, weak_resume):
    strong = recommendations.build_format_analysis(_sections(strong_resume), 383)
    assert [c.aspect for c in strong] == [
        "Contact Information", "Work Experience", "Education", "Skills Listed", "Length",
    ]
    assert all(c.status == "good" for c in strong)
    assert strong[-1].message == "383 words - Optimal (1 page)"

    weak = {c.aspect: c for c in recommendations.build_format_analysis(_sections(weak_resume), 35)}
    assert weak["Contact Information"].status == "warning"
    assert weak["Skills Listed"].status == "error"
    assert weak["Length"].status == "warning"


class TestSuggestionsAndRoadmap:
    def setup_method(self):
        self.improvements = recommendations.build_improvements(
            _sections(
                "\nJane Smith\njane.smith@email.com\n\nEXPERIENCE\nWorked at Company A\n\n"
                "EDUCATION\nBachelor's Degree in Computer Science\n\nSKILLS\ncoding, testing\n"
            )
        )

    def test_score_increment_uses_section_weight(self):
        by_title = {imp.title: imp for imp in self.improvements}
        assert recommendations.score_increment(by_title["Add Quantified Results"]) == pytest.approx(3.0)
        assert recommendations.score_increment(by_title["Add Phone Number"]) == pytest.approx(0.25)

    def test_unknown_section_uses_default_weight(self):
        imp = Improvement(
            section="Other", title="Something", description="d", priority="low", score_impact_percentage=10
        )
        assert recommendations.score_increment(imp) == pytest.approx(0.8)

    def test_suggestions_grouped_by_priority(self):
        suggestions = recommendations.build_suggestions(self.improvements, 23)
        assert suggestions.total_suggestions == len(self.improvements)
        assert suggestions.high_priority_count == len(suggestions.high)
        assert suggestions.medium_priority_count == len(suggestions.medium)
        assert suggestions.high_priority_count + suggestions.medium_priority_count == len(self.improvements)
        assert all(item.estimated_time_minutes == 15 for item in suggestions.high)
        assert all(item.difficulty_level == "moderate" for item in suggestions.medium)
        assert suggestions.estimated_score_improvement == pytest.approx(9.6)
        assert suggestions.projected_score == pytest.approx(32.6)

    def test_projected_score_capped(self):
        suggestions = recommendations.build_suggestions(self.improvements, 98)
        assert suggestions.projected_score == 100

    def test_no_suggestions(self):
        suggestions = recommendations.build_suggestions([], 88)
        assert suggestions.total_suggestions == 0
        assert suggestions.projected_score == 88

    def test_roadmap_order(self):
        roadmap = recommendations.build_roadmap(self.improvements, 23)
        titles = [step.title for step in roadmap.steps]
        assert titles[:4] == [
            "Add Quantified Results",
            "Use Stronger Action Verbs",
            "Add Professional Summary",
            "Add Phone Number",
        ]
        assert titles[4] == "Expand Skills List"
        assert [step.step for step in roadmap.steps] == list(range(1, len(roadmap.steps) + 1))
        assert roadmap.steps[0].current_score == 23
        assert roadmap.steps[-1].projected_score_after == pytest.approx(32.6)
        assert roadmap.score_gap_to_close == 77
        assert roadmap.estimated_time_to_complete == 4 * 15 + 4 * 10

    def test_roadmap_projection_never_exceeds_100(self):
        roadmap = recommendations.build_roadmap(self.improvements, 95)
        assert all(step.projected_score_after <= 100 for step in roadmap.steps)

    def test_roadmap_limited_to_fifteen_steps(self):
        many = [
            Improvement(
                section="Skills", title=f"Step {i}", description="d", priority="low", score_impact_percentage=1
            )
            for i in range(20)
        ]
        roadmap = recommendations.build_roadmap(many, 50)
        assert len(roadmap.steps) == 15
        assert roadmap.total_improvement_steps == 20
        # Time covers every improvement, not only the steps listed
        assert roadmap.estimated_time_to_complete == 20 * 5
