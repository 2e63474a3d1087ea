# tests/test_insights.py
import json

from resume.ai.schemas import SchemaKind
from resume.insights import (
    ExtractionEngine,
    AnalysisEngine,
    RecommendationEngine,
    ComparisonEngine,
)
from resume.models import (
    RecommendationFilters,
    RecommendationType,
    ResumeStatus,
    PriceRange,
)

from tests.conftest import as_reply


class TestExtraction:

    def test_profile_has_every_section(self, invoker, no_wait_retry):
        invoker.queue(as_reply({"about": {"name": "Jane Doe"}, "skills": ["Python"]}))
        engine = ExtractionEngine(invoker, retry_policy=no_wait_retry)

        profile = engine.extract("Jane Doe. Skilled in Python.")

        assert profile["about"]["name"] == "Jane Doe"
        assert profile["skills"] == ["Python"]
        assert profile["about"]["email"] is None
        assert profile["about"]["phone"] is None
        assert profile["education"] == []
        assert profile["work"] == []
        assert profile["projects"] == []
        assert profile["languages"] == []
        assert profile["certifications"] == []
        assert profile["socialActivities"] == []
        assert "Jane Doe. Skilled in Python." in invoker.prompts[0]

    def test_requests_json_at_low_temperature(self, invoker, no_wait_retry):
        invoker.queue("{}")
        ExtractionEngine(invoker, retry_policy=no_wait_retry).extract("text")

        options = invoker.options[0]
        assert options.json_mode
        assert options.temperature == 0.1

    def test_long_text_is_truncated(self, invoker, no_wait_retry):
        invoker.queue("{}")
        engine = ExtractionEngine(invoker, max_resume_chars=20, retry_policy=no_wait_retry)

        engine.extract("a" * 20 + "TRUNCATED_TAIL")

        assert "a" * 20 in invoker.prompts[0]
        assert "TRUNCATED_TAIL" not in invoker.prompts[0]


class TestAnalysis:

    def test_missing_sections_and_score(self, invoker, no_wait_retry, store, alice, make_resume):
        resume = make_resume(alice, {"about": {"name": "Jane"}, "education": [], "work": []})
        invoker.queue(as_reply({
            "missingSections": ["education", "work"],
            "weaknesses": ["No experience listed"],
            "score": 35,
        }))
        engine = AnalysisEngine(invoker, store=store, retry_policy=no_wait_retry)

        report = engine.analyze(resume)

        assert set(report["missingSections"]) >= {"education", "work"}
        assert report["score"] == 35
        stored = store.find_by_id(resume.resume_id)
        assert stored.score == 35
        assert stored.status == ResumeStatus.ANALYZED

    def test_score_is_clamped_before_storing(self, invoker, no_wait_retry, store, alice, make_resume):
        resume = make_resume(alice)
        invoker.queue('{"score": 140}')

        report = AnalysisEngine(invoker, store=store, retry_policy=no_wait_retry).analyze(resume)

        assert report["score"] == 100
        assert store.find_by_id(resume.resume_id).score == 100

    def test_missing_score_keeps_stored_score(self, invoker, no_wait_retry, store, alice, make_resume):
        resume = make_resume(alice, score=70)
        invoker.queue('{"weaknesses": ["Too long"]}')

        report = AnalysisEngine(invoker, store=store, retry_policy=no_wait_retry).analyze(resume)

        assert report["score"] is None
        stored = store.find_by_id(resume.resume_id)
        assert stored.score == 70
        assert stored.status == ResumeStatus.STRUCTURED

    def test_reanalysis(self, invoker, no_wait_retry, store, alice, make_resume):
        resume = make_resume(alice)
        invoker.queue('{"score": 40}', '{"score": 65}')
        engine = AnalysisEngine(invoker, store=store, retry_policy=no_wait_retry)

        engine.analyze(resume)
        engine.analyze(resume)

        assert store.find_by_id(resume.resume_id).score == 65


class TestRecommendation:

    def test_no_resumes_skips_model(self, invoker, no_wait_retry):
        engine = RecommendationEngine(invoker, retry_policy=no_wait_retry)

        assert engine.recommend([]) == []
        assert invoker.calls == 0

    def test_unsatisfiable_filters_yield_empty_list(self, invoker, no_wait_retry, alice, make_resume):
        resume = make_resume(alice, {"skills": ["COBOL"]})
        invoker.queue("[]")
        filters = RecommendationFilters(
            types=[RecommendationType.CERTIFICATION],
            free=True,
            price_range=PriceRange(min=500, max=1000),
        )

        items = RecommendationEngine(invoker, retry_policy=no_wait_retry).recommend([resume], filters)

        assert items == []
        prompt = invoker.prompts[0]
        assert '"CERTIFICATION"' in prompt
        assert '"free": true' in prompt
        assert '"COBOL"' in prompt

    def test_items_are_validated(self, invoker, no_wait_retry, alice, make_resume):
        resume = make_resume(alice, {"skills": ["Python"]})
        invoker.queue(as_reply([{
            "title": "AWS Solutions Architect",
            "type": "CERTIFICATION",
            "level": "INTERMEDIATE",
            "provider": "AWS",
            "price": 150,
            "matchScore": 82,
        }]))

        items = RecommendationEngine(invoker, retry_policy=no_wait_retry).recommend([resume])

        assert items[0]["provider"] == "AWS"
        assert items[0]["skills"] == []
        assert items[0]["url"] is None


class TestComparison:

    def test_fewer_than_two_resumes(self, invoker, no_wait_retry, alice, make_resume):
        engine = ComparisonEngine(invoker, retry_policy=no_wait_retry)
        empty = engine.validator.empty(SchemaKind.COMPARISON)

        assert engine.compare([]) == empty
        assert engine.compare([make_resume(alice)]) == empty
        assert invoker.calls == 0

    def test_disjoint_skills(self, invoker, no_wait_retry, alice, make_resume):
        first = make_resume(alice, {"skills": ["Python"]})
        second = make_resume(alice, {"skills": ["Figma"]})
        invoker.queue(as_reply({
            "comparison": {
                "commonSkills": [],
                "uniqueSkillsByResume": {
                    first.resume_id: ["Python"],
                    second.resume_id: ["Figma"],
                },
            },
            "finalVerdict": "Different profiles",
        }))

        report = ComparisonEngine(invoker, retry_policy=no_wait_retry).compare([first, second])

        assert report["comparison"]["commonSkills"] == []
        assert report["comparison"]["uniqueSkillsByResume"] == {
            first.resume_id: ["Python"],
            second.resume_id: ["Figma"],
        }
        assert report["resumeSummaries"] == []
        assert report["finalVerdict"] == "Different profiles"

    def test_profiles_are_tagged_with_ids(self, invoker, no_wait_retry, alice, make_resume):
        first = make_resume(alice, {"skills": ["Python"]})
        second = make_resume(alice, {"skills": ["Go"]})
        invoker.queue("{}")

        ComparisonEngine(invoker, retry_policy=no_wait_retry).compare([first, second])

        prompt = invoker.prompts[0]
        assert json.dumps(first.resume_id) in prompt
        assert json.dumps(second.resume_id) in prompt

    def test_stored_resume_id_cannot_be_overridden(self, invoker, no_wait_retry, alice, make_resume):
        first = make_resume(alice, {"resumeId": "other-resume", "skills": ["Python"]})
        second = make_resume(alice, {"skills": ["Go"]})
        invoker.queue("{}")

        ComparisonEngine(invoker, retry_policy=no_wait_retry).compare([first, second])

        prompt = invoker.prompts[0]
        assert json.dumps(first.resume_id) in prompt
        assert "other-resume" not in prompt
