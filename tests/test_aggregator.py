"""
Test Suite for Result Aggregation

Summary metrics and routing of task results into the nested Report.
"""

import pytest

from reputation.orchestration import (
    AnalysisResult,
    Executor,
    Report,
    ResultAggregator,
    TaskPlanner,
    average_score,
    majority_sentiment,
)


def _results(*items):
    return {f"engine{i}": item for i, item in enumerate(items)}


class TestAverageScore:

    def test_zero_scores_excluded(self, make_result):
        by_engine = _results(make_result(8), make_result(6), make_result(0))
        assert average_score(by_engine) == 7.0

    def test_only_zero_or_error_entries(self, make_result):
        by_engine = _results(make_result(0), AnalysisResult.failed("boom"))
        assert average_score(by_engine) == 0

    def test_empty_map(self):
        assert average_score({}) == 0

    def test_rounded_to_one_decimal(self, make_result):
        by_engine = _results(make_result(7), make_result(8), make_result(8))
        assert average_score(by_engine) == 7.7

    def test_sentiment_score_used_when_confidence_missing(self):
        by_engine = _results(AnalysisResult(summary="x", sentiment_score=9.0))
        assert average_score(by_engine) == 9.0


class TestMajoritySentiment:

    def test_majority_wins(self, make_result):
        by_engine = _results(
            make_result(sentiment="positive"),
            make_result(sentiment="positive"),
            make_result(sentiment="negative"),
        )
        assert majority_sentiment(by_engine) == "positive"

    def test_tie_goes_to_first_seen(self, make_result):
        assert majority_sentiment(_results(
            make_result(sentiment="positive"), make_result(sentiment="negative"),
        )) == "positive"
        assert majority_sentiment(_results(
            make_result(sentiment="negative"), make_result(sentiment="positive"),
        )) == "negative"

    def test_case_insensitive(self, make_result):
        by_engine = _results(
            make_result(sentiment="Neutral"),
            make_result(sentiment="NEUTRAL"),
            make_result(sentiment="positive"),
        )
        assert majority_sentiment(by_engine) == "neutral"

    def test_unknown_when_nothing_usable(self, make_result):
        assert majority_sentiment({}) == "unknown"
        assert majority_sentiment(_results(make_result(sentiment=""), make_result(sentiment="  "))) == "unknown"

    def test_failed_results_count_as_unknown(self, make_result):
        by_engine = {
            "chatgpt": AnalysisResult.failed("boom"),
            "gemini": make_result(sentiment="positive"),
        }
        assert majority_sentiment(by_engine) == "unknown"

    def test_failures_do_not_outvote_a_majority(self, make_result):
        by_engine = _results(
            AnalysisResult.failed("timeout"),
            make_result(sentiment="positive"),
            make_result(sentiment="positive"),
        )
        assert majority_sentiment(by_engine) == "positive"


class TestFold:

    def test_routes_every_result(self, full_brief, make_result):
        plan = TaskPlanner().plan(full_brief, ["chatgpt", "gemini"])
        results = [make_result(i % 10) for i in range(plan.total)]

        report = ResultAggregator(full_brief).fold(plan.tasks, results)

        assert report.result_count == plan.total
        assert set(report.company) == {"chatgpt", "gemini"}
        assert [leader.name for leader in report.leadership] == ["Jane Smith", "Tom Lee"]
        for leader in report.leadership:
            assert set(leader.by_engine) == {"chatgpt", "gemini"}
            assert set(leader.press_opportunities) == {"chatgpt", "gemini"}
            assert set(leader.social_sentiment) == {"chatgpt", "gemini"}
        assert [entry.engine_id for entry in report.podcast_opportunities] == ["chatgpt", "gemini"]
        assert [comp.name for comp in report.competitors] == ["Globex", "Initech"]
        assert all(set(comp.by_engine) == {"chatgpt", "gemini"} for comp in report.competitors)

    def test_results_land_in_their_own_slot(self, acme_brief, make_result):
        plan = TaskPlanner().plan(acme_brief, ["chatgpt"])
        results = [make_result(summary=f"task {i}") for i in range(plan.total)]

        report = ResultAggregator(acme_brief).fold(plan.tasks, results)

        assert report.company["chatgpt"].summary == "task 0"
        jane = report.leadership[0]
        assert jane.by_engine["chatgpt"].summary == "task 1"
        assert jane.press_opportunities["chatgpt"].summary == "task 2"
        assert jane.social_sentiment["chatgpt"].summary == "task 3"
        assert report.podcast_opportunities[0].result.summary == "task 4"

    def test_one_failure_keeps_all_entries(self, acme_brief, make_result):
        plan = TaskPlanner().plan(acme_brief, ["chatgpt", "gemini"])
        results = [make_result() for _ in range(plan.total)]
        results[4] = AnalysisResult.failed("timeout")

        report = ResultAggregator(acme_brief).fold(plan.tasks, results)

        all_results = list(report.iter_results())
        assert len(all_results) == plan.total
        assert sum(1 for r in all_results if r.error) == 1
        assert report.leadership[0].social_sentiment["chatgpt"].error

    def test_length_mismatch_rejected(self, acme_brief, make_result):
        plan = TaskPlanner().plan(acme_brief, ["chatgpt"])
        with pytest.raises(ValueError):
            ResultAggregator(acme_brief).fold(plan.tasks, [make_result()])

    def test_backlink_profiles_attached_by_domain(self, full_brief, make_result, sample_profile):
        plan = TaskPlanner().plan(full_brief, ["chatgpt"])
        results = [make_result() for _ in range(plan.total)]
        backlinks = {"acme.com": sample_profile, "globex.com": None}

        report = ResultAggregator(full_brief).fold(plan.tasks, results, backlinks)

        assert report.backlink_profile is sample_profile
        assert report.competitors[0].backlink_profile is None
        assert report.competitors[1].backlink_profile is None

    def test_no_leaders_no_competitors(self, make_result):
        from reputation.orchestration import ResearchBrief

        brief = ResearchBrief(company_name="Solo")
        plan = TaskPlanner().plan(brief, ["claude"])

        report = ResultAggregator(brief).fold(plan.tasks, [make_result(), make_result()])

        assert report.leadership == []
        assert report.competitors == []
        assert report.backlink_profile is None
        assert len(report.podcast_opportunities) == 1

    @pytest.mark.asyncio
    async def test_fold_outcomes_matches_fold(self, acme_brief, recording_gateway):
        plan = TaskPlanner().plan(acme_brief, ["chatgpt"])
        outcomes = await Executor().run(plan.tasks, None, recording_gateway)

        report = ResultAggregator(acme_brief).fold_outcomes(outcomes)

        assert report.result_count == plan.total


class TestReportExport:

    def test_round_trip_through_dict(self, full_brief, make_result, sample_profile):
        plan = TaskPlanner().plan(full_brief, ["chatgpt"])
        results = [make_result(summary=f"r{i}") for i in range(plan.total)]
        results[0] = AnalysisResult.failed("rate limited")
        report = ResultAggregator(full_brief).fold(plan.tasks, results, {"acme.com": sample_profile})

        rebuilt = Report.from_dict(report.to_dict())

        assert rebuilt.to_dict() == report.to_dict()
        assert rebuilt.company["chatgpt"].error is True
        assert rebuilt.backlink_profile.top_backlinks[0].authority_score == 71

    def test_optional_parts_may_be_absent(self):
        report = Report.from_dict({"company_name": "Acme"})

        assert report.company == {}
        assert report.leadership == []
        assert report.backlink_profile is None
        assert report.result_count == 0


class TestAnalysisResultImmutability:

    def test_collections_are_frozen(self):
        source = {"url": "https://acme.com"}
        result = AnalysisResult(summary="x", sources=[source], strengths=["webinars"])

        source["url"] = "https://changed.example.com"

        assert result.sources[0]["url"] == "https://acme.com"
        assert isinstance(result.strengths, tuple)
        with pytest.raises(TypeError):
            result.sources[0]["url"] = "https://other.example.com"
        with pytest.raises(AttributeError):
            result.strengths.append("docs")

    def test_export_is_plain_json_data(self):
        import json

        result = AnalysisResult(summary="x", platforms=[{"platform": "LinkedIn"}], concerns=None)
        data = result.to_dict()

        assert data["platforms"] == [{"platform": "LinkedIn"}]
        assert data["concerns"] == []
        assert json.loads(json.dumps(data)) == data
