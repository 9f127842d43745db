"""
Test Suite for Analysis Response Decoding

Strict JSON decoding of model answers into AnalysisResult.
"""

import pytest

from reputation.analyzer import AnalysisDecodeError, decode_analysis, extract_json_object


ENTITY_ANSWER = """
I searched the web and found the following.

```json
{
  "summary": "Acme is a mid-sized automation vendor with steady press coverage.",
  "entityFound": true,
  "confidenceScore": 8,
  "sentimentScore": "7/10",
  "sentiment": "Positive",
  "topSources": [{"url": "https://acme.com", "title": "Acme", "domainAuthority": 55}],
  "backlinks": [{"url": "https://news.example.com", "anchorText": "Acme", "type": "press"}],
  "pressOpportunities": [{"outlet": "Automation World", "type": "feature", "relevance": "high"}],
  "podcastOpportunities": [{"name": "Robot Talk", "topic": "automation", "audienceSize": "medium"}],
  "recommendations": "Pitch a case study to Automation World."
}
```
"""


class TestDecodeAnalysis:

    def test_entity_answer(self):
        result = decode_analysis(ENTITY_ANSWER)

        assert result.summary.startswith("Acme is a mid-sized")
        assert result.entity_found is True
        assert result.confidence_score == 8.0
        assert result.sentiment_score == 7.0
        assert result.sentiment == "positive"
        assert result.sources[0]["url"] == "https://acme.com"
        assert result.backlinks[0]["type"] == "press"
        assert result.press_opportunities[0]["outlet"] == "Automation World"
        assert result.podcast_opportunities[0]["name"] == "Robot Talk"
        assert result.recommendations == "Pitch a case study to Automation World."
        assert result.error is False

    def test_competitor_answer_maps_type_specific_keys(self):
        result = decode_analysis(
            '{"summary": "Globex leads on content.", "confidenceScore": 6, '
            '"strengths": ["blog cadence", "webinars"], "weaknesses": ["thin docs"], '
            '"keyBacklinks": [{"url": "https://trade.example.com"}], '
            '"contentStrategy": "Weekly long-form posts.", '
            '"recommendations": ["Publish benchmarks", "Guest on trade podcasts"]}'
        )

        assert result.strengths == ("blog cadence", "webinars")
        assert result.weaknesses == ("thin docs",)
        assert result.backlinks == ({"url": "https://trade.example.com"},)
        assert result.content_strategy == "Weekly long-form posts."
        assert result.recommendations == "Publish benchmarks Guest on trade podcasts"

    def test_social_answer(self):
        result = decode_analysis(
            '{"summary": "Jane is well regarded.", "sentimentScore": 9, "sentiment": "positive", '
            '"platforms": [{"platform": "LinkedIn", "sentiment": "positive"}], '
            '"positiveHighlights": ["keynote at RoboCon"], "concerns": []}'
        )

        assert result.platforms[0]["platform"] == "LinkedIn"
        assert result.positive_highlights == ("keynote at RoboCon",)
        assert result.concerns == ()
        assert result.confidence_score is None
        assert result.score == 9.0

    @pytest.mark.parametrize("raw,expected", [
        (12, 10.0),
        (-3, 0.0),
        ("6.5", 6.5),
        ("about 4", 4.0),
        ("high", None),
        (None, None),
        (True, None),
    ])
    def test_score_coercion(self, raw, expected):
        import json

        result = decode_analysis(json.dumps({"summary": "x", "confidenceScore": raw}))
        assert result.confidence_score == expected

    def test_unrecognised_sentiment_is_unknown(self):
        assert decode_analysis('{"summary": "x", "sentiment": "mixed"}').sentiment == "unknown"

    def test_non_dict_list_items_dropped(self):
        result = decode_analysis('{"summary": "x", "topSources": ["https://a.com", {"url": "https://b.com"}]}')
        assert result.sources == ({"url": "https://b.com"},)


class TestDecodeFailures:

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "I could not find anything about this company.",
        '{"summary": "unterminated',
        '{"entityFound": false}',
        '{"summary": ""}',
        '{"summary": 42}',
    ])
    def test_rejected(self, text):
        with pytest.raises(AnalysisDecodeError):
            decode_analysis(text)

    def test_array_without_object(self):
        with pytest.raises(AnalysisDecodeError):
            extract_json_object("[1, 2, 3]")
