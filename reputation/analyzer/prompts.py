"""
Analysis Prompts

Per analysis type: a focus sentence and the JSON shape the model must
answer with. The prompt asks Claude to simulate how a given AI search
engine would respond, after searching the web.
"""

from ..orchestration.models import AnalysisType


FOCUS = {
    AnalysisType.ENTITY: "",
    AnalysisType.LEADERSHIP: (
        "Focus on the person's online reputation, sentiment, thought leadership presence, "
        "media appearances, and speaking engagements."
    ),
    AnalysisType.PRESS: (
        "Focus on finding press opportunities, media outlets, industry publications, speaking "
        "engagements, and places where this person could contribute articles or be featured."
    ),
    AnalysisType.SOCIAL: (
        "Focus on analyzing social media presence, sentiment on LinkedIn, Twitter/X, industry "
        "forums, and online discussions. Look for positive mentions, concerns, thought leadership "
        "presence, and overall reputation."
    ),
    AnalysisType.PODCAST: (
        "Focus on finding specific podcasts that would be good for executives to appear on as "
        "guests. Include both industry-specific podcasts and broader business podcasts. Provide "
        "podcast names, topics, and audience size estimates."
    ),
    AnalysisType.COMPETITOR: (
        "Analyze this competitor's online presence, content strategy, backlink profile, and key "
        "differentiators."
    ),
}


JSON_STRUCTURES = {
    AnalysisType.ENTITY: """{
  "summary": "2-3 sentence summary of findings",
  "entityFound": true/false,
  "confidenceScore": 1-10,
  "sentimentScore": 1-10 (10 = very positive),
  "sentiment": "positive/neutral/negative",
  "topSources": [{"url": "url", "title": "title", "snippet": "description", "domainAuthority": 1-100}],
  "backlinks": [{"url": "url", "anchorText": "text", "domainAuthority": 1-100, "type": "editorial/directory/press"}],
  "pressOpportunities": [{"outlet": "name", "type": "press release/feature/interview", "relevance": "high/medium/low"}],
  "podcastOpportunities": [{"name": "podcast name", "topic": "relevant topic", "audienceSize": "small/medium/large"}],
  "recommendations": "specific actionable recommendation"
}""",
    AnalysisType.LEADERSHIP: """{
  "summary": "2-3 sentence summary of this person's online presence",
  "entityFound": true/false,
  "confidenceScore": 1-10,
  "sentimentScore": 1-10 (10 = very positive reputation),
  "sentiment": "positive/neutral/negative",
  "mediaAppearances": [{"outlet": "name", "type": "podcast/interview/article", "title": "if found"}],
  "topSources": [{"url": "url", "title": "title", "snippet": "description"}],
  "recommendations": "specific recommendation for improving thought leadership presence"
}""",
    AnalysisType.PRESS: """{
  "summary": "2-3 sentence summary of press/media opportunities",
  "entityFound": true/false,
  "confidenceScore": 1-10,
  "pressOpportunities": [{"outlet": "publication/media name", "type": "press release/feature/interview/contributed article/podcast/speaking", "relevance": "high/medium/low", "notes": "why this is a good fit"}],
  "recommendations": "specific actionable recommendation for getting press coverage"
}""",
    AnalysisType.SOCIAL: """{
  "summary": "2-3 sentence summary of social media sentiment and online reputation",
  "entityFound": true/false,
  "confidenceScore": 1-10,
  "sentimentScore": 1-10 (10 = very positive sentiment),
  "sentiment": "positive/neutral/negative",
  "platforms": [{"platform": "LinkedIn/Twitter/Forum name", "sentiment": "positive/neutral/negative", "notes": "key observations"}],
  "positiveHighlights": ["positive mention 1", "positive mention 2"],
  "concerns": ["concern or negative mention if any"],
  "recommendations": "specific recommendation for improving social sentiment"
}""",
    AnalysisType.PODCAST: """{
  "summary": "2-3 sentence summary of podcast opportunity landscape",
  "entityFound": true/false,
  "confidenceScore": 1-10,
  "podcastOpportunities": [{"name": "podcast name", "topic": "main topics covered", "audienceSize": "small/medium/large", "host": "host name if known", "fit": "why this is a good match"}],
  "recommendations": "strategy for approaching podcasts and what topics to pitch"
}""",
    AnalysisType.COMPETITOR: """{
  "summary": "2-3 sentence competitive analysis",
  "entityFound": true/false,
  "confidenceScore": 1-10,
  "strengths": ["strength1", "strength2"],
  "weaknesses": ["weakness1", "weakness2"],
  "keyBacklinks": [{"url": "url", "type": "press/editorial/directory", "domainAuthority": 1-100}],
  "contentStrategy": "brief description of their content approach",
  "recommendations": "how to compete or differentiate"
}""",
}


def build_prompt(query: str, engine_name: str, analysis_type: AnalysisType) -> str:
    """Build the user message for one analysis."""
    focus = FOCUS[analysis_type]
    return (
        f'You are simulating how the AI search engine "{engine_name}" would respond to a query. '
        f"Search the web thoroughly to find current, accurate information.{' ' + focus if focus else ''}\n\n"
        f"Query: {query}\n\n"
        "After searching, respond ONLY with valid JSON (no markdown code blocks, no extra text "
        "before or after):\n"
        f"{JSON_STRUCTURES[analysis_type]}"
    )
