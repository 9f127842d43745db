"""
AI Reputation Report

Builds a reputation report for a company, its leadership and its competitors:
1. Plans a bounded set of simulated AI-search queries per selected engine
2. Runs them one at a time against Claude (web search enabled)
3. Enriches the company and competitors with SEMrush backlink metrics
4. Renders a PDF report and delivers it via email
"""

__version__ = "0.1.0"
