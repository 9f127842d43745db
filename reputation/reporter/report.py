"""
AI Reputation Report Builder

Renders a Report as a single HTML document for WeasyPrint:
- Cover page
- Executive overview (visibility score, sentiment, authority, engine breakdown)
- Company analysis (backlink profile + per-engine findings)
- Leadership analysis (reputation scores, press opportunities)
- Competitor gap analysis
- Podcast opportunities
- Social sentiment
- Contact page

Sections without data are left out. Every value coming from the report is
HTML-escaped.
"""

import html
import logging
from datetime import datetime
from typing import Dict, Optional

from ..orchestration.aggregator import average_score, majority_sentiment
from ..orchestration.engines import engine_name
from ..orchestration.models import AnalysisResult, BacklinkProfile, Report
from .summary import format_number, score_color, score_label

logger = logging.getLogger(__name__)


PRIMARY_COLOR = "#E85D04"
SECONDARY_COLOR = "#F48C06"
DARK_COLOR = "#1a1a2e"
GRAY_COLOR = "#666666"

REPORT_CSS = f"""
@page {{ size: letter; margin: 0; }}
body {{ font-family: Helvetica, Arial, sans-serif; color: {DARK_COLOR}; margin: 0; }}
.page {{ page-break-after: always; padding: 0 50px 40px 50px; }}
.page:last-child {{ page-break-after: auto; }}
.header {{ background: {DARK_COLOR}; color: #ffffff; margin: 0 -50px 24px -50px; padding: 30px 50px; }}
.header h1 {{ margin: 0; font-size: 24px; }}
.header .subtitle {{ color: {SECONDARY_COLOR}; font-size: 12px; margin-top: 6px; }}
.cover, .contact {{ background: {DARK_COLOR}; color: #ffffff; text-align: center; min-height: 100%; padding-top: 80px; }}
.cover .brand {{ font-size: 14px; letter-spacing: 2px; }}
.cover h1 {{ color: {PRIMARY_COLOR}; font-size: 42px; margin: 120px 0 40px 0; }}
.cover .company {{ font-size: 24px; }}
.cover .prepared {{ margin-top: 80px; font-size: 14px; opacity: 0.7; }}
.cover .recipient {{ font-size: 18px; }}
.cover .date, .contact .link {{ color: {SECONDARY_COLOR}; }}
h2 {{ color: {PRIMARY_COLOR}; font-size: 16px; margin: 24px 0 10px 0; }}
h3 {{ font-size: 13px; margin: 16px 0 6px 0; }}
.muted {{ color: {GRAY_COLOR}; font-size: 10px; }}
.metric {{ font-size: 11px; margin: 4px 0; }}
.label {{ color: {PRIMARY_COLOR}; font-weight: bold; font-size: 11px; }}
table {{ width: 100%; border-collapse: collapse; font-size: 10px; }}
th {{ text-align: left; border-bottom: 2px solid {PRIMARY_COLOR}; padding: 4px; }}
td {{ padding: 4px; border-bottom: 1px solid #eeeeee; }}
ol {{ font-size: 10px; color: {GRAY_COLOR}; }}
"""


def _e(value) -> str:
    return html.escape(str(value)) if value is not None else ""


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit].rstrip() + "..."


class ReportBuilder:
    """
    Builds the AI reputation report HTML.

    Usage:
        html_doc = ReportBuilder().build(report, "Jane Smith", "Acme")
    """

    def __init__(self, brand_name: Optional[str] = None, contact_url: Optional[str] = None):
        self.brand_name = brand_name
        self.contact_url = contact_url

    def build(
        self,
        report: Report,
        recipient_name: str,
        recipient_company: str,
        generated_at: Optional[datetime] = None,
    ) -> str:
        """
        Build the complete HTML report.

        Args:
            report: Aggregated run report
            recipient_name: Person the report is prepared for
            recipient_company: Their company
            generated_at: Report date (defaults to now)

        Returns:
            HTML document
        """
        generated_at = generated_at or datetime.now()

        sections = [
            self._build_cover(report, recipient_name, recipient_company, generated_at),
            self._build_executive_overview(report),
            self._build_company_analysis(report),
            self._build_leadership(report),
            self._build_competitor_gap(report),
            self._build_podcasts(report),
            self._build_social_sentiment(report),
            self._build_contact(generated_at),
        ]
        content = "\n".join(section for section in sections if section)

        logger.info(
            f"Built report for {report.company_name}: {report.result_count} results, "
            f"{len(report.leadership)} leaders, {len(report.competitors)} competitors"
        )

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>AI Reputation Report - {_e(report.company_name)}</title>
    <style>{REPORT_CSS}</style>
</head>
<body>
{content}
</body>
</html>"""

    # ------------------------------------------------------------------
    # Building blocks
    # ------------------------------------------------------------------

    def _header(self, title: str, subtitle: Optional[str] = None) -> str:
        sub = f'<div class="subtitle">{_e(subtitle)}</div>' if subtitle else ""
        return f'<div class="header"><h1>{_e(title)}</h1>{sub}</div>'

    def _score_span(self, score: float) -> str:
        return (
            f'<span style="color: {score_color(score)}; font-weight: bold;">'
            f"{score:g}/10 ({score_label(score)})</span>"
        )

    def _top_links(self, profile: BacklinkProfile, limit: int) -> str:
        items = [
            f"<li>{_e(_truncate(link.source_url, 60))} (AS: {link.authority_score})</li>"
            for link in profile.top_backlinks[:limit]
        ]
        return f"<ol>{''.join(items)}</ol>" if items else ""

    def _result_text(self, result: AnalysisResult, summary_limit: int, recommendation_limit: int) -> str:
        if result.error:
            return f'<p class="muted">{_e(result.summary)}</p>'

        parts = [f'<p class="muted">{_e(_truncate(result.summary, summary_limit))}</p>']
        if result.recommendations:
            parts.append('<div class="label">Recommendation:</div>')
            parts.append(
                f'<p class="muted">{_e(_truncate(result.recommendations, recommendation_limit))}</p>'
            )
        return "\n".join(parts)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _build_cover(
        self,
        report: Report,
        recipient_name: str,
        recipient_company: str,
        generated_at: datetime,
    ) -> str:
        brand = f'<div class="brand">{_e(self.brand_name.upper())}</div>' if self.brand_name else ""
        return f"""
<div class="page cover">
    {brand}
    <h1>AI Reputation Report</h1>
    <div class="company">{_e(report.company_name or "Company Analysis")}</div>
    <div class="prepared">Prepared for:</div>
    <div class="recipient">{_e(recipient_name)}</div>
    <div>{_e(recipient_company)}</div>
    <p class="date">{generated_at.strftime("%B %d, %Y")}</p>
</div>"""

    def _build_executive_overview(self, report: Report) -> str:
        avg = average_score(report.company)
        metrics = [
            f'<p class="metric">Overall AI Visibility Score: {self._score_span(avg)}</p>',
            f'<p class="metric">Overall Sentiment: {_e(majority_sentiment(report.company).capitalize())}</p>',
        ]

        profile = report.backlink_profile
        if profile and profile.authority_score:
            metrics.append(f'<p class="metric">Domain Authority: {profile.authority_score}</p>')
        if profile and profile.totals.referring_domains:
            metrics.append(
                f'<p class="metric">Referring Domains: {format_number(profile.totals.referring_domains)}</p>'
            )

        breakdown = "".join(
            f"<tr><td>{_e(engine_name(engine_id))}</td><td>{self._score_span(result.score)}</td></tr>"
            for engine_id, result in report.company.items()
        )
        breakdown_html = (
            f"<h2>AI Search Engine Breakdown</h2><table>{breakdown}</table>" if breakdown else ""
        )

        return f"""
<div class="page">
    {self._header("Executive Overview", "AI Search Visibility Summary")}
    <h3>KEY METRICS</h3>
    {"".join(metrics)}
    {breakdown_html}
</div>"""

    def _build_company_analysis(self, report: Report) -> str:
        parts = [self._header("Company Analysis", report.company_name)]

        profile = report.backlink_profile
        if profile:
            parts.append("<h2>Backlink Profile (SEMrush)</h2>")
            if profile.authority_score is not None:
                parts.append(f'<p class="metric">Domain Authority Score: {profile.authority_score}</p>')
            parts.append(f'<p class="metric">Total Backlinks: {format_number(profile.totals.backlinks)}</p>')
            parts.append(
                f'<p class="metric">Referring Domains: {format_number(profile.totals.referring_domains)}</p>'
            )
            parts.append(f'<p class="metric">Follow Links: {format_number(profile.totals.follow_links)}</p>')
            top = self._top_links(profile, 8)
            if top:
                parts.append(f"<h3>Top Referring Domains:</h3>{top}")

        if report.company:
            parts.append("<h2>AI Search Engine Results</h2>")
            for engine_id, result in report.company.items():
                parts.append(f"<h3>{_e(engine_name(engine_id))}</h3>")
                parts.append(self._result_text(result, 400, 300))

        if len(parts) == 1:
            return ""
        return f'<div class="page">{"".join(parts)}</div>'

    def _build_leadership(self, report: Report) -> str:
        if not report.leadership:
            return ""

        parts = [self._header("Leadership Analysis", "Reputation & Press Opportunities")]
        for leader in report.leadership:
            parts.append(f"<h2>{_e(leader.name)}</h2>")
            if leader.title:
                parts.append(f'<p class="muted">{_e(leader.title)}</p>')

            if leader.by_engine:
                parts.append('<div class="label">Reputation Scores:</div><ul>')
                for engine_id, result in leader.by_engine.items():
                    value = "unavailable" if result.error else f"{result.score:g}/10"
                    parts.append(f'<li class="muted">{_e(engine_name(engine_id))}: {value}</li>')
                parts.append("</ul>")

            press = self._first_usable(leader.press_opportunities)
            if press:
                parts.append('<div class="label">Press Opportunities:</div>')
                parts.append(f'<p class="muted">{_e(_truncate(press.summary, 350))}</p>')
                outlets = [
                    f"<li>{_e(item.get('outlet', 'Unknown'))}"
                    f"{' - ' + _e(item['type']) if item.get('type') else ''}</li>"
                    for item in press.press_opportunities[:5]
                ]
                if outlets:
                    parts.append(f"<ol>{''.join(outlets)}</ol>")

        return f'<div class="page">{"".join(parts)}</div>'

    def _build_competitor_gap(self, report: Report) -> str:
        if not report.competitors:
            return ""

        def row(name: str, profile: Optional[BacklinkProfile], score: float, bold: bool = False) -> str:
            authority = profile.authority_score if profile and profile.authority_score is not None else "-"
            backlinks = format_number(profile.totals.backlinks) if profile else "-"
            domains = format_number(profile.totals.referring_domains) if profile else "-"
            label = f"<strong>{_e(name)}</strong>" if bold else _e(name)
            return (
                f"<tr><td>{label}</td><td>{authority}</td><td>{backlinks}</td>"
                f"<td>{domains}</td><td>{score:g}/10</td></tr>"
            )

        rows = [row(f"{report.company_name} (You)", report.backlink_profile, average_score(report.company), True)]
        for comp in report.competitors:
            rows.append(row(comp.name, comp.backlink_profile, average_score(comp.by_engine)))

        parts = [
            self._header("Competitor Gap Analysis", "Backlink & Visibility Comparison"),
            "<table><tr><th>Company</th><th>Authority</th><th>Backlinks</th>"
            "<th>Ref. Domains</th><th>AI Score</th></tr>",
            "".join(rows),
            "</table>",
        ]

        for comp in report.competitors:
            if comp.backlink_profile and comp.backlink_profile.top_backlinks:
                parts.append(f"<h3>{_e(comp.name)}'s Top Backlinks (Gap Opportunities):</h3>")
                parts.append(self._top_links(comp.backlink_profile, 5))

        for comp in report.competitors:
            result = self._first_usable(comp.by_engine)
            if result:
                parts.append(f"<h2>{_e(comp.name)}</h2>")
                parts.append(self._result_text(result, 400, 300))

        return f'<div class="page">{"".join(parts)}</div>'

    def _build_podcasts(self, report: Report) -> str:
        if not report.podcast_opportunities:
            return ""

        parts = [self._header("Podcast Opportunities", "Guest Appearance Recommendations")]
        for entry in report.podcast_opportunities:
            result = entry.result
            parts.append(f"<h2>Source: {_e(engine_name(entry.engine_id))}</h2>")
            parts.append(f'<p class="muted">{_e(_truncate(result.summary, 400))}</p>')

            podcasts = []
            for pod in result.podcast_opportunities[:5]:
                line = _e(pod.get("name", "Unknown"))
                if pod.get("topic"):
                    line += f" - {_e(pod['topic'])}"
                if pod.get("audienceSize"):
                    line += f" ({_e(pod['audienceSize'])})"
                podcasts.append(f"<li>{line}</li>")
            if podcasts:
                parts.append(f'<div class="label">Recommended Podcasts:</div><ol>{"".join(podcasts)}</ol>')

        return f'<div class="page">{"".join(parts)}</div>'

    def _build_social_sentiment(self, report: Report) -> str:
        leaders = [leader for leader in report.leadership if leader.social_sentiment]
        if not leaders:
            return ""

        parts = [self._header("Social Sentiment Analysis", "Online Reputation by Platform")]
        for leader in leaders:
            parts.append(f"<h2>{_e(leader.name)}</h2>")
            if leader.title:
                parts.append(f'<p class="muted">{_e(leader.title)}</p>')
            for engine_id, result in leader.social_sentiment.items():
                if result.error:
                    parts.append(f'<h3>{_e(engine_name(engine_id))}: unavailable</h3>')
                    continue
                parts.append(
                    f"<h3>{_e(engine_name(engine_id))}: {self._score_span(result.score)} "
                    f"({_e(result.sentiment)})</h3>"
                )
                parts.append(f'<p class="muted">{_e(_truncate(result.summary, 300))}</p>')

        return f'<div class="page">{"".join(parts)}</div>'

    def _build_contact(self, generated_at: datetime) -> str:
        who = f"Contact {_e(self.brand_name)}" if self.brand_name else "Contact us"
        link = f'<p class="link">{_e(self.contact_url)}</p>' if self.contact_url else ""
        return f"""
<div class="page contact">
    <h1>Ready to Improve Your <span style="color: {PRIMARY_COLOR};">AI Reputation?</span></h1>
    <p>{who} to discuss strategies for improving your AI visibility and online reputation.</p>
    {link}
    <p class="muted">Report generated: {generated_at.strftime("%Y-%m-%d")}</p>
</div>"""

    @staticmethod
    def _first_usable(by_engine: Dict[str, AnalysisResult]) -> Optional[AnalysisResult]:
        for result in by_engine.values():
            if not result.error:
                return result
        return None

