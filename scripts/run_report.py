#!/usr/bin/env python3
"""
AI Reputation Report Runner

Runs a complete reputation analysis from the command line:
1. Backlink enrichment (SEMrush, optional)
2. Simulated AI search analyses (Claude + web search)
3. JSON or PDF output
4. Email delivery (Resend, optional)

Usage:
    # Set environment variables first (or use a .env file):
    export ANTHROPIC_API_KEY=your_key
    export SEMRUSH_API_KEY=your_key     # optional
    export RESEND_API_KEY=your_key      # only for --email

    # Company only, default engines:
    python scripts/run_report.py "Acme Corp" --website acme.com

    # Full brief:
    python scripts/run_report.py "Acme Corp" \
        --website https://www.acme.com --industry "industrial automation" \
        --leader "Jane Smith:CEO" --leader "Tom Lee:CTO" \
        --competitor "Globex|globex.com" \
        --engines chatgpt,gemini,perplexity \
        --output acme.pdf --email jane@acme.com
"""

import asyncio
import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


def parse_leader(value: str):
    """'Name:Title' -> Leader (title optional)."""
    from reputation.orchestration import Leader

    name, _, title = value.partition(":")
    return Leader(name=name.strip(), title=title.strip())


def parse_competitor(value: str):
    """'Name|website' -> Competitor (website optional)."""
    from reputation.orchestration import Competitor

    name, _, website = value.partition("|")
    return Competitor(name=name.strip(), website=website.strip() or None)


def print_progress(state) -> None:
    if state.total:
        print(f"  [{state.current}/{state.total}] {state.message}")


async def run_report(
    company: str,
    website: Optional[str] = None,
    industry: Optional[str] = None,
    keywords: Optional[str] = None,
    leaders: Optional[List[str]] = None,
    competitors: Optional[List[str]] = None,
    engines: Optional[str] = None,
    output: Optional[str] = None,
    email: Optional[str] = None,
    recipient_name: Optional[str] = None,
):
    """Run the analysis and write/send the report."""

    load_dotenv()

    from reputation.analyzer import ClaudeAnalysisGateway
    from reputation.collector import SemrushBacklinkGateway, create_client
    from reputation.delivery import DeliveryRequest, EmailDelivery
    from reputation.orchestration import (
        InvalidBriefError,
        ReputationAnalysisRunner,
        ResearchBrief,
        average_score,
        majority_sentiment,
    )
    from reputation.reporter import ReportGenerator
    from reputation.utils import get_settings

    settings = get_settings()

    missing = []
    if not settings.ANTHROPIC_API_KEY:
        missing.append("ANTHROPIC_API_KEY")
    if email and not settings.RESEND_API_KEY:
        missing.append("RESEND_API_KEY (required for --email)")

    if missing:
        print("ERROR: Missing required environment variables:")
        for var in missing:
            print(f"  - {var}")
        return None

    brief = ResearchBrief(
        company_name=company,
        website=website,
        industry=industry,
        keywords=keywords,
        leaders=[parse_leader(v) for v in leaders or []],
        competitors=[parse_competitor(v) for v in competitors or []],
    )
    engine_ids = (
        [e.strip() for e in engines.split(",") if e.strip()]
        if engines else settings.default_engine_ids
    )

    print(f"\n{'='*70}")
    print("AI REPUTATION REPORT")
    print(f"{'='*70}")
    print(f"Company:      {brief.company_name}")
    print(f"Website:      {brief.website or '(not specified)'}")
    print(f"Industry:     {brief.industry or '(not specified)'}")
    print(f"Leaders:      {', '.join(l.name for l in brief.named_leaders()) or '-'}")
    print(f"Competitors:  {', '.join(c.name for c in brief.named_competitors()) or '-'}")
    print(f"Engines:      {', '.join(engine_ids)}")
    print(f"{'='*70}\n")

    start_time = datetime.now()

    claude = ClaudeAnalysisGateway.from_settings(settings)
    semrush_client = create_client(settings)
    backlink_gateway = (
        SemrushBacklinkGateway(semrush_client, settings.TOP_BACKLINKS_LIMIT)
        if semrush_client else None
    )

    runner = ReputationAnalysisRunner(
        analysis_gateway=claude,
        backlink_gateway=backlink_gateway,
        on_progress=print_progress,
        timeout=settings.analysis_timeout,
    )

    try:
        report = await runner.run(brief, engine_ids)
    except InvalidBriefError as e:
        print(f"ERROR: {e}")
        return None
    finally:
        if semrush_client:
            await semrush_client.close()
        await claude.close()

    # =========================================================================
    # Output
    # =========================================================================
    output_path = None
    if output:
        output_path = Path(output)
        if output_path.suffix.lower() == ".pdf":
            generated = ReportGenerator().generate(report, recipient_name or company, company)
            output_path.write_bytes(generated.pdf_bytes)
        else:
            output_path.write_text(json.dumps(report.to_dict(), indent=2))
        print(f"\n✓ Report written to: {output_path}")

    if email:
        delivery = EmailDelivery(api_key=settings.RESEND_API_KEY, from_email=settings.FROM_EMAIL)
        email_result = await delivery.send_report(DeliveryRequest(
            recipient_name=recipient_name or company,
            recipient_company=company,
            recipient_email=email,
            report=report,
        ))
        if email_result.success:
            print(f"✓ Email sent to: {email}")
            print(f"✓ Message ID: {email_result.message_id}")
        else:
            print(f"✗ Email failed: {email_result.error}")

    # =========================================================================
    # Summary
    # =========================================================================
    duration = (datetime.now() - start_time).total_seconds()
    usage = claude.get_usage_summary()
    failed = sum(1 for result in report.iter_results() if result.error)

    print("\n" + "="*70)
    print("ANALYSIS COMPLETE")
    print("="*70)
    print(f"Duration: {duration:.1f} seconds")
    print(f"Results: {report.result_count} ({failed} failed)")
    print(f"AI Visibility Score: {average_score(report.company)}/10")
    print(f"Sentiment: {majority_sentiment(report.company)}")
    print(f"Cost: ${usage['estimated_cost']:.2f}")
    print("="*70 + "\n")

    return {
        "success": True,
        "output": str(output_path) if output_path else None,
        "results": report.result_count,
        "failed": failed,
        "duration": duration,
    }


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Run an AI reputation analysis and write or email the report"
    )
    parser.add_argument("company", help="Company name to analyze")
    parser.add_argument("--website", default=None, help="Company website")
    parser.add_argument("--industry", default=None, help="Industry")
    parser.add_argument("--keywords", default=None, help="Focus keywords for the company query")
    parser.add_argument(
        "--leader",
        action="append",
        default=[],
        help='Leader as "Name:Title" (repeatable)'
    )
    parser.add_argument(
        "--competitor",
        action="append",
        default=[],
        help='Competitor as "Name|website" (repeatable)'
    )
    parser.add_argument(
        "--engines",
        default=None,
        help="Comma-separated engine ids (default: DEFAULT_ENGINES setting)"
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Write the report to this path (.pdf renders the PDF, anything else writes JSON)"
    )
    parser.add_argument("--email", default=None, help="Email the PDF report to this address")
    parser.add_argument("--recipient-name", default=None, help="Name on the report cover")

    args = parser.parse_args()

    result = asyncio.run(run_report(
        company=args.company,
        website=args.website,
        industry=args.industry,
        keywords=args.keywords,
        leaders=args.leader,
        competitors=args.competitor,
        engines=args.engines,
        output=args.output,
        email=args.email,
        recipient_name=args.recipient_name,
    ))

    if not result:
        sys.exit(1)


if __name__ == "__main__":
    main()
