"""
Command-line prospect search.
"""
import argparse
import logging
import sys
from typing import Optional

import requests

from .ai import AIClassifier
from .client import SerpApiClient
from .config import get_config
from .data import NICHES, get_niche
from .errors import ProspectorError
from .models.scoring import RankedListing, SortMode
from .pipeline import ProspectSession


logger = logging.getLogger(__name__)


def _format_row(rank: int, row: RankedListing) -> str:
    listing = row.listing
    status = row.status.value if row.status else "-"
    premium = (
        f"{row.enrichment.premium_rank.value} {row.enrichment.premium_score}"
        if row.enrichment else "-"
    )
    reason = row.classification.reason if row.classification else ""
    return (
        f"{rank:>3}. {listing.title[:40]:<40} {status:<9} "
        f"{row.quality.total:>3} {row.quality.tier.value:<8} {premium:<12} {reason}"
    )


def build_parser() -> argparse.ArgumentParser:
    config = get_config()
    parser = argparse.ArgumentParser(description="Find and rank sales prospects on Google Maps")
    parser.add_argument("query", help="Search term, e.g. 'refacciones motosierras'")
    parser.add_argument("--location", "-l", default=None, help="Place appended to the query")
    parser.add_argument(
        "--niche", "-n",
        default=config.ranking.default_niche_id,
        choices=[n.id for n in NICHES],
        help="Niche used for relevance classification",
    )
    parser.add_argument(
        "--sort", "-s",
        default=config.ranking.default_sort_mode,
        choices=[m.value for m in SortMode],
    )
    parser.add_argument("--pages", type=int, default=1, help="Pages to fetch")
    parser.add_argument("--ai", action="store_true", help="Run AI batch classification")
    parser.add_argument("--enrich", type=int, default=0, metavar="N", help="Enrich the top N results")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = get_config()

    niche = get_niche(args.niche)
    session = ProspectSession(
        search_client=SerpApiClient(),
        niche=niche,
        sort_mode=args.sort,
    )

    try:
        session.search(args.query, args.location)
        for _ in range(args.pages - 1):
            if not session.has_more:
                break
            session.load_more()

        if args.ai and niche and config.enable_ai_classification:
            classifier = AIClassifier()
            if not classifier.llm_client.is_available():
                logger.warning("AI classification skipped: OPENAI_API_KEY not set")
            else:
                session.classifier = classifier
                try:
                    session.classify()
                except (ProspectorError, RuntimeError) as e:
                    # Local scores remain valid without AI verdicts
                    logger.error(f"AI classification failed: {e}")

        if args.enrich and config.enable_enrichment:
            for key in session.top_keys(args.enrich):
                session.enrich(key)

    except (ProspectorError, requests.RequestException) as e:
        logger.error(f"Search failed: {e}")
        return 1

    rows = session.ranked()
    print(f"Resultados ({len(rows)}) - {session.query}")
    for rank, row in enumerate(rows, 1):
        print(_format_row(rank, row))
    return 0


if __name__ == "__main__":
    sys.exit(main())
