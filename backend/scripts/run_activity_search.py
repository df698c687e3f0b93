"""
Run the staff workflow end to end: transcript → summary → staff suggestion → activity search.

Run from backend with:
  python scripts/run_activity_search.py "Family of three in Paris, Nov 10-17, kids, $200 per person"
  python scripts/run_activity_search.py --transcript path/to/transcript.txt --notes "Prefers mornings"

Requires GCP_PROJECT and GCP_LOCATION in env (or .env) unless MOCK_MODE=true.
OPENAI_API_KEY is optional (rule-based summary/suggestion without it).
"""

import argparse
import os
import sys
from textwrap import shorten

from dotenv import load_dotenv

load_dotenv()

# Add backend root so "traveldesk" is importable from scripts/ or from backend/
_backend_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _backend_root not in sys.path:
    sys.path.insert(0, _backend_root)

from traveldesk.config import Settings
from traveldesk.conversation import ConversationSession
from traveldesk.errors import ConfigurationError
from traveldesk.logging_config import configure_logging
from traveldesk.search import SearchRequest, run_activity_search


def _trunc(s: str, max_len: int = 72) -> str:
    return shorten(s, width=max_len, placeholder="…") if s else ""


def _section(title: str) -> None:
    print()
    print("=" * 80)
    print(f"  {title}")
    print("=" * 80)


def _sub(title: str) -> None:
    print(f"\n--- {title} ---")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("query", nargs="?", default="", help="Search query (skips the conversation step)")
    parser.add_argument("--transcript", help="Path to a plain-text conversation transcript")
    parser.add_argument("--notes", default="", help="Staff notes appended to the search query")
    parser.add_argument("--no-images", action="store_true", help="Skip Open Graph image enrichment")
    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    settings = Settings()
    configure_logging(settings.log_level)

    try:
        settings.require_backend()
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    query = args.query.strip()
    if args.transcript:
        _section("CONVERSATION")
        session = ConversationSession(settings)
        with open(args.transcript, "r", encoding="utf-8") as f:
            for line in f:
                session.add_segment(line)
        print(f"Transcript: {len(session.transcript)} characters")

        _sub("Staff suggestion")
        print(session.suggest())

        _sub("Summary")
        try:
            query = session.build_search_query(args.notes)
        except ValueError as e:
            print(f"Cannot search: {e}")
            sys.exit(1)
        print(session.last_summary)

    if not query:
        print("Provide a query or --transcript")
        sys.exit(1)

    _section("ACTIVITY SEARCH" + (" (mock mode)" if settings.mock_mode else ""))
    print(f"Query: {_trunc(query, 70)}")
    response = run_activity_search(SearchRequest(query=query, include_images=not args.no_images), settings)

    for result in response.results:
        _sub(f"{result.platform} ({result.domain})")
        print(_trunc(result.response_text.replace("\n", " "), 300))
        print(f"\n  Sources ({len(result.sources)}):")
        for i, source in enumerate(result.sources, 1):
            print(f"  [{i}] {_trunc(source.title, 50)}  {source.url}")
        print(f"  Images ({len(result.images)}):")
        for image in result.images:
            print(f"    {image.url}")

    _section("DONE")
    print(f"{len(response.results)} platforms in {response.search_time_seconds}s")
    print()


if __name__ == "__main__":
    main()
