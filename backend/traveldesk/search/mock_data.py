"""
Canned activity search response for MOCK_MODE (offline demos and golden tests).

No network calls. Everything except the timestamp is constant, so repeated
calls serialize byte-identical results.
"""

from traveldesk.search.assembler import build_text_with_citations
from traveldesk.search.schemas import (
    PlatformResult,
    ResultMetadata,
    SearchResponse,
    Source,
)

MOCK_BANNER = "> ⚠️ **MOCK DATA** - This is sample data for demonstration purposes"
MOCK_SEARCH_TIME_MS = 1500

_KLOOK_TEXT = """### 1. Eiffel Tower Summit Access with Optional Seine River Cruise

Experience Paris's most iconic landmark with priority access to the summit, offering breathtaking panoramic views of the City of Light.

**Description:**
Skip the long lines and ascend to the top of the Eiffel Tower. This ticket includes access to all three levels, including the exclusive summit. Optional Seine River cruise available for a complete Parisian experience.

**Highlights:**
- Priority access to avoid long queues
- Access to all three levels including the summit
- Stunning 360-degree views of Paris
- Optional 1-hour Seine River cruise
- Audio guide available in multiple languages

**Budget:** $45-65 per person (depending on options selected)

---

### 2. Louvre Museum Skip-the-Line Ticket with Audio Guide

Discover the world's largest art museum and see masterpieces like the Mona Lisa and Venus de Milo without waiting in line.

**Description:**
Explore over 35,000 works of art spanning from ancient civilizations to the 19th century. Perfect for families with audio guides designed for all ages.

**Highlights:**
- Skip-the-line entrance
- Audio guide in 10+ languages including kid-friendly versions
- See iconic works: Mona Lisa, Venus de Milo, Winged Victory
- Self-paced exploration
- Valid for full day access

**Budget:** $25-35 per person"""

_TRIP_TEXT = """### 1. Disneyland Paris 1-Day 2-Park Ticket

The perfect family adventure! Explore both Disneyland Park and Walt Disney Studios Park in one magical day.

**Description:**
Create unforgettable memories with your family at Disneyland Paris. This ticket grants access to both theme parks, featuring classic Disney attractions, spectacular shows, and character meet-and-greets.

**Highlights:**
- Access to both Disneyland Park and Walt Disney Studios
- Over 50 attractions and rides
- Meet beloved Disney characters
- Spectacular parades and nighttime shows
- Family-friendly dining options throughout the parks

**Budget:** $75-95 per person (varies by season)

---

### 2. Versailles Palace and Gardens Skip-the-Line Tour

Step back in time to the opulent world of French royalty with a guided tour of the magnificent Palace of Versailles.

**Description:**
Avoid the crowds with priority access to the Palace of Versailles. Your guide will bring history to life as you explore the Hall of Mirrors, Royal Apartments, and stunning gardens.

**Highlights:**
- Skip-the-line entry to the palace
- Expert English-speaking guide
- Explore the Hall of Mirrors and Royal Apartments
- Free time to wander the beautiful gardens
- Round-trip transportation from Paris available

**Budget:** $65-85 per person"""

_EXPEDIA_TEXT = """### 1. French Pastry Baking Class in Paris

Learn the art of French pastry-making with a hands-on cooking class led by a professional pastry chef.

**Description:**
Perfect for families! This interactive class teaches you how to make authentic French pastries like croissants, éclairs, or macarons. Enjoy your creations afterward with coffee or hot chocolate.

**Highlights:**
- Hands-on cooking experience for all ages
- Professional pastry chef instruction
- Learn to make 2-3 classic French pastries
- Enjoy your homemade treats
- Recipe cards to take home

**Budget:** $80-100 per person

---

### 2. Mont Saint-Michel Day Trip from Paris

Discover the magical island abbey of Mont Saint-Michel, one of France's most iconic landmarks.

**Description:**
Journey to Normandy to explore this UNESCO World Heritage site. Walk through medieval streets, visit the stunning abbey, and enjoy the dramatic tidal surroundings.

**Highlights:**
- Round-trip transportation from Paris
- English-speaking guide
- Guided tour of the abbey
- Free time to explore the island village
- Photo opportunities with breathtaking views
- Optional lunch stop in Normandy

**Budget:** $150-180 per person (includes transportation and entrance fees)"""

# (platform, domain, body, [(url, title), ...])
_MOCK_PLATFORMS = (
    (
        "Klook",
        "klook.com",
        _KLOOK_TEXT,
        [
            ("https://www.klook.com/activity/mock-eiffel-tower/", "Eiffel Tower Summit Access - Klook"),
            ("https://www.klook.com/activity/mock-louvre/", "Louvre Museum Skip-the-Line - Klook"),
        ],
    ),
    (
        "Trip.com",
        "trip.com",
        _TRIP_TEXT,
        [
            ("https://www.trip.com/activity/mock-disneyland-paris/", "Disneyland Paris 1-Day 2-Park Ticket - Trip.com"),
            ("https://www.trip.com/activity/mock-versailles/", "Versailles Palace and Gardens Skip-the-Line Tour - Trip.com"),
        ],
    ),
    (
        "Expedia",
        "expedia.com",
        _EXPEDIA_TEXT,
        [
            ("https://www.expedia.com/things-to-do/mock-pastry-class/", "French Pastry Baking Class in Paris - Expedia"),
            ("https://www.expedia.com/things-to-do/mock-mont-saint-michel/", "Mont Saint-Michel Day Trip from Paris - Expedia"),
        ],
    ),
)


def _mock_result(platform: str, domain: str, body: str, links: list[tuple[str, str]]) -> PlatformResult:
    sources = [
        Source(index=i, url=url, title=title, domain=domain)
        for i, (url, title) in enumerate(links, start=1)
    ]
    return PlatformResult(
        platform=platform,
        domain=domain,
        response_text=body,
        text_with_citations=build_text_with_citations(platform, body, sources, banner=MOCK_BANNER),
        sources=sources,
        images=[],
        metadata=ResultMetadata(
            grounding_chunks_count=len(sources),
            grounding_supports_count=0,
            web_search_queries_count=1,
        ),
    )


def generate_mock_response(query: str, timestamp: str) -> SearchResponse:
    """Canned three-platform response; only `timestamp` varies between calls."""
    return SearchResponse(
        success=True,
        query=query,
        results=[_mock_result(*entry) for entry in _MOCK_PLATFORMS],
        search_time=MOCK_SEARCH_TIME_MS,
        search_time_seconds=MOCK_SEARCH_TIME_MS / 1000,
        timestamp=timestamp,
        mock_mode=True,
    )
