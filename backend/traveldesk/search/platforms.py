from typing import Optional, Sequence

from traveldesk.search.schemas import PlatformSpec

# Order here is the order platforms are listed in the prompt
PLATFORMS: tuple[PlatformSpec, ...] = (
    PlatformSpec(name="Klook", domain="klook.com"),
    PlatformSpec(name="Trip.com", domain="trip.com"),
    PlatformSpec(name="Expedia", domain="expedia.com"),
)


def find_platform(name: str, platforms: Sequence[PlatformSpec] = PLATFORMS) -> Optional[PlatformSpec]:
    """Case-insensitive lookup of a platform by its header name."""
    wanted = (name or "").strip().lower()
    for platform in platforms:
        if platform.name.lower() == wanted:
            return platform
    return None
