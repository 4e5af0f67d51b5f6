"""
Cache Builder

Asks Claude for gozleme spots across the major London areas and writes the
deduplicated results to cache.json. Run it once, or whenever the cache
should be refreshed:

    gozleme-build-cache
    python -m gozleme_finder.services.cache_builder --output data/cache.json

Requires ANTHROPIC_KEY in the environment or .env file.
"""
import argparse
import asyncio
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Awaitable, Callable, Optional

from gozleme_finder.core.config import Settings, get_settings
from gozleme_finder.core.errors import ProxyError
from gozleme_finder.core.llm_providers import AnthropicProvider
from gozleme_finder.core.logger import logs
from gozleme_finder.models.spot_model import CacheFile, Spot
from gozleme_finder.repos.spot_repo import SpotRepository
from gozleme_finder.services.matching import NameDeduplicator
from gozleme_finder.services.response_parser import recover_json_array

# Broad enough to cover the whole city
AREAS = [
    "Central London",
    "East London",
    "North London",
    "South London",
    "West London",
    "Northeast London",
    "Southeast London",
    "Southwest London",
    "Northwest London",
    "Hackney and Dalston",
    "Islington and Holloway",
    "Brixton and Peckham",
    "Whitechapel and Bethnal Green",
    "Walthamstow and Leyton",
    "Stoke Newington and Stamford Hill",
    "Shepherd's Bush and Hammersmith",
    "Croydon and Sutton",
    "Stratford and Newham",
]

PROMPT_TEMPLATE = (
    'You are a helpful local food guide for London. Find real eateries, restaurants, cafes, '
    'or market stalls in or near "{area}" (London, UK) that are known to serve Gozleme '
    '(Turkish stuffed flatbread).'
    "\n\nUse only plain ASCII characters in all string values. No apostrophes or special unicode."
    "\n\nReturn ONLY a valid JSON array, no markdown fences, no explanation. Format:\n"
    '[{{"name":"...","area":"...","address":"full street address if known",'
    '"description":"1-2 sentences","tags":["tag1","tag2"]}}]'
    "\n\nUp to 12 results. Only include real places you are confident about."
)


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a Z suffix."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_prompt(area: str) -> str:
    return PROMPT_TEMPLATE.format(area=area)


def spot_from_candidate(candidate, area: str) -> Optional[Spot]:
    """Shape one parsed AI item into a Spot; None when it has no usable name."""
    if not isinstance(candidate, dict) or not candidate.get("name"):
        return None

    tags = candidate.get("tags")
    return Spot(
        name=str(candidate["name"]),
        area=str(candidate.get("area") or area),
        address=str(candidate.get("address") or ""),
        description=str(candidate.get("description") or ""),
        tags=[str(t) for t in tags if t is not None] if isinstance(tags, list) else [],
        source="ai",
        cached_at=utc_timestamp(),
    )


class CacheBuilder:
    def __init__(
        self,
        provider: AnthropicProvider,
        repository: SpotRepository,
        areas: list[str] = AREAS,
        pause: float = 1.5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.provider = provider
        self.repository = repository
        self.areas = list(areas)
        self.pause = pause
        self.sleep = sleep

    async def fetch_area(self, area: str) -> list:
        """Ask Claude about one area and recover the JSON array it returns."""
        text = await self.provider.generate(build_prompt(area))
        return recover_json_array(text, label=f'reply for "{area}"')

    async def build(self) -> CacheFile:
        logs.log(logging.INFO, f"Querying Claude for {len(self.areas)} London areas...")

        spots: list[Spot] = []
        names = NameDeduplicator()

        for i, area in enumerate(self.areas):
            progress = f"[{i + 1}/{len(self.areas)}] {area}"
            try:
                candidates = await self.fetch_area(area)
            except ProxyError as e:
                logs.log(logging.ERROR, f"{progress}: {str(e)}")
            else:
                added = 0
                for candidate in candidates:
                    spot = spot_from_candidate(candidate, area)
                    if spot is None or not names.add(spot.name):
                        continue
                    spots.append(spot)
                    added += 1
                logs.log(logging.INFO, f"{progress}: found {len(candidates)}, added {added} new")

            # Pause between requests to avoid rate limits
            if i < len(self.areas) - 1:
                await self.sleep(self.pause)

        return CacheFile(built_at=utc_timestamp(), total_spots=len(spots), spots=spots)

    async def run(self) -> CacheFile:
        cache = await self.build()
        self.repository.save_cache(cache)
        logs.log(logging.INFO, f"Done! {cache.total_spots} unique spots saved to {self.repository.cache_path}")
        return cache


def create_builder(settings: Settings, output: Optional[Path] = None, pause: Optional[float] = None, transport=None) -> CacheBuilder:
    provider = AnthropicProvider(
        api_key=settings.ANTHROPIC_KEY,
        model=settings.ANTHROPIC_MODEL,
        version=settings.ANTHROPIC_VERSION,
        max_tokens=settings.ANTHROPIC_MAX_TOKENS,
        timeout=settings.CACHE_BUILDER_TIMEOUT,
        transport=transport,
    )
    repository = SpotRepository(output or settings.cache_path, settings.curated_path)
    return CacheBuilder(
        provider,
        repository,
        pause=settings.CACHE_BUILDER_PAUSE if pause is None else pause,
    )


def main(argv: Optional[list[str]] = None, settings: Optional[Settings] = None) -> int:
    parser = argparse.ArgumentParser(description="Pre-build the AI gozleme spot cache.")
    parser.add_argument("--output", type=Path, default=None, help="cache file to write (default: CACHE_FILE in DATA_DIR)")
    parser.add_argument("--pause", type=float, default=None, help="seconds to wait between areas")
    args = parser.parse_args(argv)

    settings = settings or get_settings()
    logs.configure(settings.LOGGER, settings.LOG_DIRECTORY or None)

    if not settings.ANTHROPIC_KEY:
        logs.log(logging.ERROR, "ANTHROPIC_KEY not set in .env")
        return 1

    builder = create_builder(settings, output=args.output, pause=args.pause)
    try:
        asyncio.run(builder.run())
    except ProxyError as e:
        logs.log(logging.ERROR, f"Fatal error: {str(e)}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
