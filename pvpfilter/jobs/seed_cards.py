"""
Seed the card store with the default card set.

Run this job to initialize a fresh database, or to reset an existing one.
Existing cards are only replaced when --force is given.
"""

import argparse
import asyncio
import logging
from pathlib import Path

from pvpfilter.db.database import async_session_factory, init_db
from pvpfilter.db.operations import count_cards
from pvpfilter.models.card import entries_from_cards
from pvpfilter.services.card_store import SqlCardStore
from pvpfilter.services.default_cards import get_default_cards

logger = logging.getLogger(__name__)


async def run_seed(force: bool = False, path: Path | None = None) -> int:
    """
    Write the default cards to the store.

    Args:
        force: Replace the catalog even if it already has cards
        path: Alternate seed file (defaults to the packaged set)

    Returns:
        Number of cards written (0 if the store was left untouched)
    """
    await init_db()

    async with async_session_factory() as session:
        existing = await count_cards(session)

    if existing and not force:
        logger.warning("Store already has %d cards; use --force to replace them", existing)
        return 0

    cards = get_default_cards(path)
    logger.info("Seeding %d default cards...", len(cards))

    try:
        await SqlCardStore(async_session_factory).save_all(entries_from_cards(cards))
    except Exception as e:
        logger.error("Failed to seed cards: %s", e)
        raise

    logger.info("Seeded %d cards", len(cards))
    return len(cards)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Seed the card store with default cards")
    parser.add_argument("--force", action="store_true", help="replace existing cards")
    parser.add_argument("--path", type=Path, default=None, help="seed JSON file")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_seed(force=args.force, path=args.path))


if __name__ == "__main__":
    main()
