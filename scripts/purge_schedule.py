"""
Suppression d'un planning complet / Full schedule aggregate teardown.

Usage:
    python -m scripts.purge_schedule <schedule_id> [<schedule_id> ...]

Supprime disponibilites, creneaux, commentaires puis le planning.
Deletes availabilities, candidates, comments, then the schedule.
"""

import asyncio
import logging
import os
import sys

# Rendre le package app importable / Make app package importable
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.database import async_session, engine  # noqa: E402
from app.exceptions import NotFoundError  # noqa: E402
from app.services.schedule_service import delete_schedule_aggregate  # noqa: E402

log = logging.getLogger("purge_schedule")


async def purge(schedule_ids: list[str]) -> int:
    """Retourne le nombre de plannings introuvables / Returns the number of unknown schedules."""
    missing = 0
    async with async_session() as session:
        for schedule_id in schedule_ids:
            try:
                await delete_schedule_aggregate(session, schedule_id)
            except NotFoundError:
                log.warning("Schedule %s not found", schedule_id)
                missing += 1
            else:
                print(f"[purge] Schedule {schedule_id} deleted")
    await engine.dispose()
    return missing


def main() -> None:
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)
    logging.basicConfig(level=logging.INFO)
    missing = asyncio.run(purge(sys.argv[1:]))
    sys.exit(1 if missing else 0)


if __name__ == "__main__":
    main()
