from __future__ import annotations

"""
Seed the skill tables with the curated 50-skill corpus and its three daytona benchmark runs.
Run once (or re-run safely: rows are merged by primary key).

    python scripts/seed_skills.py
"""

import logging
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from skillbench.db import engine
from skillbench.schema import ensure_schema, seed_catalog
from skillbench.skills.corpus import corpus_rows

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    if engine is None:
        raise SystemExit("DATABASE_URL is not set")

    ensure_schema(engine)
    counts = seed_catalog(engine, corpus_rows())
    logger.info("Seeded skills catalog: %s", ", ".join(f"{table}={n}" for table, n in counts.items()))


if __name__ == "__main__":
    main()
