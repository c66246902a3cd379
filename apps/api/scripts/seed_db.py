"""
Seed the database with a few demo clients, a saved version each, and one pasted-text
import per client waiting in processing (run /imports/{id}/process to extract fields).
Run from apps/api: uv run python scripts/seed_db.py
"""
import asyncio
import logging
import sys
from pathlib import Path

# Ensure brandbook is importable when run from repo root or apps/api
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

logger = logging.getLogger(__name__)

from brandbook.db.session import async_session
from brandbook.schemas import ClientCreate, VersionCreate
from brandbook.services.clients import client_service
from brandbook.services.imports.pipeline import import_pasted_text
from brandbook.services.versions import version_service

SEED_USER = "seed@brandbook.local"

DEMO_CLIENTS = [
    {
        "client_name": "Bright Smiles Dental",
        "industry": "Dental",
        "notes": (
            "Our mission is to help people smile confidently.\n"
            "Core values: gentleness, honesty, community.\n"
            "Primary color: Ocean Blue #0055AA. Secondary: Mint #98FF98.\n"
            "Voice: warm, reassuring, plainspoken."
        ),
    },
    {
        "client_name": "Northwind Physical Therapy",
        "industry": "Healthcare",
        "notes": (
            "Tagline: Move better, live better.\n"
            "We serve active adults aged 30-60 recovering from sports injuries.\n"
            "Typography: Inter for headings, Source Serif for body copy."
        ),
    },
    {
        "client_name": "Harbor Family Law",
        "industry": "Legal",
        "notes": (
            "Vision: every family leaves our office with a clear path forward.\n"
            "Avoid jargon such as 'litigant'; say 'you' instead.\n"
            "Logo: navy wordmark, minimum 1 inch in print."
        ),
    },
]


async def run_seed():
    async with async_session() as session:
        for demo in DEMO_CLIENTS:
            client = await client_service.create(
                session,
                ClientCreate(client_name=demo["client_name"], industry=demo["industry"], created_by=SEED_USER),
            )
            await version_service.create(
                session,
                client,
                VersionCreate(version_number="1.0", version_name="Initial template", created_by=SEED_USER),
            )
            record = await import_pasted_text(
                session,
                client_id=client.id,
                text=demo["notes"],
                title=f"{demo['client_name']} intake notes",
                created_by=SEED_USER,
            )
            logger.info("Seeded %s (client %s, import %s: %s)", client.client_name, client.id, record.id, record.status)
        await session.commit()

    logger.info("Done. Seeded %s clients", len(DEMO_CLIENTS))


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )
    logger.info("Starting demo seed: %s clients", len(DEMO_CLIENTS))
    asyncio.run(run_seed())
