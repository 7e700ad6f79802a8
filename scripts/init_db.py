#!/usr/bin/env python
"""Initialize database tables."""
import asyncio

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from movietrack.db.connection import create_engine, init_models
from movietrack.main import validate_environment


async def init_db() -> None:
    engine = create_engine()
    await init_models(engine)
    await engine.dispose()
    print("✓ Database tables created successfully")


if __name__ == "__main__":
    validate_environment()
    asyncio.run(init_db())
