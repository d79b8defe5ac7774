import argparse
import asyncio
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from config import settings
from infrastructure.database import AsyncSessionLocal, init_db, close_db
from infrastructure.repositories import FeeStateRepository
from application.use_cases import InitializeFeesUseCase
from domain.exceptions import AlreadyInitializedError

logger = logging.getLogger("init_database")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Create tables and optionally initialize the fee state"
    )
    parser.add_argument("--owner", help="Account id that may change the fee percent")
    parser.add_argument(
        "tokens",
        nargs="*",
        help="Initially supported token ids"
    )
    return parser.parse_args(argv)


async def main(argv=None):
    args = parse_args(argv)
    try:
        await init_db()
        logger.info("Database initialized successfully")

        if args.owner:
            async with AsyncSessionLocal() as session:
                use_case = InitializeFeesUseCase(
                    FeeStateRepository(session),
                    settings.default_fee_percent
                )
                state = await use_case.execute(args.owner, args.tokens)
                await session.commit()
                logger.info(
                    f"Fee state created: owner={state.owner}, "
                    f"tokens={state.sorted_tokens}"
                )
    except AlreadyInitializedError as e:
        logger.warning(str(e))
    except Exception as e:
        logger.error(f"Error initializing database: {e}", exc_info=True)
        sys.exit(1)
    finally:
        await close_db()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    asyncio.run(main())
