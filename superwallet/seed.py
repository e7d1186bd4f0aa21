"""
Seed the demo wallet balance and a demo user.
"""
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.core.config import Settings, get_settings
from superwallet.core.log_config import configure_logging
from superwallet.infrastructure.database import dispose_engine, init_db, session_scope
from superwallet.infrastructure.database.repositories import SqlUserRepository
from superwallet.modules.accounts import AccountService, UserCreateInput
from superwallet.modules.ledger import BalanceLedger

logger = logging.getLogger(__name__)

DEMO_EMAIL = "demo@superwallet.local"
DEMO_PASSWORD = "demo1234"


async def seed_demo_wallet(session: AsyncSession, settings: Settings) -> None:
    """Credit the demo address once and create the demo user if missing."""
    wallet = settings.wallet
    ledger = BalanceLedger.with_session(session)
    snapshot = await ledger.get_balance(wallet.demo_address)
    if snapshot.updated_at is None and wallet.seed_balance > 0:
        await ledger.apply_delta(wallet.demo_address, wallet.seed_balance, wallet.ledger_asset)
        logger.info("Seeded %s with %s %s", wallet.demo_address, wallet.seed_balance, wallet.ledger_asset)

    if await SqlUserRepository(session).get_by_email(DEMO_EMAIL) is None:
        await AccountService.with_session(session).register(
            UserCreateInput(email=DEMO_EMAIL, password=DEMO_PASSWORD, wallet_address=wallet.demo_address)
        )
        logger.info("Created demo user %s / %s", DEMO_EMAIL, DEMO_PASSWORD)


async def _main() -> None:
    settings = get_settings()
    configure_logging(settings)
    await init_db()
    try:
        async with session_scope() as session:
            await seed_demo_wallet(session, settings)
    finally:
        await dispose_engine()


def main() -> None:
    asyncio.run(_main())


if __name__ == "__main__":
    main()
