from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def build_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(
        database_url,
        echo=False,
        pool_pre_ping=True
    )


def build_sessionmaker(engine: AsyncEngine):
    return sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


async def create_tables(engine: AsyncEngine):
    # registers every table on Base.metadata
    import splitshare.models.expense  # noqa: F401
    import splitshare.models.expense_share  # noqa: F401
    import splitshare.models.group  # noqa: F401
    import splitshare.models.group_member  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
