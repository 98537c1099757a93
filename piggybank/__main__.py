import argparse
import asyncio
import logging

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from piggybank.core.settings import settings
from piggybank.db.repo_holder import RepoHolder
from piggybank.db.utils import create_db_tables
from piggybank.services.report import prepare_piggy_bank_report

logging.basicConfig(level=logging.INFO)


async def main(username: str) -> None:
    engine = create_async_engine(str(settings.database_url), echo=settings.echo_sql)
    session_pool = async_sessionmaker(engine, expire_on_commit=False)

    await create_db_tables(engine=engine)

    try:
        async with session_pool() as session:
            repo = RepoHolder(session)
            user = await repo.user.get_by_username(username)

            if user is None:
                logging.error(f"Пользователь '{username}' не найден.")
                return

            print(await prepare_piggy_bank_report(repo, user))
    finally:
        await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Отчет по копилкам пользователя.")
    parser.add_argument("username")
    args = parser.parse_args()

    asyncio.run(main(args.username))
