"""
Tests for the Database resource and the schema management script.
"""

import pytest
from sqlalchemy import inspect

from lightbnb.config import Settings
from lightbnb.database import Database
from manage import SchemaManager, main


def sqlite_settings(tmp_path, **overrides) -> Settings:
    return Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'lightbnb.db'}", **overrides)


async def table_names(db: Database):
    async with db.engine.connect() as conn:
        return await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())


class TestDatabase:

    async def test_check_connection(self, database: Database):
        assert await database.check_connection() is True

    async def test_tables_created(self, database: Database):
        assert set(await table_names(database)) == {
            "users", "properties", "reservations", "property_reviews"
        }

    async def test_from_settings_sqlite(self, tmp_path):
        async with Database.from_settings(sqlite_settings(tmp_path)) as db:
            assert db.dialect.name == "sqlite"
            assert await db.check_connection() is True
            assert set(db.pool_status()) == {
                "pool_size", "checked_in_connections", "checked_out_connections", "overflow_connections"
            }

    async def test_check_connection_failure(self, tmp_path):
        db = Database(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'lightbnb.db'}")
        try:
            assert await db.check_connection() is False
        finally:
            await db.close()

    async def test_session_rolls_back_on_error(self, database: Database):
        from lightbnb.models.user import User

        with pytest.raises(RuntimeError):
            async with database.session() as session:
                session.add(User(name="Rolled Back", email="rollback@example.com", password="x"))
                await session.flush()
                raise RuntimeError("boom")

        async with database.session() as session:
            assert await session.get(User, 1) is None


class TestSchemaManager:

    async def test_create_and_drop(self, tmp_path):
        manager = SchemaManager(sqlite_settings(tmp_path))

        await manager.create_tables()
        async with Database.from_settings(manager.settings) as db:
            assert "properties" in await table_names(db)

        await manager.drop_tables()
        async with Database.from_settings(manager.settings) as db:
            assert await table_names(db) == []

    async def test_check(self, tmp_path):
        assert await SchemaManager(sqlite_settings(tmp_path)).check() is True

    async def test_drop_refused_in_production(self, tmp_path):
        manager = SchemaManager(sqlite_settings(tmp_path, environment="production"))

        with pytest.raises(RuntimeError):
            await manager.drop_tables()

    def test_main_without_command(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out

    def test_drop_requires_confirm(self, capsys):
        assert main(["drop-tables"]) == 1
        assert "--confirm" in capsys.readouterr().out
