"""Alembic migrations apply cleanly on SQLite and seed the built-in roles."""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, text

from app.core.config import settings

ALEMBIC_DIR = Path(__file__).resolve().parents[1] / "alembic"


class TestMigrationsOnSqlite(unittest.TestCase):
    def test_upgrade_head(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            url = f"sqlite:///{Path(tmp) / 'migrate.db'}"
            config = Config()
            config.set_main_option("script_location", str(ALEMBIC_DIR))
            with patch.object(settings, "DATABASE_URL", url):
                command.upgrade(config, "head")

            engine = create_engine(url)
            try:
                with engine.begin() as conn:
                    tables = set(inspect(conn).get_table_names())
                    roles = conn.execute(text("SELECT name FROM roles ORDER BY id")).scalars().all()
                    # Timestamps come from the column server defaults.
                    conn.execute(
                        text(
                            "INSERT INTO users (uuid, name, email, password_hash) "
                            "VALUES ('u-1', 'Mig', 'mig@example.com', 'x')"
                        )
                    )
                    created_at = conn.execute(text("SELECT created_at FROM users")).scalar()
            finally:
                engine.dispose()

        self.assertTrue({"users", "roles", "role_user", "resources"} <= tables)
        self.assertEqual(roles, ["Administrator", "Regular User"])
        self.assertIsNotNone(created_at)


if __name__ == "__main__":
    unittest.main()
