"""Database migration utilities."""

import os
from pathlib import Path

from alembic import command
from alembic.config import Config
import structlog

from .config import settings

logger = structlog.get_logger(__name__)


class MigrationManager:
    """Manages database migrations using Alembic."""

    def __init__(self, alembic_cfg_path: str = "alembic.ini") -> None:
        """Initialize migration manager.

        Args:
            alembic_cfg_path: Path to alembic.ini configuration file
        """
        self.alembic_cfg_path = alembic_cfg_path
        self.config = None

    def _get_alembic_config(self) -> Config:
        """Get Alembic configuration.

        Returns:
            Alembic configuration object

        Raises:
            FileNotFoundError: If alembic.ini is not found
        """
        if self.config is None:
            if not os.path.exists(self.alembic_cfg_path):
                raise FileNotFoundError(f"Alembic config file not found: {self.alembic_cfg_path}")

            self.config = Config(self.alembic_cfg_path)

            script_location = self.config.get_main_option("script_location")
            if script_location:
                project_root = Path(__file__).parent.parent.parent.parent
                self.config.set_main_option("script_location", str(project_root / script_location))
            self.config.set_main_option("sqlalchemy.url", settings.database_url)

        return self.config

    def run_migrations(self) -> None:
        """Run all pending migrations to upgrade database to latest version."""
        try:
            command.upgrade(self._get_alembic_config(), "head")
            logger.info("Database migrations completed successfully")
        except Exception as e:
            logger.error("Failed to run database migrations", error=str(e))
            raise

    def downgrade(self, revision: str = "-1") -> None:
        """Downgrade database to specified revision.

        Args:
            revision: Target revision (default: previous revision)
        """
        try:
            command.downgrade(self._get_alembic_config(), revision)
            logger.info("Database downgraded", revision=revision)
        except Exception as e:
            logger.error("Failed to downgrade database", revision=revision, error=str(e))
            raise


# Global migration manager instance
migration_manager = MigrationManager()


def run_migrations() -> None:
    """Run all pending database migrations."""
    migration_manager.run_migrations()


def init_database() -> None:
    """Initialize database connection and bring the schema up to date.

    PostgreSQL is migrated with Alembic (tables, triggers and RLS policies).
    Other dialects only get the ORM tables.
    """
    from .database import db_manager

    logger.info("Initializing database...")
    db_manager.initialize()

    if db_manager.engine.dialect.name == "postgresql":
        run_migrations()
    else:
        db_manager.create_tables()

    logger.info("Database initialization completed")
