from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from shift_payroll.config import get_settings_module
from shift_payroll.database.bootstrap import DEFAULT_SCHEMA_PATH, apply_schema, list_tables
from shift_payroll.database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")

    settings = importlib.import_module(get_settings_module())
    config = DBConfig.from_dict(dict(settings.DB_CONFIG))
    conn = DatabaseConnection(config)

    apply_schema(conn, schema_path=DEFAULT_SCHEMA_PATH)
    tables = list_tables(conn)
    logger.info(
        "Applied schema.sql -> %s@%s:%s/%s (tables=%d)",
        config.user,
        config.host,
        config.port,
        config.database,
        len(tables),
    )


if __name__ == "__main__":
    main()
