from __future__ import annotations

from _settings import load_container

from src.ram_points.ram_points.database.bootstrap import create_schema, ensure_database_exists, list_tables


def main() -> None:
    settings, container = load_container()
    if not getattr(settings, "DATABASE_URL", None):
        ensure_database_exists(dict(settings.DB_CONFIG))

    create_schema(container.db)
    tables = list_tables(container.db)
    print(f"OK: schema ready on {container.db.engine.url.render_as_string(hide_password=True)} (tables={len(tables)})")


if __name__ == "__main__":
    main()
