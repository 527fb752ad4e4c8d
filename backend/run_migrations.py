"""Migration runner for the configured database using the SQL files in app/migrations/"""
from app.database import engine, run_migrations


def run():
    """Apply every pending `app/migrations/*.sql` file in version order.

    Files already recorded in `schema_migrations` are skipped, so the
    script is safe to run repeatedly before starting the API.
    """
    print("Using database:", engine.url.render_as_string(hide_password=True))
    applied = run_migrations(engine)
    for name in applied:
        print("Applied:", name)
    print("Migrations applied." if applied else "Database already up to date.")

if __name__ == '__main__':
    run()
