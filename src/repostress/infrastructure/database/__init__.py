"""Database layer — SQLAlchemy Core schema and SQLite engine."""
