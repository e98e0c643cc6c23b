"""Infrastructure layer — SQLite persistence and the node handle API."""
