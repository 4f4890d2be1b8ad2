"""SQLite access for contract metadata rows."""
