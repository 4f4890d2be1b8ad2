"""
Contracts API.

FastAPI gateway storing contract archives in a blob store and their metadata
in SQLite.
"""
