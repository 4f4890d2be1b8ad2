import sqlite3
from typing import List

DEFAULT_DB_PATH = "contracts.db"

# id and uploaded_at are assigned by the database, never by callers.
CREATE_CONTRACTS_TABLE = '''
    CREATE TABLE IF NOT EXISTS contracts (
        id TEXT PRIMARY KEY DEFAULT (lower(hex(randomblob(16)))),
        name TEXT NOT NULL,
        size INTEGER NOT NULL CHECK (size >= 0),
        url TEXT NOT NULL UNIQUE,
        uploaded_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%fZ', 'now'))
    )
'''

CREATE_UPLOADED_AT_INDEX = '''
    CREATE INDEX IF NOT EXISTS idx_contracts_uploaded_at ON contracts (uploaded_at)
'''

CONTRACT_COLUMNS = "id, name, size, url, uploaded_at"


def _connect(db_path: str) -> sqlite3.Connection:
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: str = DEFAULT_DB_PATH) -> None:
    """Initialize database with the contracts table."""
    conn = _connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute(CREATE_CONTRACTS_TABLE)
        cursor.execute(CREATE_UPLOADED_AT_INDEX)
        conn.commit()
    finally:
        conn.close()


def list_contracts(db_path: str = DEFAULT_DB_PATH) -> List[dict]:
    """Return every contract row, newest upload first."""
    conn = _connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute(f'''
            SELECT {CONTRACT_COLUMNS} FROM contracts
            ORDER BY uploaded_at DESC, rowid DESC
        ''')
        return [dict(row) for row in cursor.fetchall()]
    finally:
        conn.close()


def add_contract(name: str, size: int, url: str, db_path: str = DEFAULT_DB_PATH) -> dict:
    """Insert a contract row and return it as stored, with its generated id and timestamp."""
    conn = _connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute(
            'INSERT INTO contracts (name, size, url) VALUES (?, ?, ?)',
            (name, size, url)
        )
        rowid = cursor.lastrowid
        conn.commit()

        cursor.execute(f'SELECT {CONTRACT_COLUMNS} FROM contracts WHERE rowid = ?', (rowid,))
        return dict(cursor.fetchone())
    finally:
        conn.close()


def delete_contract(contract_id: str, db_path: str = DEFAULT_DB_PATH) -> bool:
    """Delete a contract row. Returns False when no row had that id."""
    conn = _connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute('DELETE FROM contracts WHERE id = ?', (contract_id,))
        conn.commit()
        return cursor.rowcount > 0
    finally:
        conn.close()
