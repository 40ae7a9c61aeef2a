# app/db.py
import json
import os
import sqlite3
from datetime import datetime, timezone

DB_PATH = "db/calendar.db"

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT UNIQUE NOT NULL COLLATE NOCASE,
    password_hash TEXT NOT NULL,
    name TEXT
);

CREATE TABLE IF NOT EXISTS app_state (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL, -- JSON document
    last_modified TEXT
);
"""


def get_conn(db_path=DB_PATH):
    folder = os.path.dirname(db_path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    conn = sqlite3.connect(db_path, check_same_thread=False)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path=DB_PATH):
    conn = get_conn(db_path)
    cur = conn.cursor()
    cur.executescript(SCHEMA)
    conn.commit()
    conn.close()


def row_to_dict(row):
    if row is None:
        return None
    return dict(row)


# CRUD: Users
def create_user(username, password_hash, name=None, db_path=DB_PATH):
    conn = get_conn(db_path)
    cur = conn.cursor()
    cur.execute("INSERT OR IGNORE INTO users (username,password_hash,name) VALUES (?,?,?)",
                (username, password_hash, name))
    conn.commit()
    conn.close()


def get_user(username, db_path=DB_PATH):
    conn = get_conn(db_path)
    cur = conn.cursor()
    cur.execute("SELECT * FROM users WHERE username = ? COLLATE NOCASE", (username,))
    row = cur.fetchone()
    conn.close()
    return row_to_dict(row)


# Key/value state: one JSON document per key
def read_state(key, default=None, db_path=DB_PATH):
    conn = get_conn(db_path)
    cur = conn.cursor()
    cur.execute("SELECT value FROM app_state WHERE key = ?", (key,))
    row = cur.fetchone()
    conn.close()
    if row is None:
        return default
    return json.loads(row["value"])


def write_state(key, value, db_path=DB_PATH):
    conn = get_conn(db_path)
    cur = conn.cursor()
    now = datetime.now(timezone.utc).isoformat()
    cur.execute("""
        INSERT INTO app_state (key, value, last_modified) VALUES (?,?,?)
        ON CONFLICT(key) DO UPDATE SET value=excluded.value, last_modified=excluded.last_modified
    """, (key, json.dumps(value), now))
    conn.commit()
    conn.close()
