"""Database schema definitions."""

from __future__ import annotations

import sqlite3

PLAYER_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS players (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    handicap REAL,
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""

COURSE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS courses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    pars TEXT NOT NULL DEFAULT '[]',
    course_rating REAL,
    slope_rating INTEGER,
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""

POINT_TEMPLATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS point_templates (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    points_structure TEXT NOT NULL DEFAULT '{}',
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
"""

TOUR_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS tours (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    description TEXT,
    point_template_id INTEGER,
    scoring_mode TEXT NOT NULL DEFAULT 'gross',
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
    CHECK (scoring_mode IN ('gross', 'net', 'both')),
    FOREIGN KEY (point_template_id) REFERENCES point_templates(id) ON DELETE SET NULL
);
"""

TOUR_CATEGORY_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS tour_categories (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    tour_id INTEGER NOT NULL,
    name TEXT NOT NULL,
    sort_order INTEGER NOT NULL DEFAULT 0,
    UNIQUE (tour_id, name),
    FOREIGN KEY (tour_id) REFERENCES tours(id) ON DELETE CASCADE
);
"""

TOUR_ENROLLMENT_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS tour_enrollments (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    tour_id INTEGER NOT NULL,
    player_id INTEGER NOT NULL,
    category_id INTEGER,
    playing_handicap REAL,
    status TEXT NOT NULL DEFAULT 'active',
    UNIQUE (tour_id, player_id),
    FOREIGN KEY (tour_id) REFERENCES tours(id) ON DELETE CASCADE,
    FOREIGN KEY (player_id) REFERENCES players(id) ON DELETE CASCADE,
    FOREIGN KEY (category_id) REFERENCES tour_categories(id) ON DELETE SET NULL
);
"""

COMPETITION_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS competitions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    date TEXT NOT NULL,
    course_id INTEGER NOT NULL,
    tour_id INTEGER,
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (course_id) REFERENCES courses(id),
    FOREIGN KEY (tour_id) REFERENCES tours(id) ON DELETE SET NULL
);
"""

TEE_TIME_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS tee_times (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    competition_id INTEGER NOT NULL,
    teetime TEXT NOT NULL,
    FOREIGN KEY (competition_id) REFERENCES competitions(id) ON DELETE CASCADE
);
"""

PARTICIPANT_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS participants (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    tee_time_id INTEGER NOT NULL,
    player_id INTEGER,
    score TEXT NOT NULL DEFAULT '[]',
    is_locked INTEGER NOT NULL DEFAULT 0,
    manual_score_total INTEGER,
    FOREIGN KEY (tee_time_id) REFERENCES tee_times(id) ON DELETE CASCADE,
    FOREIGN KEY (player_id) REFERENCES players(id) ON DELETE SET NULL
);
"""

INDEXES_SQL = [
    "CREATE INDEX IF NOT EXISTS idx_competitions_tour ON competitions (tour_id, date);",
    "CREATE INDEX IF NOT EXISTS idx_tee_times_competition ON tee_times (competition_id);",
    "CREATE INDEX IF NOT EXISTS idx_participants_tee_time ON participants (tee_time_id);",
    "CREATE INDEX IF NOT EXISTS idx_enrollments_tour ON tour_enrollments (tour_id);",
]


SCHEMA_SQL = [
    PLAYER_TABLE_SQL,
    COURSE_TABLE_SQL,
    POINT_TEMPLATE_TABLE_SQL,
    TOUR_TABLE_SQL,
    TOUR_CATEGORY_TABLE_SQL,
    TOUR_ENROLLMENT_TABLE_SQL,
    COMPETITION_TABLE_SQL,
    TEE_TIME_TABLE_SQL,
    PARTICIPANT_TABLE_SQL,
    *INDEXES_SQL,
]


def initialize_schema(connection: sqlite3.Connection) -> None:
    """Initialize database schema if needed."""
    with connection:
        for statement in SCHEMA_SQL:
            connection.execute(statement)
