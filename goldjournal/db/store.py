"""SQLite data store for GoldJournal."""

import json
import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from goldjournal.analytics.streaks import advance_streak
from goldjournal.models import (
    KeyLevel,
    LiquidityZone,
    NewsEvent,
    PlaybookEntry,
    PotentialTrade,
    Reflection,
    RuleCheck,
    SessionPlan,
    Streak,
    Trade,
)

logger = logging.getLogger(__name__)

_TRADE_COLUMNS = (
    "market",
    "direction",
    "setup_type",
    "entry_price",
    "exit_price",
    "stop_loss",
    "take_profit",
    "position_size",
    "entry_time",
    "exit_time",
    "execution_grade",
    "outcome",
    "pnl",
    "r_multiple",
    "rules_followed",
    "notes",
    "tags",
    "created_at",
)


def _to_iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _from_iso(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _to_flag(value: Optional[bool]) -> Optional[int]:
    return None if value is None else int(value)


def _from_flag(value: Optional[int]) -> Optional[bool]:
    return None if value is None else bool(value)


class JournalStore:
    """SQLite-based trade record store."""

    REQUIRED_TABLES = [
        "trades",
        "streaks",
        "rule_checks",
        "reflections",
        "session_plans",
        "playbook_entries",
        "potential_trades",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS trades (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    market TEXT NOT NULL,
                    direction TEXT NOT NULL,
                    setup_type TEXT NOT NULL DEFAULT '',
                    entry_price REAL,
                    exit_price REAL,
                    stop_loss REAL,
                    take_profit REAL,
                    position_size REAL,
                    entry_time TEXT,
                    exit_time TEXT,
                    execution_grade TEXT,
                    outcome TEXT,
                    pnl REAL,
                    r_multiple REAL,
                    rules_followed INTEGER NOT NULL DEFAULT 1,
                    notes TEXT,
                    tags TEXT NOT NULL DEFAULT '[]',
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS streaks (
                    streak_type TEXT PRIMARY KEY,
                    current_count INTEGER NOT NULL DEFAULT 0,
                    best_count INTEGER NOT NULL DEFAULT 0,
                    last_logged_date TEXT
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS rule_checks (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    trade_id INTEGER NOT NULL,
                    followed_rules INTEGER,
                    waited_confirmation INTEGER,
                    emotion_in_check INTEGER,
                    valid_setup INTEGER,
                    notes TEXT,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS reflections (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    trade_id INTEGER,
                    reflection_date TEXT NOT NULL,
                    pre_emotion TEXT,
                    during_emotion TEXT,
                    post_emotion TEXT,
                    what_confirmed TEXT,
                    what_tempted TEXT,
                    what_improve TEXT,
                    notes TEXT,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS session_plans (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    plan_date TEXT NOT NULL UNIQUE,
                    market_bias TEXT,
                    htf_levels TEXT NOT NULL DEFAULT '[]',
                    ltf_levels TEXT NOT NULL DEFAULT '[]',
                    liquidity_zones TEXT NOT NULL DEFAULT '[]',
                    max_trades INTEGER NOT NULL DEFAULT 3,
                    news_events TEXT NOT NULL DEFAULT '[]',
                    notes TEXT,
                    eod_journal_done INTEGER NOT NULL DEFAULT 0,
                    eod_replay_done INTEGER NOT NULL DEFAULT 0,
                    eod_playbook_done INTEGER NOT NULL DEFAULT 0,
                    eod_session_rating INTEGER,
                    created_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS playbook_entries (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    rule_type TEXT NOT NULL,
                    title TEXT NOT NULL,
                    description TEXT,
                    setup_type TEXT,
                    conditions TEXT,
                    evidence_trade_ids TEXT NOT NULL DEFAULT '[]',
                    is_active INTEGER NOT NULL DEFAULT 1,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS potential_trades (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    market TEXT NOT NULL,
                    direction TEXT NOT NULL,
                    setup_type TEXT NOT NULL DEFAULT '',
                    entry_price REAL,
                    exit_price REAL,
                    stop_loss REAL,
                    take_profit REAL,
                    potential_pnl REAL,
                    r_multiple REAL,
                    entry_time TEXT,
                    reason TEXT,
                    notes TEXT,
                    created_at TEXT NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Trades ====================

    @staticmethod
    def _trade_values(trade: Trade) -> tuple:
        return (
            trade.market,
            trade.direction,
            trade.setup_type,
            trade.entry_price,
            trade.exit_price,
            trade.stop_loss,
            trade.take_profit,
            trade.position_size,
            _to_iso(trade.entry_time),
            _to_iso(trade.exit_time),
            trade.execution_grade,
            trade.outcome,
            trade.pnl,
            trade.r_multiple,
            1 if trade.rules_followed else 0,
            trade.notes,
            json.dumps(list(trade.tags)),
            trade.created_at.isoformat(),
        )

    @staticmethod
    def _row_to_trade(row: sqlite3.Row) -> Trade:
        return Trade(
            id=row["id"],
            market=row["market"],
            direction=row["direction"],
            setup_type=row["setup_type"],
            entry_price=row["entry_price"],
            exit_price=row["exit_price"],
            stop_loss=row["stop_loss"],
            take_profit=row["take_profit"],
            position_size=row["position_size"],
            entry_time=_from_iso(row["entry_time"]),
            exit_time=_from_iso(row["exit_time"]),
            execution_grade=row["execution_grade"],
            outcome=row["outcome"],
            pnl=row["pnl"],
            r_multiple=row["r_multiple"],
            rules_followed=bool(row["rules_followed"]),
            notes=row["notes"],
            tags=tuple(json.loads(row["tags"] or "[]")),
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def add_trade(self, trade: Trade) -> Trade:
        """Insert a trade.

        Args:
            trade: Trade to store. Its ``id`` is ignored.

        Returns:
            The stored trade carrying its new database ID.
        """
        placeholders = ", ".join("?" for _ in _TRADE_COLUMNS)
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"INSERT INTO trades ({', '.join(_TRADE_COLUMNS)}) VALUES ({placeholders})",
                self._trade_values(trade),
            )
            conn.commit()
            trade_id = cursor.lastrowid
        finally:
            conn.close()

        logger.debug("Stored trade %s (%s %s)", trade_id, trade.market, trade.direction)
        return trade.model_copy(update={"id": trade_id})

    def get_trade(self, trade_id: int) -> Optional[Trade]:
        """Get a single trade by ID, or None if it does not exist."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM trades WHERE id = ?", (trade_id,))
            row = cursor.fetchone()
            return self._row_to_trade(row) if row else None
        finally:
            conn.close()

    def get_trades(
        self,
        start: Optional[date] = None,
        end: Optional[date] = None,
        setup_type: Optional[str] = None,
        outcome: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[Trade]:
        """Get trades, newest first.

        Args:
            start: Only trades entered on or after this date.
            end: Only trades entered on or before this date.
            setup_type: Only trades with this setup.
            outcome: Only trades with this outcome.
            limit: Maximum number of trades to return.

        Returns:
            List of trades ordered by creation time, descending. Date filters
            drop trades without an entry time and compare the
            stored calendar date, ignoring any UTC offset.
        """
        query = "SELECT * FROM trades"
        clauses = []
        params: list = []

        if start is not None:
            clauses.append("substr(entry_time, 1, 10) >= ?")
            params.append(start.isoformat())
        if end is not None:
            clauses.append("substr(entry_time, 1, 10) <= ?")
            params.append(end.isoformat())
        if setup_type is not None:
            clauses.append("setup_type = ?")
            params.append(setup_type)
        if outcome is not None:
            clauses.append("outcome = ?")
            params.append(outcome)

        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY created_at DESC, id DESC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [self._row_to_trade(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def update_trade(self, trade: Trade) -> bool:
        """Overwrite a stored trade.

        Args:
            trade: Trade with the ``id`` of the record to replace.

        Returns:
            True if a record was updated.

        Raises:
            ValueError: If the trade has no ID.
        """
        if trade.id is None:
            raise ValueError("Cannot update a trade without an id")

        assignments = ", ".join(f"{column} = ?" for column in _TRADE_COLUMNS)
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"UPDATE trades SET {assignments} WHERE id = ?",
                (*self._trade_values(trade), trade.id),
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def delete_trade(self, trade_id: int) -> bool:
        """Delete a trade by ID.

        The trade's rule checks go with it; reflections on it are kept and
        detached.

        Returns:
            True if a record was removed.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM trades WHERE id = ?", (trade_id,))
            deleted = cursor.rowcount > 0
            cursor.execute("DELETE FROM rule_checks WHERE trade_id = ?", (trade_id,))
            cursor.execute("UPDATE reflections SET trade_id = NULL WHERE trade_id = ?", (trade_id,))
            conn.commit()
        finally:
            conn.close()

        if deleted:
            logger.debug("Deleted trade %s", trade_id)
        return deleted

    # ==================== Streaks ====================

    @staticmethod
    def _row_to_streak(row: sqlite3.Row) -> Streak:
        return Streak(
            streak_type=row["streak_type"],
            current_count=row["current_count"],
            best_count=row["best_count"],
            last_logged_date=date.fromisoformat(row["last_logged_date"])
            if row["last_logged_date"]
            else None,
        )

    def get_streaks(self) -> list[Streak]:
        """Get all streaks."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM streaks ORDER BY streak_type")
            return [self._row_to_streak(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_streak(self, streak_type: str) -> Optional[Streak]:
        """Get a streak by type."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM streaks WHERE streak_type = ?", (streak_type,))
            row = cursor.fetchone()
            return self._row_to_streak(row) if row else None
        finally:
            conn.close()

    def save_streak(self, streak: Streak) -> None:
        """Insert or replace a streak."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT OR REPLACE INTO streaks
                (streak_type, current_count, best_count, last_logged_date)
                VALUES (?, ?, ?, ?)
                """,
                (
                    streak.streak_type,
                    streak.current_count,
                    streak.best_count,
                    streak.last_logged_date.isoformat() if streak.last_logged_date else None,
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def record_streak(self, streak_type: str, today: Optional[date] = None) -> Streak:
        """Mark activity for a streak and persist the result.

        Args:
            streak_type: Habit being tracked.
            today: Day of the activity. Defaults to today.

        Returns:
            The updated streak.
        """
        updated = advance_streak(self.get_streak(streak_type), streak_type, today or date.today())
        self.save_streak(updated)
        return updated

    # ==================== Rule Checks ====================

    @staticmethod
    def _row_to_rule_check(row: sqlite3.Row) -> RuleCheck:
        return RuleCheck(
            id=row["id"],
            trade_id=row["trade_id"],
            followed_rules=_from_flag(row["followed_rules"]),
            waited_confirmation=_from_flag(row["waited_confirmation"]),
            emotion_in_check=_from_flag(row["emotion_in_check"]),
            valid_setup=_from_flag(row["valid_setup"]),
            notes=row["notes"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def add_rule_check(self, check: RuleCheck) -> RuleCheck:
        """Save a discipline checklist for a trade.

        Returns:
            The stored checklist carrying its new database ID.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO rule_checks
                (trade_id, followed_rules, waited_confirmation, emotion_in_check,
                 valid_setup, notes, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    check.trade_id,
                    _to_flag(check.followed_rules),
                    _to_flag(check.waited_confirmation),
                    _to_flag(check.emotion_in_check),
                    _to_flag(check.valid_setup),
                    check.notes,
                    check.created_at.isoformat(),
                ),
            )
            conn.commit()
            check_id = cursor.lastrowid
        finally:
            conn.close()

        logger.debug("Stored rule check %s for trade %s", check_id, check.trade_id)
        return check.model_copy(update={"id": check_id})

    def get_rule_checks(self, trade_id: Optional[int] = None) -> list[RuleCheck]:
        """Get rule checks, newest first, optionally for one trade."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if trade_id is not None:
                cursor.execute(
                    "SELECT * FROM rule_checks WHERE trade_id = ? ORDER BY created_at DESC, id DESC",
                    (trade_id,),
                )
            else:
                cursor.execute("SELECT * FROM rule_checks ORDER BY created_at DESC, id DESC")
            return [self._row_to_rule_check(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Reflections ====================

    @staticmethod
    def _row_to_reflection(row: sqlite3.Row) -> Reflection:
        return Reflection(
            id=row["id"],
            trade_id=row["trade_id"],
            reflection_date=date.fromisoformat(row["reflection_date"]),
            pre_emotion=row["pre_emotion"],
            during_emotion=row["during_emotion"],
            post_emotion=row["post_emotion"],
            what_confirmed=row["what_confirmed"],
            what_tempted=row["what_tempted"],
            what_improve=row["what_improve"],
            notes=row["notes"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def add_reflection(self, reflection: Reflection) -> Reflection:
        """Save a reflection.

        Returns:
            The stored reflection carrying its new database ID.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO reflections
                (trade_id, reflection_date, pre_emotion, during_emotion, post_emotion,
                 what_confirmed, what_tempted, what_improve, notes, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    reflection.trade_id,
                    reflection.reflection_date.isoformat(),
                    reflection.pre_emotion,
                    reflection.during_emotion,
                    reflection.post_emotion,
                    reflection.what_confirmed,
                    reflection.what_tempted,
                    reflection.what_improve,
                    reflection.notes,
                    reflection.created_at.isoformat(),
                ),
            )
            conn.commit()
            reflection_id = cursor.lastrowid
        finally:
            conn.close()

        logger.debug("Stored reflection %s", reflection_id)
        return reflection.model_copy(update={"id": reflection_id})

    def get_reflections(
        self,
        trade_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> list[Reflection]:
        """Get reflections, newest first.

        Args:
            trade_id: Only reflections on this trade.
            limit: Maximum number of reflections to return.
        """
        query = "SELECT * FROM reflections"
        params: list = []
        if trade_id is not None:
            query += " WHERE trade_id = ?"
            params.append(trade_id)
        query += " ORDER BY created_at DESC, id DESC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [self._row_to_reflection(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    # ==================== Session Plans ====================

    @staticmethod
    def _row_to_session_plan(row: sqlite3.Row) -> SessionPlan:
        return SessionPlan(
            id=row["id"],
            plan_date=date.fromisoformat(row["plan_date"]),
            market_bias=row["market_bias"],
            htf_levels=tuple(KeyLevel(**level) for level in json.loads(row["htf_levels"])),
            ltf_levels=tuple(KeyLevel(**level) for level in json.loads(row["ltf_levels"])),
            liquidity_zones=tuple(LiquidityZone(**zone) for zone in json.loads(row["liquidity_zones"])),
            max_trades=row["max_trades"],
            news_events=tuple(NewsEvent(**event) for event in json.loads(row["news_events"])),
            notes=row["notes"],
            eod_journal_done=bool(row["eod_journal_done"]),
            eod_replay_done=bool(row["eod_replay_done"]),
            eod_playbook_done=bool(row["eod_playbook_done"]),
            eod_session_rating=row["eod_session_rating"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def save_session_plan(self, plan: SessionPlan) -> SessionPlan:
        """Insert or replace the plan for ``plan.plan_date``.

        Replacing a plan keeps the day's end-of-day review.

        Returns:
            The stored plan.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO session_plans
                (plan_date, market_bias, htf_levels, ltf_levels, liquidity_zones,
                 max_trades, news_events, notes, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(plan_date) DO UPDATE SET
                    market_bias = excluded.market_bias,
                    htf_levels = excluded.htf_levels,
                    ltf_levels = excluded.ltf_levels,
                    liquidity_zones = excluded.liquidity_zones,
                    max_trades = excluded.max_trades,
                    news_events = excluded.news_events,
                    notes = excluded.notes
                """,
                (
                    plan.plan_date.isoformat(),
                    plan.market_bias,
                    json.dumps([level.model_dump() for level in plan.htf_levels]),
                    json.dumps([level.model_dump() for level in plan.ltf_levels]),
                    json.dumps([zone.model_dump() for zone in plan.liquidity_zones]),
                    plan.max_trades,
                    json.dumps([event.model_dump() for event in plan.news_events]),
                    plan.notes,
                    plan.created_at.isoformat(),
                ),
            )
            conn.commit()
        finally:
            conn.close()

        logger.debug("Saved session plan for %s", plan.plan_date)
        return self.get_session_plan(plan.plan_date)

    def get_session_plan(self, plan_date: Optional[date] = None) -> Optional[SessionPlan]:
        """Get the plan for a day (default today), or None if there is none."""
        plan_date = plan_date or date.today()
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM session_plans WHERE plan_date = ?", (plan_date.isoformat(),))
            row = cursor.fetchone()
            return self._row_to_session_plan(row) if row else None
        finally:
            conn.close()

    def get_session_plans(self, limit: Optional[int] = None) -> list[SessionPlan]:
        """Get session plans, latest day first."""
        query = "SELECT * FROM session_plans ORDER BY plan_date DESC"
        params: list = []
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [self._row_to_session_plan(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def update_end_of_day(
        self,
        plan_id: int,
        journal_done: Optional[bool] = None,
        replay_done: Optional[bool] = None,
        playbook_done: Optional[bool] = None,
        session_rating: Optional[int] = None,
    ) -> bool:
        """Update the end-of-day review of a plan.

        Only the arguments that are not None are written.

        Returns:
            True if a plan was updated.

        Raises:
            ValueError: If the session rating is outside 1-5.
        """
        if session_rating is not None and not 1 <= session_rating <= 5:
            raise ValueError(f"Session rating must be between 1 and 5, got {session_rating}")

        updates = {
            "eod_journal_done": _to_flag(journal_done),
            "eod_replay_done": _to_flag(replay_done),
            "eod_playbook_done": _to_flag(playbook_done),
            "eod_session_rating": session_rating,
        }
        updates = {column: value for column, value in updates.items() if value is not None}
        if not updates:
            return False

        assignments = ", ".join(f"{column} = ?" for column in updates)
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"UPDATE session_plans SET {assignments} WHERE id = ?",
                (*updates.values(), plan_id),
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    # ==================== Playbook ====================

    @staticmethod
    def _row_to_playbook_entry(row: sqlite3.Row) -> PlaybookEntry:
        return PlaybookEntry(
            id=row["id"],
            rule_type=row["rule_type"],
            title=row["title"],
            description=row["description"],
            setup_type=row["setup_type"],
            conditions=json.loads(row["conditions"]) if row["conditions"] else None,
            evidence_trade_ids=tuple(json.loads(row["evidence_trade_ids"] or "[]")),
            is_active=bool(row["is_active"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )

    def add_playbook_entry(self, entry: PlaybookEntry) -> PlaybookEntry:
        """Save a playbook rule.

        Returns:
            The stored entry carrying its new database ID.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO playbook_entries
                (rule_type, title, description, setup_type, conditions,
                 evidence_trade_ids, is_active, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.rule_type,
                    entry.title,
                    entry.description,
                    entry.setup_type,
                    json.dumps(entry.conditions) if entry.conditions is not None else None,
                    json.dumps(list(entry.evidence_trade_ids)),
                    1 if entry.is_active else 0,
                    entry.created_at.isoformat(),
                    entry.updated_at.isoformat(),
                ),
            )
            conn.commit()
            entry_id = cursor.lastrowid
        finally:
            conn.close()

        logger.debug("Stored playbook entry %s (%s)", entry_id, entry.rule_type)
        return entry.model_copy(update={"id": entry_id})

    def get_playbook_entry(self, entry_id: int) -> Optional[PlaybookEntry]:
        """Get a playbook entry by ID."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT * FROM playbook_entries WHERE id = ?", (entry_id,))
            row = cursor.fetchone()
            return self._row_to_playbook_entry(row) if row else None
        finally:
            conn.close()

    def get_playbook(self, active_only: bool = True) -> list[PlaybookEntry]:
        """Get playbook entries, newest first.

        Args:
            active_only: Skip retired entries.
        """
        query = "SELECT * FROM playbook_entries"
        if active_only:
            query += " WHERE is_active = 1"
        query += " ORDER BY created_at DESC, id DESC"

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(query)
            return [self._row_to_playbook_entry(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def set_playbook_entry_active(self, entry_id: int, active: bool) -> bool:
        """Retire or restore a playbook entry.

        Returns:
            True if an entry was updated.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE playbook_entries SET is_active = ?, updated_at = ? WHERE id = ?",
                (1 if active else 0, datetime.now().isoformat(), entry_id),
            )
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    # ==================== Potential Trades ====================

    @staticmethod
    def _row_to_potential_trade(row: sqlite3.Row) -> PotentialTrade:
        return PotentialTrade(
            id=row["id"],
            market=row["market"],
            direction=row["direction"],
            setup_type=row["setup_type"],
            entry_price=row["entry_price"],
            exit_price=row["exit_price"],
            stop_loss=row["stop_loss"],
            take_profit=row["take_profit"],
            potential_pnl=row["potential_pnl"],
            r_multiple=row["r_multiple"],
            entry_time=_from_iso(row["entry_time"]),
            reason=row["reason"],
            notes=row["notes"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    def add_potential_trade(self, trade: PotentialTrade) -> PotentialTrade:
        """Save a missed trade.

        Returns:
            The stored trade carrying its new database ID.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO potential_trades
                (market, direction, setup_type, entry_price, exit_price, stop_loss,
                 take_profit, potential_pnl, r_multiple, entry_time, reason, notes, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    trade.market,
                    trade.direction,
                    trade.setup_type,
                    trade.entry_price,
                    trade.exit_price,
                    trade.stop_loss,
                    trade.take_profit,
                    trade.potential_pnl,
                    trade.r_multiple,
                    _to_iso(trade.entry_time),
                    trade.reason,
                    trade.notes,
                    trade.created_at.isoformat(),
                ),
            )
            conn.commit()
            trade_id = cursor.lastrowid
        finally:
            conn.close()

        logger.debug("Stored missed trade %s (%s)", trade_id, trade.reason)
        return trade.model_copy(update={"id": trade_id})

    def get_potential_trades(
        self,
        setup_type: Optional[str] = None,
        reason: Optional[str] = None,
        limit: Optional[int] = 100,
    ) -> list[PotentialTrade]:
        """Get missed trades, newest first.

        Args:
            setup_type: Only trades with this setup.
            reason: Only trades missed for this reason.
            limit: Maximum number of trades to return.
        """
        query = "SELECT * FROM potential_trades"
        clauses = []
        params: list = []
        if setup_type is not None:
            clauses.append("setup_type = ?")
            params.append(setup_type)
        if reason is not None:
            clauses.append("reason = ?")
            params.append(reason)

        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY created_at DESC, id DESC"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [self._row_to_potential_trade(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def delete_potential_trade(self, trade_id: int) -> bool:
        """Delete a missed trade by ID.

        Returns:
            True if a record was removed.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM potential_trades WHERE id = ?", (trade_id,))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()
