"""SQLite chat room backend.

Provides persistent chat rooms and their messages in an embedded SQLite
database file. Uses aiosqlite for async access so the store can be used
from inside the Textual event loop.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path

import aiosqlite

from .models import ChatRoom, Role, RoomMessage

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "db.sql"

# Same layout SQLite's CURRENT_TIMESTAMP produces, plus microseconds,
# so rows seeded by hand sort together with rows written here.
_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def _utc_now_text() -> str:
    return datetime.now(timezone.utc).strftime(_TIMESTAMP_FORMAT)


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone()


class RoomStore:
    """SQLite-backed chat rooms.

    Rooms are listed and opened on demand; a room's messages are only
    queried when the room is opened.
    """

    def __init__(self, path: str | Path = DEFAULT_DB_PATH):
        self._db_path = Path(path)
        self._connection: aiosqlite.Connection | None = None

    async def connect(self) -> None:
        """Open the database and create the schema if needed."""
        if self._db_path.parent != Path("."):
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(self._db_path)
        await self._connection.execute("PRAGMA foreign_keys = ON")
        await self._create_schema()
        logger.debug("Connected to room database %s", self._db_path)

    async def _create_schema(self) -> None:
        """Create database tables."""
        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS chat_rooms (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await self._connection.execute("""
            CREATE TABLE IF NOT EXISTS messages (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                chat_room_id INTEGER NOT NULL,
                role TEXT NOT NULL DEFAULT 'user',
                content TEXT NOT NULL,
                created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (chat_room_id) REFERENCES chat_rooms(id) ON DELETE CASCADE
            )
        """)

        await self._connection.execute("""
            CREATE INDEX IF NOT EXISTS idx_messages_room
            ON messages(chat_room_id, created_at)
        """)

        await self._connection.commit()

    async def disconnect(self) -> None:
        """Close database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    async def __aenter__(self) -> "RoomStore":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise RuntimeError("RoomStore is not connected; call connect() first")
        return self._connection

    async def list_rooms(self) -> list[ChatRoom]:
        """List all chat rooms, oldest first."""
        conn = self._require_connection()
        async with conn.execute(
            "SELECT id, name, created_at FROM chat_rooms ORDER BY created_at ASC, id ASC"
        ) as cursor:
            rows = await cursor.fetchall()

        return [
            ChatRoom(id=room_id, name=name, created_at=_parse_timestamp(created_at))
            for room_id, name, created_at in rows
        ]

    async def get_room(self, room_id: int) -> ChatRoom | None:
        """Get a single room by id."""
        conn = self._require_connection()
        async with conn.execute(
            "SELECT id, name, created_at FROM chat_rooms WHERE id = ?",
            (room_id,)
        ) as cursor:
            row = await cursor.fetchone()

        if row is None:
            return None
        return ChatRoom(id=row[0], name=row[1], created_at=_parse_timestamp(row[2]))

    async def get_messages(self, room_id: int) -> list[RoomMessage]:
        """Load a room's messages in chronological order."""
        conn = self._require_connection()
        async with conn.execute(
            """
            SELECT id, chat_room_id, role, content, created_at
            FROM messages
            WHERE chat_room_id = ?
            ORDER BY created_at ASC, id ASC
            """,
            (room_id,)
        ) as cursor:
            rows = await cursor.fetchall()

        return [
            RoomMessage(
                id=message_id,
                chat_room_id=chat_room_id,
                role=Role(role),
                content=content,
                created_at=_parse_timestamp(created_at),
            )
            for message_id, chat_room_id, role, content, created_at in rows
        ]

    async def create_room(self, name: str) -> ChatRoom:
        """Create a new chat room.

        Raises:
            ValueError: If the name is empty
        """
        name = name.strip()
        if not name:
            raise ValueError("Chat room name must not be empty")

        conn = self._require_connection()
        created_at = _utc_now_text()
        cursor = await conn.execute(
            "INSERT INTO chat_rooms (name, created_at) VALUES (?, ?)",
            (name, created_at)
        )
        await conn.commit()
        logger.info("Created chat room %d (%s)", cursor.lastrowid, name)
        return ChatRoom(id=cursor.lastrowid, name=name, created_at=_parse_timestamp(created_at))

    async def add_message(self, room_id: int, role: Role | str, content: str) -> RoomMessage:
        """Append a message to a room."""
        conn = self._require_connection()
        role = Role(role)
        created_at = _utc_now_text()
        cursor = await conn.execute(
            """
            INSERT INTO messages (chat_room_id, role, content, created_at)
            VALUES (?, ?, ?, ?)
            """,
            (room_id, role.value, content, created_at)
        )
        await conn.commit()
        return RoomMessage(
            id=cursor.lastrowid,
            chat_room_id=room_id,
            role=role,
            content=content,
            created_at=_parse_timestamp(created_at),
        )

    @property
    def db_path(self) -> Path:
        return self._db_path
