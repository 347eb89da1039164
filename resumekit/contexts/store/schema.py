"""
Table definitions for the resumekit store.

Each TableSchema carries the DDL plus the column metadata the store needs to
encode rows on the way in and decode them on the way out (JSON documents,
booleans, typed resume content).
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from resumekit.contexts.store.resume_content import ResumeContent

DEFAULT_RESUME_TITLE = "Untitled Resume"
DEFAULT_TEMPLATE_ID = "modern-minimal"
SUBSCRIPTION_TIERS = ("free", "premium")


def _encode_json(value: Any) -> str:
    return json.dumps(value if value is not None else {})


def _decode_json(value: Optional[str]) -> Any:
    return json.loads(value) if value else {}


def _encode_content(value: Any) -> str:
    return json.dumps(ResumeContent.coerce(value).to_dict())


def _decode_content(value: Optional[str]) -> ResumeContent:
    return ResumeContent.from_dict(json.loads(value) if value else None)


def _encode_bool(value: Any) -> int:
    return 1 if value else 0


def _decode_bool(value: Optional[int]) -> bool:
    return bool(value)


JSON_CODEC = (_encode_json, _decode_json)
CONTENT_CODEC = (_encode_content, _decode_content)
BOOL_CODEC = (_encode_bool, _decode_bool)


@dataclass(frozen=True)
class TableSchema:
    """
    Column metadata for one table.

    Attributes:
        name: Table name
        ddl: CREATE TABLE statement
        columns: All column names in declaration order
        defaults: Python-side defaults applied at insert
        codecs: column -> (encode, decode) pair
        owner_column: Column holding the owning user id (None for shared tables)
        timestamped: Whether the store maintains updated_at for this table
    """
    name: str
    ddl: str
    columns: Tuple[str, ...]
    defaults: Dict[str, Callable[[], Any]] = field(default_factory=dict)
    codecs: Dict[str, Tuple[Callable, Callable]] = field(default_factory=dict)
    owner_column: Optional[str] = None
    timestamped: bool = True

    @property
    def immutable_columns(self) -> Tuple[str, ...]:
        cols = ("id", "created_at")
        if self.owner_column:
            cols += (self.owner_column,)
        return cols

    def encode(self, row: Dict[str, Any]) -> Dict[str, Any]:
        encoded = {}
        for column, value in row.items():
            codec = self.codecs.get(column)
            encoded[column] = codec[0](value) if codec else value
        return encoded

    def decode(self, row: Dict[str, Any]) -> Dict[str, Any]:
        decoded = {}
        for column, value in row.items():
            codec = self.codecs.get(column)
            decoded[column] = codec[1](value) if codec else value
        return decoded


USERS = TableSchema(
    name="users",
    ddl="""
        CREATE TABLE IF NOT EXISTS users (
            id TEXT PRIMARY KEY,
            email TEXT NOT NULL UNIQUE,
            password_hash TEXT NOT NULL,
            metadata TEXT NOT NULL DEFAULT '{}',
            created_at TEXT NOT NULL
        )
    """,
    columns=("id", "email", "password_hash", "metadata", "created_at"),
    codecs={"metadata": JSON_CODEC},
    timestamped=False,
)

PROFILES = TableSchema(
    name="profiles",
    ddl=f"""
        CREATE TABLE IF NOT EXISTS profiles (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL UNIQUE REFERENCES users(id) ON DELETE CASCADE,
            display_name TEXT,
            avatar_url TEXT,
            subscription_tier TEXT NOT NULL DEFAULT 'free'
                CHECK (subscription_tier IN {SUBSCRIPTION_TIERS}),
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """,
    columns=(
        "id", "user_id", "display_name", "avatar_url",
        "subscription_tier", "created_at", "updated_at",
    ),
    defaults={"subscription_tier": lambda: "free"},
    owner_column="user_id",
)

RESUMES = TableSchema(
    name="resumes",
    ddl="""
        CREATE TABLE IF NOT EXISTS resumes (
            id TEXT PRIMARY KEY,
            user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            title TEXT NOT NULL,
            template_id TEXT NOT NULL,
            content TEXT NOT NULL,
            is_public INTEGER NOT NULL DEFAULT 0,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL
        )
    """,
    columns=(
        "id", "user_id", "title", "template_id", "content",
        "is_public", "created_at", "updated_at",
    ),
    defaults={
        "title": lambda: DEFAULT_RESUME_TITLE,
        "template_id": lambda: DEFAULT_TEMPLATE_ID,
        "content": ResumeContent,
        "is_public": lambda: False,
    },
    codecs={"content": CONTENT_CODEC, "is_public": BOOL_CODEC},
    owner_column="user_id",
)

RESUME_TEMPLATES = TableSchema(
    name="resume_templates",
    ddl="""
        CREATE TABLE IF NOT EXISTS resume_templates (
            id TEXT PRIMARY KEY,
            name TEXT NOT NULL,
            category TEXT NOT NULL,
            preview_url TEXT,
            is_premium INTEGER NOT NULL DEFAULT 0,
            rating REAL NOT NULL DEFAULT 4.5 CHECK (rating >= 0 AND rating <= 5),
            downloads INTEGER NOT NULL DEFAULT 0,
            template_data TEXT NOT NULL DEFAULT '{}',
            created_at TEXT NOT NULL
        )
    """,
    columns=(
        "id", "name", "category", "preview_url", "is_premium",
        "rating", "downloads", "template_data", "created_at",
    ),
    defaults={"is_premium": lambda: False, "rating": lambda: 4.5, "downloads": lambda: 0},
    codecs={"is_premium": BOOL_CODEC, "template_data": JSON_CODEC},
    timestamped=False,
)

TABLES = {schema.name: schema for schema in (USERS, PROFILES, RESUMES, RESUME_TEMPLATES)}

INDEXES = (
    "CREATE INDEX IF NOT EXISTS idx_resumes_user_id ON resumes(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_resumes_updated_at ON resumes(updated_at)",
    "CREATE INDEX IF NOT EXISTS idx_templates_downloads ON resume_templates(downloads)",
)
