"""Static constants for the Raindrop CLI."""

from __future__ import annotations

API_BASE = "https://api.raindrop.io/rest/v1"

# Rate limit headers as documented by the Raindrop API
HEADER_RATE_LIMIT = "x-ratelimit-limit"
HEADER_RATE_REMAINING = "ratelimit-remaining"
HEADER_RATE_RESET = "x-ratelimit-reset"

DEFAULT_RATE_LIMIT = 120
DEFAULT_RATE_RESET_SECONDS = 60

MAX_RETRIES = 3
INITIAL_DELAY_MS = 1000
MAX_DELAY_MS = 30000
JITTER_RATIO = 0.25

DEFAULT_TIMEOUT_SECONDS = 30
MIN_TIMEOUT_SECONDS = 1
MAX_TIMEOUT_SECONDS = 300

# Pseudo-collection meaning "all bookmarks"
COLLECTION_ALL = 0

FIELD_ICONS = {
    "id": "🔖",
    "_id": "🔖",
    "title": "📌",
    "name": "📌",
    "url": "🔗",
    "link": "🔗",
    "tags": "🏷️",
    "excerpt": "📝",
    "note": "💬",
    "notes": "💬",
    "created": "📅",
    "updated": "📅",
    "lastupdated": "📅",
    "lastupdate": "📅",
    "domain": "🌐",
    "type": "📁",
    "collection": "📂",
    "collectionid": "📂",
    "count": "🔢",
}

DEFAULT_FIELD_ICON = "•"

BLOCK_FIELDS = frozenset({"excerpt", "note", "notes", "description", "content", "body"})

WRAP_WIDTH = 72
BLOCK_INDENT = 4
EMPTY_PLACEHOLDER = "—"
NO_RESULTS_MESSAGE = "No results found."
RECORD_DIVIDER = "  ─────────────────────────────────────"

TREE_ICON = "📂"
TREE_BRANCH = "├── "
TREE_LAST_BRANCH = "└── "
TREE_PIPE = "│   "
TREE_SPACE = "    "
