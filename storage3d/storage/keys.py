"""Object key naming for uploaded models and generated pages."""

from __future__ import annotations

import secrets
from typing import Callable

# nanoid alphabet: URL-safe, 64 symbols
ID_ALPHABET = "_-0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
DEFAULT_ID_SIZE = 10

MODELS_PREFIX = "3d-models"
PAGES_PREFIX = "3d-pages"

IdGenerator = Callable[[], str]


def generate_id(size: int = DEFAULT_ID_SIZE) -> str:
    """Return a random URL-safe identifier of ``size`` characters."""
    if size < 1:
        raise ValueError("size must be positive")
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(size))


def sanitize_file_name(file_name: str) -> str:
    """Drop directory parts (``/`` or ``\\``); the name itself is kept as given."""
    base = file_name.replace("\\", "/").rsplit("/", 1)[-1]
    return base or "model"


def make_key(prefix: str, unique_id: str, file_name: str) -> str:
    """
    Build ``<prefix>/<unique_id>-<file_name>``.

    Pure: the same inputs always produce the same key. Uniqueness comes
    entirely from ``unique_id``.
    """
    return f"{prefix.rstrip('/')}/{unique_id}-{sanitize_file_name(file_name)}"


def make_page_key(unique_id: str) -> str:
    return f"{PAGES_PREFIX}/{unique_id}.html"
