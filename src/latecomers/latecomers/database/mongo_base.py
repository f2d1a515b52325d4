from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, Optional, TypeVar

from pymongo.client_session import ClientSession
from pymongo.errors import PyMongoError

from ..core.exceptions import StoreError
from .connection import DatabaseConnection

T = TypeVar("T")


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Translate driver failures into StoreError at the repository boundary."""

    try:
        yield
    except PyMongoError as exc:
        raise StoreError(f"{action} failed: {exc}") from exc


def run_in_transaction(conn_factory: DatabaseConnection, callback: Callable[[ClientSession], T], *, action: str) -> T:
    """Run `callback(session)` inside one multi-document transaction.

    Every write issued with the session commits together or not at all.
    Domain errors raised by the callback abort the transaction and propagate
    unchanged.
    """

    with store_errors(action):
        with conn_factory.client.start_session() as session:
            return session.with_transaction(callback)


def entry_path(roll_number: str, field: Optional[str] = None) -> str:
    """Dotted path to a ledger entry (or one of its fields) in an account document."""

    path = f"entries.{roll_number}"
    return f"{path}.{field}" if field else path


def get_entries(doc: Optional[Dict[str, Any]]) -> Dict[str, Dict[str, Any]]:
    if not doc:
        return {}
    entries = doc.get("entries") or {}
    return {str(k): v for k, v in entries.items() if isinstance(v, dict)}
