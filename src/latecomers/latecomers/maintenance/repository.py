from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence


class LateComersRepository(Protocol):
    """Maintenance operations on the legacy `late-comers` collection."""

    def reset_all(self) -> int:
        """Replace every document with an empty one in a single commit.

        Returns how many documents were reset.
        """

        raise NotImplementedError

    def fetch_page_ids(self, *, after_id: Optional[Any], limit: int) -> Sequence[Any]:
        """Document ids ordered ascending, strictly after `after_id` when given."""

        raise NotImplementedError

    def clear_fields(self, ids: Sequence[Any]) -> int:
        """Null out the attendance fields of `ids` in a single commit."""

        raise NotImplementedError
