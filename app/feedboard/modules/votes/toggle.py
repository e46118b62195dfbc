"""
Client-side vote toggle.

A post is either voted or not-voted for a given client. The state lives in a
flag store (the browser's local storage in the web UI), keyed per post. It is
a convenience hint only: clearing the store lets the same person vote again.

Each toggle applies the change optimistically, then calls the API. When the
call fails, both the counter and the flag are put back and
VoteRequestFailed is raised.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from app.feedboard.constants import VOTE_FLAG_PREFIX
from app.feedboard.modules.votes.client import FeedboardClientError

logger = logging.getLogger(__name__)


class VoteRequestFailed(RuntimeError):
    pass


class VoteApi(Protocol):
    def cast_vote(self, post_id: str) -> dict: ...

    def retract_vote(self, post_id: str) -> dict: ...


class FlagStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryFlagStore:
    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileFlagStore:
    """Flags persisted to a small JSON file, so they survive restarts."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except ValueError:
            logger.warning("Ignoring unreadable vote flag file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, sort_keys=True), encoding="utf-8")

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._save(data)


class VoteToggle:
    def __init__(self, post_id: str, initial_votes: int, *, api: VoteApi, store: FlagStore) -> None:
        self.post_id = post_id
        self.api = api
        self.store = store
        self.votes_counter = initial_votes
        self.has_voted = store.get(self.flag_key) == "true"

    @property
    def flag_key(self) -> str:
        return f"{VOTE_FLAG_PREFIX}{self.post_id}"

    def _apply(self, voted: bool, votes: int) -> None:
        self.has_voted = voted
        self.votes_counter = votes
        if voted:
            self.store.set(self.flag_key, "true")
        else:
            self.store.remove(self.flag_key)

    def toggle(self) -> bool:
        """Flip the vote state. Returns the new has_voted value."""
        was_voted, old_votes = self.has_voted, self.votes_counter
        if was_voted:
            self._apply(False, old_votes - 1)
            call = self.api.retract_vote
        else:
            self._apply(True, old_votes + 1)
            call = self.api.cast_vote

        try:
            call(self.post_id)
        except Exception as e:
            self._apply(was_voted, old_votes)
            logger.warning("Vote request failed post_id=%s: %s", self.post_id, e)
            message = str(e) if isinstance(e, FeedboardClientError) else ""
            raise VoteRequestFailed(message or "Something went wrong") from e
        return self.has_voted
