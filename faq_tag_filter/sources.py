"""Entry snapshot sources: where FAQ content comes from."""

import json
import logging
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
from pydantic import BaseModel, ValidationError, field_validator

from .config import config
from .models import Entry

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Raised when a snapshot cannot be read or is not a valid entry list."""


class EntryPayload(BaseModel):
    """One entry as it appears in a snapshot payload."""
    id: Optional[str] = None
    question: str = ""
    answer: Optional[str] = None
    tags: list[str] = []

    @field_validator("tags", mode="before")
    @classmethod
    def _split_single_field(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value


def _unused_id(candidate: str, seen_ids: set[str]) -> str:
    entry_id = candidate
    suffix = 1
    while entry_id in seen_ids:
        suffix += 1
        entry_id = f"{candidate}-{suffix}"
    return entry_id


def parse_snapshot(raw: Any) -> list[Entry]:
    """
    Turn a raw JSON payload into entries.

    Items without a question are dropped. Missing ids become `faq-<index>`.
    """
    if not isinstance(raw, list):
        raise SnapshotError(f"Snapshot must be a list of entries, got {type(raw).__name__}")

    entries = []
    seen_ids: set[str] = set()
    for index, item in enumerate(raw):
        try:
            payload = EntryPayload.model_validate(item)
        except ValidationError as e:
            raise SnapshotError(f"Invalid entry at index {index}: {e}") from e

        question = payload.question.strip()
        if not question:
            logger.debug(f"Skipping entry {index} without a question")
            continue

        entry_id = (payload.id or "").strip() or f"faq-{index}"
        if entry_id in seen_ids:
            unique_id = _unused_id(f"faq-{index}", seen_ids)
            logger.warning(f"Duplicate entry id {entry_id}, using {unique_id}")
            entry_id = unique_id
        seen_ids.add(entry_id)

        entries.append(Entry(
            id=entry_id,
            question=question,
            answer=payload.answer or config.missing_answer_text,
            tags=payload.tags,
        ))
    return entries


class SnapshotSource:
    """
    Base class for entry sources.

    Sources announce content changes to subscribers; they never push
    partial updates, listeners are expected to re-fetch everything.
    """

    def __init__(self):
        self._listeners: list[Callable[[], Any]] = []

    async def fetch(self) -> list[Entry]:
        raise NotImplementedError

    def subscribe(self, listener: Callable[[], Any]) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify_changed(self) -> None:
        """Tell subscribers the content has changed."""
        for listener in list(self._listeners):
            listener()


class StaticSnapshotSource(SnapshotSource):
    """In-memory source, mostly useful for embedding and tests."""

    def __init__(self, entries: list[Entry] | None = None):
        super().__init__()
        self.entries = list(entries or [])

    async def fetch(self) -> list[Entry]:
        return list(self.entries)

    def replace(self, entries: list[Entry]) -> None:
        """Swap in new content and notify subscribers."""
        self.entries = list(entries)
        self.notify_changed()


class FileSnapshotSource(SnapshotSource):
    """Reads entries from a JSON file."""

    def __init__(self, path: str | Path):
        super().__init__()
        self.path = Path(path)

    def load(self) -> list[Entry]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise SnapshotError(f"Cannot read snapshot {self.path}: {e}") from e
        return parse_snapshot(raw)

    async def fetch(self) -> list[Entry]:
        return self.load()


class HttpSnapshotSource(SnapshotSource):
    """Fetches entries as JSON from the host page."""

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__()
        self.url = url
        self.timeout = timeout or config.request_timeout
        self.transport = transport

    async def fetch(self) -> list[Entry]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.url)
                response.raise_for_status()
                raw = response.json()
        except httpx.HTTPError as e:
            raise SnapshotError(f"Cannot fetch snapshot from {self.url}: {e}") from e
        except ValueError as e:
            raise SnapshotError(f"Snapshot from {self.url} is not JSON: {e}") from e
        return parse_snapshot(raw)


def source_from_config() -> Optional[SnapshotSource]:
    """Build the source named in the configuration, if any."""
    if config.snapshot_url:
        return HttpSnapshotSource(config.snapshot_url)
    if config.snapshot_path:
        return FileSnapshotSource(config.snapshot_path)
    return None
