"""
Day-partitioned, append-only event log.

One JSON Lines file per UTC calendar day: ``logs-YYYY-MM-DD.jsonl``.
The partition is chosen by wall-clock write time, never by the event's ``ts``.

Writers only ever open in append mode. Readers tolerate anything a crashed
or concurrent writer could leave behind (half lines, interleaved lines):
an unreadable line is skipped, the rest of the file still counts.

All public methods are coroutines; the file work runs via asyncio.to_thread.
"""

import asyncio
import logging
import os
import re
from datetime import date, datetime, timedelta, timezone
from typing import Callable, Optional, Union

import pydantic

from models.event import (
    InputEvent,
    LaunchEvent,
    LaunchTarget,
    dump_event,
    load_event,
)
from models.log_file import LogFileInfo

logger = logging.getLogger(__name__)

LOG_FILE_RE = re.compile(r"^logs-(\d{4}-\d{2}-\d{2})\.jsonl$")
ACCESS_MARKER = ".access_test"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def log_filename(day: date) -> str:
    return f"logs-{day.isoformat()}.jsonl"


def parse_log_filename(filename: str) -> Optional[date]:
    """Date encoded in a partition filename, or None if it isn't one."""
    match = LOG_FILE_RE.match(filename)
    if not match:
        return None
    try:
        return date.fromisoformat(match.group(1))
    except ValueError:
        return None


class EventStore:
    def __init__(
        self,
        support_path: str,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.support_path = support_path
        self._clock = clock or _utc_now

    # ─── Paths ─────────────────────────────────────────────────────────

    def _today(self) -> date:
        return self._clock().astimezone(timezone.utc).date()

    def path_for(self, day: date) -> str:
        return os.path.join(self.support_path, log_filename(day))

    def _ensure_dir(self) -> None:
        os.makedirs(self.support_path, exist_ok=True)

    # ─── Writing ───────────────────────────────────────────────────────

    def _append_sync(self, line: str) -> None:
        self._ensure_dir()
        path = self.path_for(self._today())
        with open(path, "a", encoding="utf-8") as f:
            f.write(line + "\n")

    async def append(self, event: Union[InputEvent, LaunchEvent]) -> None:
        """
        Append one event to today's partition.

        OSError propagates to the caller; nothing is retried here.
        """
        await asyncio.to_thread(self._append_sync, dump_event(event))

    def _now_ms(self) -> int:
        return int(self._clock().timestamp() * 1000)

    async def append_input(self, text: str) -> InputEvent:
        event = InputEvent(ts=self._now_ms(), text=text, len=len(text))
        await self.append(event)
        return event

    async def append_launch(self, alias_id: str, target: LaunchTarget) -> LaunchEvent:
        event = LaunchEvent(ts=self._now_ms(), alias_id=alias_id, target=target)
        await self.append(event)
        return event

    # ─── Reading ───────────────────────────────────────────────────────

    def _read_file(self, path: str) -> list[Union[InputEvent, LaunchEvent]]:
        events = []
        with open(path, encoding="utf-8", errors="replace") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    events.append(load_event(line))
                except pydantic.ValidationError as exc:
                    logger.warning(
                        "Skipping unreadable log line %s:%d: %s",
                        os.path.basename(path), lineno, exc.errors()[0]["msg"],
                    )
        return events

    def _read_recent_sync(self, days: int, limit: int) -> list[Union[InputEvent, LaunchEvent]]:
        today = self._today()
        events: list[Union[InputEvent, LaunchEvent]] = []

        for offset in range(days):
            path = self.path_for(today - timedelta(days=offset))
            if not os.path.exists(path):
                continue
            events.extend(self._read_file(path))

        events.sort(key=lambda e: e.ts, reverse=True)
        return events[:max(limit, 0)]

    async def read_recent(self, days: int = 7, limit: int = 100) -> list[Union[InputEvent, LaunchEvent]]:
        """
        Events from the last ``days`` UTC days (today included), newest first,
        at most ``limit`` of them. Missing partitions count as empty days.
        """
        return await asyncio.to_thread(self._read_recent_sync, days, limit)

    # ─── Retention ─────────────────────────────────────────────────────

    def _clean_sync(self, retention_days: int) -> int:
        deleted = 0
        today = self._today()

        try:
            for filename in sorted(os.listdir(self.support_path)):
                file_date = parse_log_filename(filename)
                if file_date is None:
                    continue

                age = (today - file_date).days
                if age > retention_days:
                    os.remove(os.path.join(self.support_path, filename))
                    deleted += 1
                    logger.info("Deleted old log file %s (%d days old)", filename, age)
        except OSError as exc:
            logger.error("Retention sweep stopped after %d deletions: %s", deleted, exc)

        return deleted

    async def clean_old_logs(self, retention_days: int = 7) -> int:
        """
        Delete partitions whose filename date is more than ``retention_days``
        days before today. Best effort: returns how many files went away and
        never raises.
        """
        return await asyncio.to_thread(self._clean_sync, retention_days)

    def _check_access_sync(self) -> bool:
        try:
            self._ensure_dir()
            marker = os.path.join(self.support_path, ACCESS_MARKER)
            with open(marker, "a", encoding="utf-8") as f:
                f.write("test")
            os.remove(marker)
        except OSError as exc:
            logger.error("Support directory %s is not writable: %s", self.support_path, exc)
            return False
        logger.debug("File access check OK for %s", self.support_path)
        return True

    async def check_access(self) -> bool:
        return await asyncio.to_thread(self._check_access_sync)

    # ─── Log file management ───────────────────────────────────────────

    def _list_sync(self) -> list[LogFileInfo]:
        if not os.path.isdir(self.support_path):
            return []

        infos = []
        for filename in os.listdir(self.support_path):
            file_date = parse_log_filename(filename)
            if file_date is None:
                continue
            path = os.path.join(self.support_path, filename)
            infos.append(LogFileInfo(
                filename=filename,
                path=path,
                size=os.path.getsize(path),
                date=file_date.isoformat(),
            ))

        infos.sort(key=lambda info: info.date, reverse=True)
        return infos

    async def list_log_files(self) -> list[LogFileInfo]:
        return await asyncio.to_thread(self._list_sync)

    def _clear_sync(self) -> int:
        deleted = 0
        for info in self._list_sync():
            try:
                os.remove(info.path)
                deleted += 1
            except OSError as exc:
                logger.error("Could not delete %s: %s", info.filename, exc)
        return deleted

    async def clear_logs(self) -> int:
        """Delete every partition file. Returns the number actually removed."""
        return await asyncio.to_thread(self._clear_sync)
