import asyncio
import os
from pathlib import Path
import tempfile

from domain.models import Menu, WeekNumber


class MenuNotFound(Exception):
    def __init__(self, week_number: WeekNumber) -> None:
        super().__init__(f"Menu not found for week {week_number}")
        self.week_number = week_number


def _write_atomic(path: Path, content: str) -> None:
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


class MenuRepository:
    """One `<week>.json` per week under `menus_dir`."""

    def __init__(self, menus_dir: Path) -> None:
        self.menus_dir = menus_dir
        self._locks: dict[str, asyncio.Lock] = {}
        self._writers: dict[str, int] = {}

    def path(self, week_number: WeekNumber) -> Path:
        return self.menus_dir / f"{week_number}.json"

    async def get(self, week_number: WeekNumber) -> Menu:
        if not str(week_number).isdigit():
            raise MenuNotFound(week_number)
        path = self.path(week_number)
        try:
            data = await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError:
            raise MenuNotFound(week_number)
        return Menu.from_json(data)

    async def save(self, menu: Menu, week_number: WeekNumber) -> Path:
        """Write a week's menu. Same-week writers queue up; the last one wins."""
        path = self.path(week_number)
        key = str(week_number)
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._writers[key] = self._writers.get(key, 0) + 1
        try:
            async with lock:
                await asyncio.to_thread(_write_atomic, path, menu.to_json())
        finally:
            # Last writer for the week drops its lock.
            self._writers[key] -= 1
            if not self._writers[key]:
                del self._writers[key]
                del self._locks[key]
        return path
