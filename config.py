from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class MenuSource(Enum):
    document = "document"
    feed = "feed"


class Config(BaseSettings):
    env: Env = Env.local
    menu_source: MenuSource = MenuSource.document
    menus_dir: Path = Path("menus")
    uploads_dir: Path = Path("uploads")
    feed_url: str = ""
    feed_timeout: float = 10.0
    boilerplate_suffixes: list[str] = ["64 grader"]
    log_level: str = "INFO"
