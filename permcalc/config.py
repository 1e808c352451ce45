import logging
import os
import typing

from coredis import Redis
from dotenv import load_dotenv

DEFAULT_REDIS_URL = "redis://localhost:6379"
DEFAULT_LOG_LEVEL = "INFO"


class Settings(typing.NamedTuple):
    redis_url: str = DEFAULT_REDIS_URL
    log_level: str = DEFAULT_LOG_LEVEL


def load_settings() -> Settings:
    load_dotenv()
    return Settings(
        redis_url=os.getenv("REDIS_URL", DEFAULT_REDIS_URL),
        log_level=os.getenv("PERMCALC_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )


def create_redis(settings: Settings) -> Redis[bytes]:
    return Redis.from_url(settings.redis_url)


def setup_logs(settings: Settings) -> None:
    levels = {"permcalc": settings.log_level}
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)
