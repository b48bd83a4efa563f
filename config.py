"""Process configuration for the demo server.

Values come from the environment (and an optional `.env` file next to where
the server is started). A `Config` is built once at startup and handed to
`app.create_app`; nothing reads the environment after that.
"""
from dataclasses import dataclass, replace
from pathlib import Path
import logging
import os

from dotenv import dotenv_values

DEFAULT_PORT = 3000
DEFAULT_HOST = '0.0.0.0'
DEFAULT_STATIC_ROOT = Path(__file__).parent / 'web'

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    static_root: Path = DEFAULT_STATIC_ROOT
    log_level: str = 'INFO'

    def with_overrides(self, host=None, port=None):
        """Return a copy with CLI overrides applied (None means keep)."""
        changes = {}
        if host:
            changes['host'] = host
        if port is not None:
            changes['port'] = port
        return replace(self, **changes)


def parse_port(value):
    """Parse PORT; anything missing or unusable falls back to 3000."""
    if value is None or str(value).strip() == '':
        return DEFAULT_PORT
    try:
        port = int(str(value).strip())
    except ValueError:
        logger.warning("Ignoring unparseable PORT %r, using %s", value, DEFAULT_PORT)
        return DEFAULT_PORT
    if not 1 <= port <= 65535:
        logger.warning("Ignoring out of range PORT %r, using %s", value, DEFAULT_PORT)
        return DEFAULT_PORT
    return port


def load_config(environ=None, env_file='.env'):
    """Build a Config from `environ` (defaults to os.environ).

    Keys from `env_file` are used only when the environment does not set them.
    Pass env_file=None to skip the file.
    """
    values = {}
    if env_file and Path(env_file).is_file():
        values.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    values.update(os.environ if environ is None else environ)

    static_root = values.get('STATIC_ROOT')
    return Config(
        port=parse_port(values.get('PORT')),
        host=values.get('HOST') or DEFAULT_HOST,
        static_root=Path(static_root).resolve() if static_root else DEFAULT_STATIC_ROOT,
        log_level=(values.get('LOG_LEVEL') or 'INFO').upper(),
    )
