import os
from pathlib import Path
from typing import Any, Optional

# tomllib is stdlib in Python 3.11+. Fall back to tomli for older versions.
try:
    import tomllib  # type: ignore
except ImportError:  # pragma: no cover - platform dependent
    import tomli as tomllib  # type: ignore


ENV_PREFIX = 'KERNELPURGE_'

_ALLOWED_KEYS = {
    'sweep_roots': 'list[str]',
    'usage_path': 'path',
    'log_file': 'path',
}


def _config_file_path() -> Path:
    xdg = os.getenv('XDG_CONFIG_HOME')
    if xdg:
        base = Path(xdg)
    else:
        base = Path.home() / '.config'
    return base / 'kernelpurge' / 'config.toml'


def load_config() -> dict[str, Any]:
    """Load TOML configuration from XDG config path. Returns empty dict on error."""
    p = _config_file_path()
    if not p.exists():
        return {}
    try:
        with p.open('rb') as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def _parse_value_by_type(type_name: str, raw_value: Any):
    """Parse raw_value according to a small set of supported type names.

    Supported types: str, path, list[str]
    Returns the parsed value or raises ValueError on parse error.
    """
    if raw_value is None:
        return None

    t = type_name.strip().lower()
    if t == 'str':
        return str(raw_value)
    if t == 'path':
        if isinstance(raw_value, (list, tuple, dict)):
            raise ValueError(f"Invalid path value: {raw_value!r}")
        return Path(str(raw_value))
    if t == 'list[str]':
        if isinstance(raw_value, (list, tuple)):
            items = list(raw_value)
        else:
            # accept comma-separated string (environment variables)
            items = [s.strip() for s in str(raw_value).split(',') if s.strip()]
        return [str(i) for i in items]
    raise ValueError(f"Unsupported config type: {type_name}")


def get_value(key: str, default: Any = None) -> Any:
    """Return the effective value of a config key.

    Precedence: environment KERNELPURGE_<KEY> > config file > default.
    Values that fail to parse fall through to the next source.
    """
    if key not in _ALLOWED_KEYS:
        raise KeyError(f"Unknown config key: {key}")
    type_name = _ALLOWED_KEYS[key]

    env = os.getenv(ENV_PREFIX + key.upper())
    if env:
        try:
            return _parse_value_by_type(type_name, env)
        except ValueError:
            pass

    cfg = load_config()
    v = cfg.get(key)
    if v is not None:
        try:
            return _parse_value_by_type(type_name, v)
        except ValueError:
            return default

    return default


def get_sweep_roots(default: Optional[list[str]] = None) -> Optional[list[str]]:
    return get_value('sweep_roots', default)


def get_usage_path(default: Path = Path('/')) -> Path:
    return get_value('usage_path', default)


def get_log_file() -> Optional[Path]:
    return get_value('log_file')
