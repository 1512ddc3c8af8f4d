"""
Hopkit Logging

Per-module loggers that print `[module] LEVEL: message`, plus structured
records (one JSON object per line) routed to a sink registered for a
module name. The controller writes a `session` record for every finished
run.

Usage:
    from hopkit.logging import get_logger, emit_record

    log = get_logger('controller')
    log.info("Run started")
    emit_record('session', {'event': 'game_over', 'score': 12})

Environment:
    HOPKIT_LOG_LEVEL=DEBUG                 default level
    HOPKIT_LOG_<MODULE>=TRACE              level for one module
    HOPKIT_LOG_DIR=/tmp/logs               where record files go
    HOPKIT_LOGGING_<MODULE>_ENABLED=true   write records for a module
"""

import json
import os
import time
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional


class LogLevel(IntEnum):
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    OFF = 100


_LEVEL_NAMES = {
    'TRACE': LogLevel.TRACE,
    'DEBUG': LogLevel.DEBUG,
    'INFO': LogLevel.INFO,
    'WARNING': LogLevel.WARNING,
    'WARN': LogLevel.WARNING,
    'ERROR': LogLevel.ERROR,
    'OFF': LogLevel.OFF,
}

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'log_dir': None,
    'modules': {},     # module -> settings from HOPKIT_LOGGING_*
}


# =============================================================================
# Record sinks
# =============================================================================

class LogSink(ABC):
    """Destination for structured records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write one JSON-serializable record for a module."""

    @abstractmethod
    def close(self) -> None:
        """Release any open files."""


class FileSink(LogSink):
    """
    Appends records to `<session_name>_<module>.jsonl` in the log directory.

    The first record of every file is a header and `close()` writes a
    footer, so a reader can tell a finished session from a crashed one.

    Args:
        log_dir: Target directory (default: get_log_dir(), resolved lazily)
        session_name: File name prefix (default: start timestamp)
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, Any] = {}

    def _path_for(self, module: str) -> Path:
        if self._log_dir is None:
            self._log_dir = Path(get_log_dir())
        return self._log_dir / f"{self._session_name}_{module}.jsonl"

    def _open(self, module: str):
        handle = self._files.get(module)
        if handle is None:
            path = self._path_for(module)
            path.parent.mkdir(parents=True, exist_ok=True)
            handle = open(path, 'a')
            self._files[module] = handle
            self._write(handle, {
                'type': 'header',
                'module': module,
                'session_name': self._session_name,
                'start_time_iso': time.strftime("%Y-%m-%dT%H:%M:%S"),
            })
        return handle

    @staticmethod
    def _write(handle, record: Dict[str, Any]) -> None:
        handle.write(json.dumps(record) + "\n")

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        self._write(self._open(module), {'wall_time': time.time(), **record})

    def close(self) -> None:
        for module, handle in self._files.items():
            self._write(handle, {
                'type': 'footer',
                'module': module,
                'end_time_iso': time.strftime("%Y-%m-%dT%H:%M:%S"),
            })
            handle.close()
        self._files.clear()

    @property
    def log_paths(self) -> Dict[str, Path]:
        """Files opened so far, keyed by module."""
        return {module: self._path_for(module) for module in self._files}


class NullSink(LogSink):
    """Discards records."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def close(self) -> None:
        pass


_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    _sinks[module] = sink


def get_sink(module: str) -> Optional[LogSink]:
    return _sinks.get(module)


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Send a record to the sink registered for `module`.

    Returns:
        False when no sink is registered (the record is dropped)
    """
    sink = _sinks.get(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


def create_sink_for_environment(module: str, session_name: Optional[str] = None) -> LogSink:
    """FileSink when HOPKIT_LOGGING_<MODULE>_ENABLED is true, else NullSink."""
    settings = _config['modules'].get(module.lower(), {})
    if not settings.get('enabled', False):
        return NullSink()
    return FileSink(log_dir=settings.get('dir'), session_name=session_name)


# =============================================================================
# Configuration
# =============================================================================

def get_log_dir() -> str:
    """Configured directory, then HOPKIT_LOG_DIR, then $XDG_DATA_HOME/hopkit/logs."""
    configured = _config.get('log_dir') or os.environ.get('HOPKIT_LOG_DIR')
    if configured:
        return str(Path(configured).expanduser())
    data_home = os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))
    return str(Path(data_home) / 'hopkit' / 'logs')


def _level_from_string(name: str) -> LogLevel:
    return _LEVEL_NAMES.get(name.upper(), LogLevel.INFO)


def _parse_env_value(value: str) -> Any:
    lower = value.lower()
    if lower in ('true', '1', 'yes', 'on'):
        return True
    if lower in ('false', '0', 'no', 'off'):
        return False
    return value


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    log_dir: Optional[str] = None,
) -> None:
    """
    Set the default level, optional per-module levels and the record directory.

    Unknown level names fall back to INFO.
    """
    _config['default_level'] = _level_from_string(level)
    for module, module_level in (modules or {}).items():
        _config['module_levels'][module] = _level_from_string(module_level)
    if log_dir:
        _config['log_dir'] = log_dir


def _load_env_config() -> None:
    for key, value in os.environ.items():
        if key == 'HOPKIT_LOG_LEVEL':
            _config['default_level'] = _level_from_string(value)
        elif key == 'HOPKIT_LOG_DIR':
            _config['log_dir'] = value
        elif key.startswith('HOPKIT_LOG_'):
            _config['module_levels'][key[len('HOPKIT_LOG_'):].lower()] = _level_from_string(value)
        elif key.startswith('HOPKIT_LOGGING_'):
            # HOPKIT_LOGGING_SESSION_ENABLED -> modules['session']['enabled']
            module, _, setting = key[len('HOPKIT_LOGGING_'):].lower().partition('_')
            if module and setting:
                _config['modules'].setdefault(module, {})[setting] = _parse_env_value(value)


_load_env_config()


# =============================================================================
# Loggers
# =============================================================================

class HopLogger:
    """Prints messages for one module at or above its effective level."""

    def __init__(self, module: str):
        self.module = module
        self._key = module.lower().replace('.', '_')

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self._key, _config['default_level'])

    def _log(self, level: LogLevel, label: str, msg: str, args) -> None:
        if level < self.level:
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}")

    def trace(self, msg: str, *args) -> None:
        self._log(LogLevel.TRACE, 'TRACE', msg, args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, args)


@lru_cache(maxsize=64)
def get_logger(module: str) -> HopLogger:
    """Cached logger for `module`; the same name always returns the same logger."""
    return HopLogger(module)
