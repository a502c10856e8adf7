from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from .logger import logger
from .store import read_properties, write_properties

PROPERTY_PREFIX = "sqlline."
PROPERTY_NAME_EXIT = PROPERTY_PREFIX + "system.exit"
ENV_PREFIX = "SQLIDENT_"
RC_FILE_NAME = "sqlline.properties"

_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0"}


class OptionError(ValueError):
    """Unknown option name or a value that cannot be converted."""


@dataclass(frozen=True)
class OptionSpec:
    attr: str
    kind: type
    persist: bool = True


# Lower-cased option name -> dataclass attribute.
OPTIONS: dict[str, OptionSpec] = {
    "autocommit": OptionSpec("auto_commit", bool),
    "autosave": OptionSpec("auto_save", bool),
    "color": OptionSpec("color", bool),
    "fastconnect": OptionSpec("fast_connect", bool),
    "force": OptionSpec("force", bool),
    "headerinterval": OptionSpec("header_interval", int),
    "historyfile": OptionSpec("history_file", str),
    "incremental": OptionSpec("incremental", bool),
    "isolation": OptionSpec("isolation", str),
    "maxcolumnwidth": OptionSpec("max_column_width", int),
    "maxheight": OptionSpec("max_height", int),
    "maxwidth": OptionSpec("max_width", int),
    "numberformat": OptionSpec("number_format", str),
    "outputformat": OptionSpec("output_format", str),
    "rowlimit": OptionSpec("row_limit", int),
    "run": OptionSpec("run", str, persist=False),
    "showelapsedtime": OptionSpec("show_elapsed_time", bool),
    "showheader": OptionSpec("show_header", bool),
    "shownestederrs": OptionSpec("show_nested_errs", bool),
    "showwarnings": OptionSpec("show_warnings", bool),
    "silent": OptionSpec("silent", bool),
    "timeout": OptionSpec("timeout", int),
    "trimscripts": OptionSpec("trim_scripts", bool),
    "verbose": OptionSpec("verbose", bool),
}


def save_dir() -> Path:
    """
    Directory holding the properties and history files: ``SQLIDENT_RCDIR``
    if set, else ``SQLIDENT_BASE_DIR``, else ``~/.sqlline`` (``~/sqlline``
    on Windows).
    """
    rc_dir = os.getenv("SQLIDENT_RCDIR")
    if rc_dir:
        return Path(rc_dir)

    base_dir = os.getenv("SQLIDENT_BASE_DIR")
    if base_dir:
        path = Path(base_dir).absolute()
        path.mkdir(parents=True, exist_ok=True)
        return path

    path = (Path.home() / ("sqlline" if os.name == "nt" else ".sqlline")).absolute()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.debug("Could not create %s: %s", path, exc)
    return path


def _coerce(name: str, spec: OptionSpec, value: Any) -> Any:
    if spec.kind is bool:
        if isinstance(value, bool):
            return value
        raw = str(value).strip().lower()
        if raw in _TRUE_VALUES:
            return True
        if raw in _FALSE_VALUES:
            return False
        raise OptionError(f"{value!r} is not a boolean value for {name}")
    if spec.kind is int:
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise OptionError(f"{value!r} is not an integer value for {name}") from exc
    return None if value is None else str(value)


def render_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


@dataclass
class SessionOptions:
    auto_save: bool = False
    silent: bool = False
    color: bool = False
    show_header: bool = True
    header_interval: int = 100
    fast_connect: bool = True
    auto_commit: bool = True
    verbose: bool = False
    force: bool = False
    incremental: bool = False
    show_elapsed_time: bool = True
    show_warnings: bool = False
    show_nested_errs: bool = False
    number_format: str = "default"
    max_width: int = 2000
    max_height: int = 2000
    max_column_width: int = 100
    row_limit: int = 0
    timeout: int = -1
    isolation: str = "TRANSACTION_REPEATABLE_READ"
    output_format: str = "table"
    trim_scripts: bool = True
    history_file: str = field(default_factory=lambda: str(save_dir() / "history"))
    run: str | None = None
    rc_file: Path = field(default_factory=lambda: save_dir() / RC_FILE_NAME, repr=False)

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] | None = None) -> "SessionOptions":
        opts = cls()
        opts.load_environment(environ)
        return opts

    @staticmethod
    def property_names() -> list[str]:
        return sorted(name for name, spec in OPTIONS.items() if spec.persist)

    @staticmethod
    def possible_setting_values() -> list[str]:
        return ["yes", "no"]

    @staticmethod
    def complete(prefix: str) -> list[str]:
        prefix = prefix.lower()
        return [name for name in SessionOptions.property_names() if name.startswith(prefix)]

    def _spec(self, name: str) -> OptionSpec:
        spec = OPTIONS.get(name.lower())
        if spec is None:
            raise OptionError(f"unknown option {name!r}")
        return spec

    def get(self, name: str) -> Any:
        return getattr(self, self._spec(name).attr)

    def set_strict(self, name: str, value: Any) -> None:
        spec = self._spec(name)
        setattr(self, spec.attr, _coerce(name.lower(), spec, value))

    def set(self, name: str, value: Any, quiet: bool = False) -> bool:
        try:
            self.set_strict(name, value)
        except OptionError as exc:
            if not quiet:
                logger.error("Error setting option %s: %s", name, exc)
            return False
        return True

    def to_properties(self) -> dict[str, str]:
        props = {
            PROPERTY_PREFIX + name: render_value(self.get(name))
            for name in self.property_names()
        }
        logger.debug("properties: %s", props)
        return props

    def load_properties(self, props: Mapping[str, str]) -> None:
        for key, value in props.items():
            if key == PROPERTY_NAME_EXIT:
                continue
            if key.startswith(PROPERTY_PREFIX):
                self.set(key[len(PROPERTY_PREFIX):], value)

    def load_environment(self, environ: Mapping[str, str] | None = None) -> None:
        environ = os.environ if environ is None else environ
        for name in OPTIONS:
            value = environ.get(ENV_PREFIX + name.upper())
            if value is not None:
                self.set(name, value)

    def save(self, path: str | os.PathLike | None = None) -> Path:
        target = Path(path) if path is not None else self.rc_file
        props = self.to_properties()
        # maxwidth follows the terminal and is never persisted
        props.pop(PROPERTY_PREFIX + "maxwidth", None)
        write_properties(target, props, comment="sqlident")
        logger.debug("Saved %d options to %s", len(props), target)
        return target

    def load(self, path: str | os.PathLike | None = None) -> bool:
        source = Path(path) if path is not None else self.rc_file
        if not source.exists():
            return False
        self.load_properties(read_properties(source))
        logger.debug("Loaded options from %s", source)
        return True


__all__ = ["SessionOptions", "OptionError", "OptionSpec", "OPTIONS", "render_value", "save_dir"]
