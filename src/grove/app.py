"""Command-line launcher for the Grove project tools."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, TextIO, get_args, get_origin, get_type_hints

from .core.errors import ProjectError
from .events import EventBus
from .project.facade import ProjectFacade
from .project.headless import HeadlessWindow
from .project.host import DialogProvider
from .services.settings import Settings, SettingsStore
from .services.storage import PluginStorage
from .utils import logging as logging_utils

_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_FALSE_VALUES = {"0", "false", "no", "off", "disabled"}
_LOGGER = logging.getLogger(__name__)
_STORAGE_NAME = "project_plugin"


def configure_logging(settings: Settings, debug: bool = False) -> Path:
    """Route Grove's logs to the file chosen by ``settings``."""

    log_path = logging_utils.setup_logging(settings, debug=debug)
    _LOGGER.debug(
        "Logging to %s (debug=%s)",
        log_path,
        debug or settings.debug_logging,
    )
    return log_path


def load_settings(
    path: Optional[Path] = None,
    *,
    store: SettingsStore | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> Settings:
    """Load persisted settings or fall back to defaults."""

    active_store = store or SettingsStore(path)
    try:
        settings = active_store.load(overrides=overrides)
    except (OSError, ValueError) as exc:
        _LOGGER.warning("Failed to load settings from %s: %s", active_store.path, exc)
        settings = Settings()
    return settings


def build_facade(
    window: HeadlessWindow,
    settings: Settings,
    *,
    event_bus: EventBus | None = None,
    dialogs: DialogProvider | None = None,
) -> ProjectFacade:
    """Create the project coordinator for a single headless window."""

    storage = PluginStorage(_STORAGE_NAME, settings.storage_dir)
    return ProjectFacade(
        lambda: (window,),
        storage=storage,
        dialogs=dialogs,
        event_bus=event_bus or EventBus(),
        settings=settings,
    )


def main(argv: Sequence[str] | None = None, *, stream: TextIO | None = None) -> int:
    """Entry point invoked by the `grove` console script."""

    args = _parse_cli_args(argv)
    destination = stream or sys.stdout

    settings_path = args.settings_path or os.environ.get("GROVE_SETTINGS_PATH")
    resolved_path = Path(settings_path).expanduser() if settings_path else None
    settings_store = SettingsStore(resolved_path)
    try:
        cli_overrides = _coerce_cli_overrides(args.overrides or [])
    except ValueError as exc:
        print(f"Invalid --set override: {exc}", file=sys.stderr)
        return 2

    settings = load_settings(resolved_path, store=settings_store, overrides=cli_overrides or None)

    if args.dump_settings:
        _dump_settings(settings, settings_store, overrides=cli_overrides, stream=destination)
        return 0

    configure_logging(settings, _env_flag("GROVE_DEBUG", default=False))

    window = HeadlessWindow()
    facade = build_facade(window, settings)
    try:
        facade.start(window, args.paths)
        _print_session(facade, window, destination)
        if args.find is not None:
            _print_matches(facade, window, args.find, destination)
    except ProjectError as exc:
        _LOGGER.error("Project operation failed: %s", exc)
        print(str(exc), file=sys.stderr)
        return 1
    return 0


def _env_flag(name: str, *, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _print_session(facade: ProjectFacade, window: HeadlessWindow, destination: TextIO) -> None:
    tree = facade.trees.tree_for(window)
    if tree is not None:
        destination.write(f"project: {tree.mirror.root_path()}\n")
        for entry in tree.entries:
            suffix = "/" if entry.is_dir else ""
            destination.write(f"  {entry.name}{suffix}\n")
    for document in window.documents():
        marker = "*" if document is window.focused_document() else " "
        mirror = document.mirror
        label = str(mirror.identity()) if mirror is not None else document.title
        destination.write(f"{marker} {label}\n")


def _print_matches(facade: ProjectFacade, window: HeadlessWindow, query: str, destination: TextIO) -> None:
    for match in facade.find_file(window, query):
        destination.write(f"{match.label}\n")


def _parse_cli_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="grove",
        add_help=True,
        description="Open files and project directories and inspect the resulting session.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="Files to open as documents and directories to open as the project tree.",
    )
    parser.add_argument(
        "--dump-settings",
        action="store_true",
        help="Print the effective settings payload and exit.",
    )
    parser.add_argument(
        "--settings-path",
        metavar="PATH",
        help="Override the default ~/.grove/settings.json path.",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="Override persisted settings for this run (repeatable).",
    )
    parser.add_argument(
        "--find",
        metavar="QUERY",
        help="Fuzzy-search the opened project for QUERY and print the matches.",
    )
    return parser.parse_args(argv)


def _coerce_cli_overrides(items: Sequence[str]) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    if not items:
        return overrides

    fields = Settings.__dataclass_fields__  # type: ignore[attr-defined]
    type_hints = get_type_hints(Settings)
    for entry in items:
        if "=" not in entry:
            raise ValueError(f"Override '{entry}' must use KEY=VALUE syntax.")
        key, raw_value = entry.split("=", 1)
        key = key.strip()
        if not key:
            raise ValueError("Override is missing a field name.")
        if key not in fields:
            raise ValueError(f"Unknown setting '{key}'.")
        annotation = type_hints.get(key, fields[key].type)
        overrides[key] = _coerce_value(annotation, raw_value.strip())
    return overrides


def _coerce_value(annotation: Any, raw_value: str) -> Any:
    target = _resolve_annotation(annotation)
    normalized = raw_value.strip()

    if normalized.lower() in {"none", "null"} and target is not str:
        return None
    if target is str or target is Any:
        return normalized
    if target is bool:
        return _parse_bool(normalized)
    if target is int:
        return int(normalized, 10)
    if target is list:
        try:
            value = json.loads(normalized or "[]")
        except json.JSONDecodeError as exc:
            raise ValueError("List overrides must be valid JSON arrays") from exc
        if not isinstance(value, list):
            raise ValueError("List overrides must be valid JSON arrays")
        return value
    return normalized


def _resolve_annotation(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is None:
        return annotation
    if origin in {list, dict}:
        return origin
    args = [arg for arg in get_args(annotation) if arg is not type(None)]
    if not args:
        return origin
    return _resolve_annotation(args[0])


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Cannot coerce '{value}' to a boolean.")


def _dump_settings(
    settings: Settings,
    store: SettingsStore,
    *,
    overrides: Mapping[str, Any],
    stream: TextIO | None = None,
) -> None:
    destination = stream or sys.stdout
    metadata = {
        "path": str(store.path),
        "log_path": str(logging_utils.log_path_for(settings)),
        "cli_overrides": sorted(overrides.keys()),
        "environment_variables": _active_env_overrides(),
    }
    output = {"settings": asdict(settings), "meta": metadata}
    json.dump(output, destination, indent=2)
    destination.write("\n")


def _active_env_overrides() -> list[str]:
    return sorted(name for name in os.environ if name.startswith("GROVE_"))


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
