"""Input/output helpers for the starmatch CLI."""
import csv
import json
import os
import sys
from collections.abc import Iterable
from typing import TextIO

from .engine.models import Engine, MatchCase, MatchOptions

_TRUE = {"true", "1", "yes", "y"}
_FALSE = {"false", "0", "no", "n"}


def parse_expected(value: object, where: str) -> bool | None:
    if value is None or isinstance(value, bool):
        return value
    key = str(value).strip().lower()
    if not key:
        return None
    if key in _TRUE:
        return True
    if key in _FALSE:
        return False
    raise ValueError(f"{where}: invalid expected value {value!r}")


def _read_text_lines(handle: TextIO, path: str) -> list[MatchCase]:
    cases: list[MatchCase] = []
    for lineno, line in enumerate(handle, start=1):
        line = line.rstrip("\n\r")
        # a comment is a line starting with "#" that holds no tab
        if not line.strip() or (line.startswith("#") and "\t" not in line):
            continue
        fields = line.split("\t")
        if len(fields) not in (2, 3):
            raise ValueError(f"{path}:{lineno}: expected 'text<TAB>pattern[<TAB>expected]'")
        expected = parse_expected(fields[2], f"{path}:{lineno}") if len(fields) == 3 else None
        cases.append(MatchCase(text=fields[0], pattern=fields[1], expected=expected))
    return cases


def _symbols(value: object, name: str, where: str) -> str | list[object]:
    """Accept a JSON string, or a list of symbols kept element by element."""
    if isinstance(value, (str, list)):
        return value
    raise ValueError(f"{where}: '{name}' must be a string or a list, got {value!r}")


def _read_jsonl(handle: TextIO, path: str) -> list[MatchCase]:
    cases: list[MatchCase] = []
    for lineno, raw in enumerate(handle, start=1):
        raw = raw.strip()
        if not raw:
            continue
        where = f"{path}:{lineno}"
        try:
            obj = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{where}: {exc}") from exc
        if not isinstance(obj, dict) or "text" not in obj or "pattern" not in obj:
            raise ValueError(f"{where}: each line must be an object with 'text' and 'pattern'")
        cases.append(
            MatchCase(
                text=_symbols(obj["text"], "text", where),
                pattern=_symbols(obj["pattern"], "pattern", where),
                expected=parse_expected(obj.get("expected"), where),
            )
        )
    return cases


def _read_csv(handle: TextIO, path: str) -> list[MatchCase]:
    reader = csv.DictReader(handle)
    fieldnames = reader.fieldnames or []
    missing = [name for name in ("text", "pattern") if name not in fieldnames]
    if missing:
        raise ValueError(f"{path}: CSV missing required column(s) {', '.join(missing)}")
    cases: list[MatchCase] = []
    # header is line 1
    for lineno, row in enumerate(reader, start=2):
        cases.append(
            MatchCase(
                text=row["text"] or "",
                pattern=row["pattern"] or "",
                expected=parse_expected(row.get("expected"), f"{path}:{lineno}"),
            )
        )
    return cases


def _open_path(path: str) -> Iterable[MatchCase]:
    _, ext = os.path.splitext(path)
    ext = ext.lower()
    if ext in {".json", ".jsonl"}:
        with open(path, encoding="utf-8") as handle:
            yield from _read_jsonl(handle, path)
    elif ext in {".csv"}:
        with open(path, encoding="utf-8", newline="") as handle:
            yield from _read_csv(handle, path)
    else:
        with open(path, encoding="utf-8") as handle:
            yield from _read_text_lines(handle, path)


def read_cases(path: str) -> list[MatchCase]:
    return list(_open_path(path))


def load_options(path: str) -> MatchOptions:
    with open(path, encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"{path}: options file must contain a JSON object")
    defaults = MatchOptions()
    try:
        engine = Engine(str(payload.get("engine", defaults.engine.value)).lower())
    except ValueError:
        raise ValueError(f"{path}: unknown engine {payload.get('engine')!r}") from None
    for name in ("wildcard", "repeat"):
        if name in payload and not isinstance(payload[name], str):
            raise ValueError(f"{path}: {name} must be a string, got {payload[name]!r}")
    return MatchOptions(
        engine=engine,
        wildcard=payload.get("wildcard", defaults.wildcard),
        repeat=payload.get("repeat", defaults.repeat),
        cross_check=bool(payload.get("cross_check", defaults.cross_check)),
    )


def write_json(obj: object, path: str) -> None:
    if path == "-":
        json.dump(obj, sys.stdout, indent=2, sort_keys=True)
        sys.stdout.write("\n")
        sys.stdout.flush()
        return
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(obj, handle, indent=2, sort_keys=True)
        handle.write("\n")


def write_text(text: str, path: str) -> None:
    if path == "-":
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
        sys.stdout.flush()
        return
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)
