"""Reader and writer for installed package ``.conf`` records.

The format is a list of ``field-name: value`` entries. A line starting in
column 0 opens a field; indented lines continue it. List-valued fields are
whitespace separated, and an element containing whitespace is written as a
double-quoted string with backslash escapes.
"""

from __future__ import annotations

import re

from sandfix_core.errors import MalformedRecordError
from sandfix_core.store.models import PATH_FIELDS, PackageRecord

_FIELD_RE = re.compile(r"([A-Za-z][A-Za-z0-9_-]*)\s*:(.*)")
_TOKEN_RE = re.compile(r'"((?:[^"\\]|\\.)*)"|(\S+)')
_ESCAPE_RE = re.compile(r"\\(.)")
_NEEDS_QUOTES_RE = re.compile(r'[\s"\\]')

# on-disk name -> PackageRecord attribute
_LIST_FIELDS: dict[str, str] = {"depends": "depends"}
_LIST_FIELDS.update({disk: attr for attr, disk in PATH_FIELDS.items()})


def _split_list(raw: str) -> tuple[str, ...]:
    tokens: list[str] = []
    for m in _TOKEN_RE.finditer(raw):
        if m.group(1) is not None:
            tokens.append(_ESCAPE_RE.sub(r"\1", m.group(1)))
        else:
            tokens.append(m.group(2))
    return tuple(tokens)


def _quote(token: str) -> str:
    if token and not _NEEDS_QUOTES_RE.search(token):
        return token
    escaped = token.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def parse_record(text: str, source: str = "<string>") -> PackageRecord:
    """Parse one record file into a PackageRecord.

    Raises MalformedRecordError when a line cannot belong to any field or
    the ``id`` field is missing.
    """
    raw_fields: dict[str, str] = {}
    order: list[str] = []
    current: str | None = None

    for lineno, line in enumerate(text.splitlines(), start=1):
        if line.startswith("--"):
            continue
        if line and not line[0].isspace():
            m = _FIELD_RE.fullmatch(line)
            if m is None:
                raise MalformedRecordError(source, f"line {lineno} is not a field: {line!r}")
            current = m.group(1).lower()
            if current not in raw_fields:
                order.append(current)
                raw_fields[current] = m.group(2)
            else:
                raw_fields[current] += "\n" + m.group(2)
            continue
        if current is None:
            if line.strip():
                raise MalformedRecordError(source, f"line {lineno} continues no field")
            continue
        raw_fields[current] += "\n" + line

    if "id" not in raw_fields or not raw_fields["id"].strip():
        raise MalformedRecordError(source, "missing id field")

    typed: dict[str, tuple[str, ...]] = {}
    opaque: dict[str, str] = {}
    for name, raw in raw_fields.items():
        if name in _LIST_FIELDS:
            typed[_LIST_FIELDS[name]] = _split_list(raw)
        elif name != "id":
            opaque[name] = raw

    return PackageRecord(
        id=raw_fields["id"].strip(),
        fields=opaque,
        field_order=tuple(order),
        **typed,
    )


def _render_list(name: str, values: tuple[str, ...]) -> str:
    if not values:
        return f"{name}:"
    if len(values) == 1:
        return f"{name}: {_quote(values[0])}"
    return f"{name}:\n" + "\n".join(f"    {_quote(v)}" for v in values)


def render_record(record: PackageRecord) -> str:
    """Serialize *record*, keeping the original field order where known."""
    lines: list[str] = []
    emitted: set[str] = set()

    def emit(name: str) -> None:
        if name == "id":
            lines.append(f"id: {record.id}")
        elif name in _LIST_FIELDS:
            lines.append(_render_list(name, getattr(record, _LIST_FIELDS[name])))
        elif name in record.fields:
            lines.append(f"{name}:{record.fields[name]}")
        else:
            return
        emitted.add(name)

    for name in record.field_order:
        emit(name)
    # Fields set on the record but absent from the original layout.
    for name in ("id", *record.fields):
        if name not in emitted:
            emit(name)
    for name, attr in _LIST_FIELDS.items():
        if name not in emitted and getattr(record, attr):
            emit(name)

    return "\n".join(lines) + "\n"
