"""Parse ``git diff -U0`` output into per-file changed line sets."""

from __future__ import annotations

import re

from commit_monitor.constants import GIT_DEV_NULL
from commit_monitor.git.schemas import DiffDetails

# @@ -12,3 +14,5 @@ optional section heading
_HUNK_RE = re.compile(
    r"^@@ -\d+(?:,(?P<old>\d+))? \+(?P<start>\d+)(?:,(?P<new>\d+))? @@"
)

# Escapes inside a quoted path such as "b/tab\there\303\251.rb"
_ESCAPE_RE = re.compile(r"\\([0-7]{3}|.)")
_C_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}


def parse_unified_diff(text: str) -> DiffDetails:
    """Map each file in a zero-context unified diff to its new lines.

    Line numbers refer to the post-image. Pure deletions leave a
    file mapped to an empty set; deleted files are dropped.
    """
    details: DiffDetails = {}
    current: set[int] | None = None
    # Body lines still owed by the current hunk; they may look like headers.
    pending = 0

    for line in text.splitlines():
        if pending and line[:1] in ("+", "-", " "):
            pending -= 1
            continue
        if line.startswith("\\"):
            continue  # "\ No newline at end of file"
        pending = 0
        if line.startswith("+++ "):
            path = _strip_prefix(line[4:])
            current = None if path is None else details.setdefault(path, set())
            continue
        match = _HUNK_RE.match(line)
        if match is None:
            continue
        old = _count(match["old"])
        start = int(match["start"])
        new = _count(match["new"])
        pending = old + new
        if current is not None:
            current.update(range(start, start + new))

    return details


def _count(raw: str | None) -> int:
    return 1 if raw is None else int(raw)


def _strip_prefix(raw: str) -> str | None:
    """Turn a ``+++`` header target into a repo-relative path."""
    path = raw.rstrip("\t").split("\t", 1)[0]
    if path == GIT_DEV_NULL:
        return None
    if len(path) > 1 and path.startswith('"') and path.endswith('"'):
        path = _unquote(path[1:-1])
    if path.startswith("b/"):
        path = path[2:]
    return path


def _unquote(quoted: str) -> str:
    """Undo git's C-style path quoting (octal escapes are UTF-8 bytes)."""
    out = bytearray()
    pos = 0
    for match in _ESCAPE_RE.finditer(quoted):
        out += quoted[pos : match.start()].encode()
        code = match[1]
        if len(code) == 3:
            out.append(int(code, 8))
        else:
            out += _C_ESCAPES.get(code, code).encode()
        pos = match.end()
    out += quoted[pos:].encode()
    return out.decode(errors="replace")
