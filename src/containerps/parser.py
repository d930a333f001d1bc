"""
Parser for the engine's extended container listing.

One line of `docker container list --all --size` output looks like:

    3f2a9c1b7d4e   nginx:latest   "/docker-entrypoint.…"   2 hours ago   Up 2 hours   0.0.0.0:80->80/tcp   web   2B (virtual 187MB)

Columns are aligned with runs of at least two spaces (or tabs when a
`table` format with `\\t` is used), while the free-text fields themselves only
contain single spaces. The quoted COMMAND column is the exception: a
truncated command may hold any spacing, so a quoted string is always read
as one field. An empty PORTS column disappears entirely from a space-aligned
line, so a line carries seven or eight fields; anything between STATUS and
NAMES is the port mapping.
"""

import re
from typing import List

from .model import Container

# A quoted string, or words joined by single spaces
FIELD = re.compile(r'"(?:[^"\\]|\\.)*"|\S+(?: \S+)*')

# id, image, command, created, status, names, size
MIN_FIELDS = 7


class ParseError(ValueError):
    def __init__(self, message: str, line: str = ""):
        super().__init__(message)
        self.line = line


def split_fields(line: str) -> List[str]:
    line = line.strip()
    if "\t" in line:
        return [f.strip() for f in line.split("\t")]
    return FIELD.findall(line)


def parse_line(line: str) -> Container:
    fields = split_fields(line)
    if len(fields) < MIN_FIELDS or not fields[0]:
        raise ParseError(
            f"Expected at least {MIN_FIELDS} fields, got {len(fields)}: {line!r}",
            line=line,
        )

    container_id, image, command, created, status = fields[:5]
    name, size = fields[-2:]
    ports = "  ".join(f for f in fields[5:-2] if f)

    return Container(
        id=container_id,
        image=image,
        entrypoint=command.strip('"'),
        created_at=created,
        status_text=status,
        ports=ports,
        name=name,
        size_text=size,
    )
