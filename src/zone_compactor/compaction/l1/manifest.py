"""Setup manifest parser.

The setup file is line oriented::

    Link <to> <from>
    ...
    <zone name>
    ...

``Link Etc/UTC UTC`` declares ``UTC`` as an alias sharing the data of the
canonical zone ``Etc/UTC``. Links must precede the zone lines they affect: a
link whose alias was already listed as a zone is not honored. Every other
line names a zone file relative to the data directory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Literal

from zone_compactor.core.errors import err

from .records import SetupManifest

logger = logging.getLogger(__name__)

LINK_TOKEN = "Link"

BlankLinePolicy = Literal["skip", "error", "zone"]


def parse_manifest(lines: Iterable[str], *, blank_lines: BlankLinePolicy = "skip") -> SetupManifest:
    manifest = SetupManifest()
    queued: set[str] = set()
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            if blank_lines == "skip":
                continue
            if blank_lines == "error":
                raise err("E_BLANK_LINE", f"line {lineno}: blank line in setup manifest")
        tokens = line.split()
        if tokens and tokens[0] == LINK_TOKEN:
            _register_link(manifest, queued, tokens, lineno)
            continue
        if line in manifest.aliases:
            continue
        if line in queued:
            message = f"line {lineno}: zone '{line}' listed more than once; compacting it once"
            logger.warning(message)
            manifest.warnings.append(message)
            continue
        queued.add(line)
        manifest.zones.append(line)
    return manifest


def _register_link(manifest: SetupManifest, queued: set[str], tokens: list[str], lineno: int) -> None:
    if len(tokens) != 3:
        raise err(
            "E_LINK_MALFORMED",
            f"line {lineno}: expected 'Link <to> <from>', got {len(tokens)} token(s): {' '.join(tokens)!r}",
        )
    _, target, alias = tokens
    if alias in queued:
        message = f"line {lineno}: link '{alias}' -> '{target}' follows zone '{alias}'; link ignored"
        logger.warning(message)
        manifest.ignored_links.append(alias)
        manifest.warnings.append(message)
        return
    previous = manifest.aliases.get(alias)
    if previous is not None and previous != target:
        message = f"line {lineno}: link '{alias}' redefined from '{previous}' to '{target}'"
        logger.warning(message)
        manifest.warnings.append(message)
    manifest.aliases[alias] = target


def read_manifest(path: Path, *, blank_lines: BlankLinePolicy = "skip") -> SetupManifest:
    try:
        # text mode folds \r and \r\n into \n and splits on nothing else
        with path.open("r", encoding="utf-8") as handle:
            lines = handle.readlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise err("E_MANIFEST_UNREADABLE", f"cannot read setup manifest '{path}': {exc}") from exc
    manifest = parse_manifest(lines, blank_lines=blank_lines)
    logger.info(
        "Setup manifest parsed (path=%s, zones=%s, links=%s)",
        path,
        len(manifest.zones),
        len(manifest.aliases),
    )
    return manifest
