"""Split raw provider text into README content and a change description.

This is a best-effort heuristic over free-form model output. Callers should
treat the split as approximate: nothing here guarantees the document is
well-formed markdown.
"""

from __future__ import annotations

import re

from readme_updater.generation.models import NormalizedOutput

FENCE = "```"

# Label right after an opening fence that marks the block as the document.
_DOC_LABEL_RE = re.compile(r"[ \t]*(?:markdown|md)(?![\w-])", re.IGNORECASE)
_FENCE_LINE_RE = re.compile(r"[ \t]*```(.*)$")
_BLANK_LINE_RE = re.compile(r"\n[ \t]*\n")


def extract_document(raw: str) -> str:
    """Return the fenced block's interior, or ``raw`` unchanged when unfenced.

    Inside a ``markdown``/``md`` labelled block, fence lines are paired: a
    fence with an info string (```` ```bash ````) opens a nested block and a
    bare fence closes the innermost open one, so code blocks inside the README
    survive. An unlabelled block ends at the next fence. An opening fence that
    is never closed yields everything after it.
    """
    start = raw.find(FENCE)
    if start == -1:
        return raw

    label = _DOC_LABEL_RE.match(raw, start + len(FENCE))
    if label:
        body_start = label.end()
        end = _closing_fence(raw, body_start)
    else:
        body_start = start + len(FENCE)
        end = raw.find(FENCE, body_start)

    if end < body_start:
        return raw[body_start:].strip()
    return raw[body_start:end].strip()


def _closing_fence(raw: str, body_start: int) -> int:
    """Offset of the bare fence that closes a labelled block, or -1."""
    depth = 0
    offset = body_start
    for line in raw[body_start:].splitlines(keepends=True):
        fence = _FENCE_LINE_RE.match(line)
        if fence:
            if fence.group(1).strip():
                depth += 1
            elif depth:
                depth -= 1
            else:
                return offset + line.index(FENCE)
        offset += len(line)
    return -1


def extract_description(raw: str) -> str:
    """Return the prose before the first fence, or the first paragraph."""
    start = raw.find(FENCE)
    if start != -1:
        return raw[:start].strip()
    return _BLANK_LINE_RE.split(raw, maxsplit=1)[0].strip()


def normalize_output(raw: str) -> NormalizedOutput:
    return NormalizedOutput(
        document=extract_document(raw),
        description=extract_description(raw),
    )
