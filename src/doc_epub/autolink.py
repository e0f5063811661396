"""
Cross-reference autolinking for Markdown extras.

Inline code spans that name a documented entity become Markdown links to
that entity's page::

    `Foo.Bar`        -> [`Foo.Bar`](Foo.Bar.xhtml)
    `Foo.Bar.run/2`  -> [`Foo.Bar.run/2`](Foo.Bar.xhtml)

Names whose root segment is a configured dependency link to the
dependency's documentation instead. Anything unresolved is left as is, as
is code inside fenced blocks and spans that are already link text.
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from doc_epub.models import DocumentedEntity

_FENCE = re.compile(r"(^```.*?^```[ \t]*$)", re.MULTILINE | re.DOTALL)

_CODE_REF = re.compile(
    r"(?<![`\[])`[ ]*"
    r"(?P<name>[A-Za-z_][\w!?]*(?:\.[A-Za-z_][\w!?]*)*)"
    r"(?P<arity>/\d+)?"
    r"[ ]*`(?![`\]])"
)


def resolve(
    name: str,
    ids: set[str],
    deps: Mapping[str, str],
    ext: str = ".xhtml",
    arity: str | None = None,
) -> str | None:
    """Return the link target for a referenced name, or None if unknown.

    ``arity`` (``"/2"``) marks ``name`` as a function reference, which
    resolves to the page of its owning entity.
    """
    if arity is None and name in ids:
        return f"{name}{ext}"

    # Function reference: strip the last segment and try the owning entity.
    owner, _, fun = name.rpartition(".")
    if arity and owner in ids:
        return f"{owner}{ext}"

    root = name.split(".", 1)[0]
    if root in deps:
        base = deps[root].rstrip("/")
        if arity and owner:
            return f"{base}/{owner}.html#{fun}{arity}"
        return f"{base}/{name}.html"

    return None


def project_doc(
    text: str,
    entities: Iterable[DocumentedEntity],
    deps: Mapping[str, str] | None = None,
    ext: str = ".xhtml",
) -> str:
    """Rewrite entity references in Markdown ``text`` into links."""
    ids = {entity.id for entity in entities}
    deps = deps or {}

    def link(match: re.Match[str]) -> str:
        name, arity = match.group("name"), match.group("arity")
        target = resolve(name, ids, deps, ext, arity=arity)
        if target is None:
            return match.group(0)
        label = name + (arity or "")
        return f"[`{label}`]({target})"

    parts = _FENCE.split(text)
    # Odd indices are fenced blocks captured by the split.
    return "".join(
        part if i % 2 else _CODE_REF.sub(link, part)
        for i, part in enumerate(parts)
    )
