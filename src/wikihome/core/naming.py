"""Display names and link fragments for wiki entries.

Links follow one of two strategies, picked once per node from its depth:

* ``root_link`` for direct children of the scanned root. The raw entry name
  is used as-is, so ``guide.md`` links to ``guide.md`` and folder ``api``
  links to ``api``. These are valid wiki page targets without encoding.
* ``nested_link`` for everything deeper. The markdown suffix is dropped and
  the name is percent-encoded, then appended to the ancestor's link:
  ``api/getting%20started``.
"""

import re
from typing import Callable
from urllib.parse import quote

MARKDOWN_SUFFIX = ".md"
KNOWN_EXTENSIONS = (".md", ".markdown")
DISPLAY_SEPARATOR = " > "

_SEPARATORS = re.compile(r"[-_]+")


def strip_markdown_suffix(raw_name: str) -> str:
    """Return the name without its trailing markdown suffix."""
    return raw_name.removesuffix(MARKDOWN_SUFFIX)


def humanize(raw_name: str) -> str:
    """Turn a filesystem name into a title: ``getting_started.md`` -> ``Getting Started``."""
    base = raw_name
    for extension in KNOWN_EXTENSIONS:
        if base.endswith(extension):
            base = base[: -len(extension)]
            break
    words = _SEPARATORS.sub(" ", base).split()
    if not words:
        return base or raw_name
    return " ".join(word[:1].upper() + word[1:] for word in words)


def compose_display_name(name: str, ancestor_display: str, depth: int) -> str:
    """Folder titles carry their ancestry below the root's direct children."""
    own = humanize(name)
    if depth == 0 or not ancestor_display:
        return own
    return f"{ancestor_display}{DISPLAY_SEPARATOR}{own}"


def root_link(raw_name: str, ancestor_link: str) -> str:
    return raw_name


def nested_link(raw_name: str, ancestor_link: str) -> str:
    return f"{ancestor_link}/{quote(strip_markdown_suffix(raw_name), safe='')}"


LINK_STRATEGIES: dict[str, Callable[[str, str], str]] = {
    "root": root_link,
    "nested": nested_link,
}


def link_strategy(depth: int) -> Callable[[str, str], str]:
    """Select the link strategy for a node at ``depth``."""
    return LINK_STRATEGIES["root" if depth == 0 else "nested"]


def derive_link(raw_name: str, ancestor_link: str, depth: int) -> str:
    """Build the link fragment used to cite an entry from a home file."""
    return link_strategy(depth)(raw_name, ancestor_link)
