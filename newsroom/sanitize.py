# newsroom/sanitize.py
# Allow-list markup cleaner for stored free text (uses BeautifulSoup)

import re
import warnings
from typing import Dict, Set

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction, Tag

# Removed together with everything inside them
DROP_WITH_CONTENT = {
    "script", "style", "iframe", "frame", "frameset", "object", "embed",
    "applet", "form", "input", "button", "select", "textarea", "link",
    "meta", "base", "svg", "math", "noscript", "template",
}

# Kept as markup; anything else is unwrapped to its text
ALLOWED_TAGS: Dict[str, Set[str]] = {
    "a": {"href", "title", "target"},
    "abbr": {"title"},
    "b": set(), "strong": set(), "i": set(), "em": set(), "u": set(),
    "s": set(), "small": set(), "sub": set(), "sup": set(), "mark": set(),
    "p": set(), "br": set(), "hr": set(), "span": set(), "div": set(),
    "blockquote": {"cite"}, "code": set(), "pre": set(),
    "ul": set(), "ol": set(), "li": set(),
    "h1": set(), "h2": set(), "h3": set(), "h4": set(), "h5": set(), "h6": set(),
    "table": set(), "thead": set(), "tbody": set(), "tr": set(),
    "th": set(), "td": set(),
    "img": {"src", "alt", "title", "width", "height"},
}

URL_ATTRS = {"href", "src", "cite"}
_BAD_SCHEME = re.compile(r"^\s*(javascript|vbscript|data)\s*:", re.I)
_CTRL = re.compile(r"[\x00-\x20]")

_JUNK_NODES = (Comment, Declaration, Doctype, ProcessingInstruction, CData)

# emails and bare URLs are normal input here, not mistaken file names
warnings.filterwarnings("ignore", category=MarkupResemblesLocatorWarning)


def _clean_attrs(tag: Tag) -> None:
    allowed = ALLOWED_TAGS.get(tag.name, set())
    for name in list(tag.attrs):
        if name.lower() not in allowed:
            del tag.attrs[name]
            continue
        value = tag.attrs[name]
        if isinstance(value, list):
            value = " ".join(value)
        # browsers ignore control chars and spaces inside schemes ("java\tscript:")
        if name.lower() in URL_ATTRS and _BAD_SCHEME.match(_CTRL.sub("", value)):
            del tag.attrs[name]


def sanitize(text: str) -> str:
    """
    Strip script-bearing markup from user text. Safe tags survive with a
    reduced attribute set; the rest collapse to their text content.
    sanitize(sanitize(x)) == sanitize(x).
    """
    if not text:
        return ""
    soup = BeautifulSoup(text, "html.parser")

    for node in [n for n in soup.descendants if isinstance(n, _JUNK_NODES)]:
        node.extract()

    for tag in soup.find_all(True):
        if tag.decomposed:
            continue
        name = (tag.name or "").lower()
        if name in DROP_WITH_CONTENT:
            tag.decompose()

    for tag in soup.find_all(True):
        if tag.name.lower() not in ALLOWED_TAGS:
            tag.unwrap()
        else:
            _clean_attrs(tag)

    return soup.decode(formatter="minimal")
