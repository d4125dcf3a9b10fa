"""
Allow-list HTML sanitizer for feed descriptions.

Feed markup is untrusted. Only a small set of formatting tags survives;
every link is forced to open in a new tab without referrer or opener.
"""

import re
from typing import Optional

from bs4 import BeautifulSoup, Comment

ALLOWED_TAGS = frozenset(
    {"b", "i", "em", "strong", "a", "code", "pre", "br", "p", "ul", "ol", "li", "blockquote", "img"}
)

ALLOWED_ATTRIBUTES = {
    "a": frozenset({"href", "title", "target", "rel"}),
    "img": frozenset({"src", "alt"}),
}

URL_ATTRIBUTES = frozenset({"href", "src"})
ALLOWED_SCHEMES = frozenset({"http", "https", "ftp", "mailto", "tel"})

# Removed together with their text
DROP_CONTENT_TAGS = ["script", "style", "textarea", "option", "noscript"]

LINK_TARGET = "_blank"
LINK_REL = "noopener noreferrer"

_CONTROL_CHARS = re.compile(r"[\x00-\x20]+")


def is_safe_url(value: str) -> bool:
    """Check that a URL is relative or uses an allowed scheme."""
    compact = _CONTROL_CHARS.sub("", value).lower()
    scheme, sep, _ = compact.partition(":")
    if not sep or any(c in scheme for c in "/?#"):
        return True
    return scheme in ALLOWED_SCHEMES


def _clean_attributes(tag) -> None:
    allowed = ALLOWED_ATTRIBUTES.get(tag.name, frozenset())
    cleaned = {}
    for name, value in tag.attrs.items():
        if name not in allowed:
            continue
        if isinstance(value, list):
            value = " ".join(value)
        if name in URL_ATTRIBUTES and not is_safe_url(value):
            continue
        cleaned[name] = value
    tag.attrs = cleaned

    if tag.name == "a":
        tag["target"] = LINK_TARGET
        tag["rel"] = LINK_REL


def sanitize(html: Optional[str]) -> str:
    """Reduce untrusted markup to the allowed subset.

    Disallowed tags are unwrapped (their text is kept) except script-like
    tags, which are dropped with their content. Plain text comes back with
    ``<``, ``>`` and ``&`` escaped.

    Args:
        html: Untrusted HTML or plain text

    Returns:
        Safe HTML string
    """
    if not html:
        return ""

    soup = BeautifulSoup(html, "html.parser")

    for comment in soup.find_all(string=lambda s: isinstance(s, Comment)):
        comment.extract()

    for tag in soup.find_all(DROP_CONTENT_TAGS):
        tag.decompose()

    for tag in soup.find_all(True):
        if tag.name not in ALLOWED_TAGS:
            tag.unwrap()
        else:
            _clean_attributes(tag)

    return str(soup).strip()
