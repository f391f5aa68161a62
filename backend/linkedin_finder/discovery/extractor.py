"""Parse raw search hits into LinkedIn company candidates.

Search engines return a page title, a URL and an HTML-ish snippet. From those
we keep the vanity slug of the company page, a display name and a cleaned,
truncated description.
"""

import re

from linkedin_finder.discovery.schemas import ExtractedHit

COMPANY_URL_MARKER = "linkedin.com/company/"
MAX_DESCRIPTION_LENGTH = 200
UNKNOWN_COMPANY = "Unknown Company"

HTML_ENTITIES = {
    "&lt;": "<",
    "&gt;": ">",
    "&amp;": "&",
    "&quot;": '"',
    "&#x27;": "'",
    "&#39;": "'",
    "&nbsp;": " ",
}

_VANITY_RE = re.compile(r"linkedin\.com/company/([^/?]+)", re.IGNORECASE)
_TITLE_RE = re.compile(r"^([^|]+)(?:\s*\|\s*LinkedIn)?")
_ENTITY_RE = re.compile(r"&[#\w]+;")
_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def is_company_url(url: str) -> bool:
    return bool(url) and COMPANY_URL_MARKER in url


def extract_vanity_name(url: str) -> str:
    """Return the slug after linkedin.com/company/, or "" if there is none."""
    match = _VANITY_RE.search(url or "")
    return match.group(1) if match else ""


def decode_html_entities(text: str) -> str:
    # Repeat so double-escaped input such as "&amp;nbsp;" decodes fully
    previous = None
    while previous != text:
        previous = text
        text = _ENTITY_RE.sub(lambda m: HTML_ENTITIES.get(m.group(0), m.group(0)), text)
    return text


def clean_text(text: str) -> str:
    """Decode entities, strip tags and collapse whitespace."""
    text = decode_html_entities(text or "")
    text = _TAG_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def clean_description(text: str) -> str:
    return clean_text(text)[:MAX_DESCRIPTION_LENGTH]


def extract_company_name(title: str, description: str) -> str:
    """Display name from a result title such as "Microsoft | LinkedIn".

    Falls back to the first three words of the description.
    """
    match = _TITLE_RE.match(clean_text(title))
    if match and match.group(1).strip():
        return match.group(1).strip()

    words = clean_text(description).split(" ")[:3]
    fallback = " ".join(words).strip()
    return fallback or UNKNOWN_COMPANY


def extract(title: str, description: str, url: str) -> ExtractedHit:
    return ExtractedHit(
        company_name=extract_company_name(title, description),
        vanity_name=extract_vanity_name(url),
        description=clean_description(description),
    )
