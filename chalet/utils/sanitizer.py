"""
Input sanitizing for values stored and later shown on the site
"""

import html
from urllib.parse import urlparse

LOCAL_HOSTS = ("localhost", "127.0.0.1")


def clean_text(text: str | None) -> str:
    """
    Escape HTML-significant characters to prevent stored XSS.
    Slashes are escaped as well so closing tags cannot be injected.
    """
    if not text:
        return ""
    return html.escape(text, quote=True).replace("/", "&#x2F;").strip()


def validate_url(url: str | None) -> bool:
    """
    Only HTTPS is accepted, except plain HTTP for local development hosts.
    """
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False

    if not parsed.netloc:
        return False
    if parsed.hostname in LOCAL_HOSTS:
        return parsed.scheme in ("http", "https")
    return parsed.scheme == "https"


def safe_url(url: str | None) -> str:
    return url if validate_url(url) else ""
