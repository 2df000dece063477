"""Same-site link validation for a single markdown file."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, List, Optional, TextIO

import requests

from .config import LinkCheckConfig
from .models import LinkCheckResult

logger = logging.getLogger("content_tools.links")

VALID = "valid"
REDIRECT = "redirect"
BROKEN = "broken"


def _site_url_pattern(domain: str) -> str:
    return r"https?://(?:www\.)?" + re.escape(domain) + r"[^\s)]+"


def extract_site_links(text: str, domain: str) -> List[str]:
    """Return unique URLs on ``domain`` in order of first appearance."""
    wrapped = re.compile(r"(?:\[.*?\]\()?" + _site_url_pattern(domain))
    bare = re.compile(_site_url_pattern(domain))
    links: Dict[str, None] = {}
    for match in wrapped.finditer(text):
        url_match = bare.search(match.group(0))
        links.setdefault(url_match.group(0) if url_match else match.group(0))
    return list(links)


def check_link(
    session: requests.Session,
    url: str,
    config: LinkCheckConfig,
) -> LinkCheckResult:
    """Issue a HEAD request, following redirects to the final status.

    Transport errors become results with no status.
    """
    try:
        response = session.head(
            url,
            headers={"User-Agent": config.user_agent},
            timeout=config.timeout,
            allow_redirects=True,
        )
    except requests.RequestException as exc:
        return LinkCheckResult(url=url, status=None, error=str(exc) or type(exc).__name__)
    return LinkCheckResult(
        url=url,
        status=response.status_code,
        redirected=bool(response.history),
    )


def classify(result: LinkCheckResult) -> str:
    status = result.status
    if status is None or status >= 400:
        return BROKEN
    if result.redirected or 300 <= status < 400:
        return REDIRECT
    return VALID


def _status_label(result: LinkCheckResult) -> str:
    return str(result.status) if result.status is not None else "Error"


def validate_links_in_file(
    path: Path,
    config: LinkCheckConfig,
    stream: TextIO,
    session: Optional[requests.Session] = None,
) -> bool:
    """Check every same-site link in ``path``; return False if any are broken.

    Raises ``OSError`` when the file cannot be read.
    """
    stream.write(f"🔍 Checking links in: {path}\n\n")
    text = path.read_text(encoding="utf-8")
    links = extract_site_links(text, config.domain)

    if not links:
        stream.write(f"No {config.domain} links found in the file.\n")
        return True

    stream.write(f"Found {len(links)} {config.domain} links:\n")
    for index, link in enumerate(links, start=1):
        stream.write(f"{index}. {link}\n")
    stream.write("\n📡 Checking link validity...\n\n")

    owns_session = session is None
    session = session or requests.Session()
    buckets: Dict[str, List[LinkCheckResult]] = {VALID: [], REDIRECT: [], BROKEN: []}
    try:
        for link in links:
            stream.write(f"Checking: {link}... ")
            result = check_link(session, link, config)
            kind = classify(result)
            buckets[kind].append(result)
            if kind == VALID:
                stream.write("✅ OK\n")
            elif kind == REDIRECT:
                stream.write(f"🔄 Redirect ({result.status})\n")
            else:
                stream.write(f"❌ Failed ({_status_label(result)})\n")
                logger.debug("Broken link %s: %s", link, result.error or result.status)
    finally:
        if owns_session:
            session.close()

    stream.write("\n📊 Results Summary:\n")
    stream.write("==================\n")
    stream.write(f"✅ Valid links: {len(buckets[VALID])}\n")
    stream.write(f"🔄 Redirects: {len(buckets[REDIRECT])}\n")
    stream.write(f"❌ Broken links: {len(buckets[BROKEN])}\n")

    if buckets[REDIRECT]:
        stream.write("\n🔄 Redirect Links:\n")
        for result in buckets[REDIRECT]:
            stream.write(f"  - {result.url} (Status: {result.status})\n")

    if buckets[BROKEN]:
        stream.write("\n❌ Broken Links:\n")
        for result in buckets[BROKEN]:
            suffix = f" - {result.error}" if result.error else ""
            stream.write(f"  - {result.url} (Status: {_status_label(result)}){suffix}\n")
        return False

    stream.write("\n🎉 All links are valid!\n")
    return True
