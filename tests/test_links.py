import io
from pathlib import Path
from types import SimpleNamespace

import requests

from content_tools.config import LinkCheckConfig
from content_tools.links import (
    BROKEN,
    REDIRECT,
    VALID,
    check_link,
    classify,
    extract_site_links,
    validate_links_in_file,
)
from content_tools.models import LinkCheckResult


class FakeSession:
    """Answers HEAD requests from a url -> outcome table.

    An outcome is a final status, a ``(final_status, hops)`` pair for a
    followed redirect chain, or an exception to raise.
    """

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def head(self, url, **kwargs):
        self.calls.append((url, kwargs))
        outcome = self.responses[url]
        if isinstance(outcome, Exception):
            raise outcome
        status, hops = outcome if isinstance(outcome, tuple) else (outcome, 0)
        history = [SimpleNamespace(status_code=301)] * hops
        return SimpleNamespace(status_code=status, history=history)

    def close(self):
        pass


def test_extracts_unique_site_links_in_order():
    text = (
        "See [the post](https://sujeet.pro/posts/a) and https://www.sujeet.pro/about.\n"
        "Again: https://sujeet.pro/posts/a\n"
        "Elsewhere: https://example.com/sujeet.pro/x"
    )
    assert extract_site_links(text, "sujeet.pro") == [
        "https://sujeet.pro/posts/a",
        "https://www.sujeet.pro/about.",
    ]


def test_other_domains_are_ignored():
    assert extract_site_links("https://example.com/page", "sujeet.pro") == []


def test_classification():
    assert classify(LinkCheckResult("u", 200)) == VALID
    assert classify(LinkCheckResult("u", 204)) == VALID
    assert classify(LinkCheckResult("u", 301)) == REDIRECT
    assert classify(LinkCheckResult("u", 404)) == BROKEN
    assert classify(LinkCheckResult("u", 503)) == BROKEN
    assert classify(LinkCheckResult("u", None, "timeout")) == BROKEN


def test_check_link_sends_head_with_user_agent():
    config = LinkCheckConfig(timeout=3.0)
    session = FakeSession({"https://sujeet.pro/": 200})
    result = check_link(session, "https://sujeet.pro/", config)
    assert result == LinkCheckResult("https://sujeet.pro/", 200)
    _, kwargs = session.calls[0]
    assert kwargs["headers"]["User-Agent"] == config.user_agent
    assert kwargs["timeout"] == 3.0
    assert kwargs["allow_redirects"] is True


def test_network_errors_become_broken_results():
    session = FakeSession({"https://sujeet.pro/x": requests.ConnectionError("refused")})
    result = check_link(session, "https://sujeet.pro/x", LinkCheckConfig())
    assert result.status is None
    assert result.error == "refused"


def test_validate_returns_false_when_any_link_is_broken(tmp_path: Path):
    markdown_path = tmp_path / "post.md"
    markdown_path.write_text(
        "[ok](https://sujeet.pro/ok) [moved](https://sujeet.pro/old) [dead](https://sujeet.pro/dead)",
        encoding="utf-8",
    )
    session = FakeSession(
        {
            "https://sujeet.pro/ok": 200,
            "https://sujeet.pro/old": (200, 1),
            "https://sujeet.pro/dead": 404,
        }
    )
    stream = io.StringIO()
    assert validate_links_in_file(markdown_path, LinkCheckConfig(), stream, session=session) is False
    output = stream.getvalue()
    assert "Valid links: 1" in output
    assert "Redirects: 1" in output
    assert "Broken links: 1" in output
    assert "https://sujeet.pro/dead (Status: 404)" in output


def test_validate_passes_without_site_links(tmp_path: Path):
    markdown_path = tmp_path / "post.md"
    markdown_path.write_text("no links here", encoding="utf-8")
    stream = io.StringIO()
    assert validate_links_in_file(markdown_path, LinkCheckConfig(), stream, session=FakeSession({}))
    assert "No sujeet.pro links found" in stream.getvalue()


def test_redirect_classification_uses_final_status():
    assert classify(LinkCheckResult("u", 200, redirected=True)) == REDIRECT
    assert classify(LinkCheckResult("u", 404, redirected=True)) == BROKEN


def test_redirect_to_missing_page_fails_the_gate(tmp_path: Path):
    markdown_path = tmp_path / "post.md"
    markdown_path.write_text("[moved](https://sujeet.pro/old)", encoding="utf-8")
    session = FakeSession({"https://sujeet.pro/old": (404, 1)})

    result = check_link(session, "https://sujeet.pro/old", LinkCheckConfig())
    assert result == LinkCheckResult("https://sujeet.pro/old", 404, redirected=True)

    stream = io.StringIO()
    assert validate_links_in_file(markdown_path, LinkCheckConfig(), stream, session=session) is False
    output = stream.getvalue()
    assert "Redirects: 0" in output
    assert "Broken links: 1" in output
    assert "All links are valid" not in output
