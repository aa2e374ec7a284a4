from __future__ import annotations

import pytest

from botrecon.adapters.user_agent import UserAgentsBotMatcher

GOOGLEBOT_UA = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"
CHROME_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
)


@pytest.fixture
def matcher() -> UserAgentsBotMatcher:
    return UserAgentsBotMatcher()


def test_known_crawler_matches(matcher: UserAgentsBotMatcher) -> None:
    assert matcher.matches(GOOGLEBOT_UA)
    assert matcher.best_label(GOOGLEBOT_UA) == "Googlebot"


def test_browser_does_not_match(matcher: UserAgentsBotMatcher) -> None:
    assert not matcher.matches(CHROME_UA)


def test_automation_clients_match(matcher: UserAgentsBotMatcher) -> None:
    assert matcher.matches("python-requests/2.32.3")
    assert matcher.matches("Go-http-client/1.1")


def test_blank_user_agent_does_not_match(matcher: UserAgentsBotMatcher) -> None:
    assert not matcher.matches("   ")
