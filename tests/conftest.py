"""Pytest fixtures for the scent finder pipeline tests."""

import httpx
import pytest

from scent_finder.core.settings import settings


@pytest.fixture
def search_credentials(monkeypatch):
    monkeypatch.setattr(settings, "google_api_key", "test-key")
    monkeypatch.setattr(settings, "google_cse_cx", "test-cx")
    monkeypatch.setattr(settings, "search_domains", ["fragrantica.com", "parfumo.net"])
    monkeypatch.setattr(settings, "search_whitelist_file", None)


@pytest.fixture
def make_response():
    """Build a real httpx.Response as if it came back from `url`."""

    def _make(url: str, status: int = 200, *, html=None, json=None, content=None, headers=None):
        return httpx.Response(
            status,
            html=html,
            json=json,
            content=content,
            headers=headers,
            request=httpx.Request("GET", url),
        )

    return _make


@pytest.fixture
def product_html():
    return """<!doctype html>
<html>
<head>
  <title>Jardin Sur Le Nil Hermes perfume - a fragrance for women and men 2005</title>
  <meta property="og:title" content="Un Jardin Sur Le Nil Hermès">
  <meta name="description" content="Green mango, lotus and sycamore wood.">
  <meta property="og:description" content="OG description should lose to meta description">
  <script>var shipping = "$4.99";</script>
</head>
<body>
  <div class="product">
    <span class="product-price">$112.00</span>
  </div>
  <div id="pyramid">
    <div class="pyramid__note">Green Mango</div>
    <div class="pyramid__note">Lotus</div>
    <div class="pyramid__note">Lotus</div>
    <div class="pyramid__note">Sycamore</div>
  </div>
  <ul class="notes"><li>Should never be reached</li></ul>
</body>
</html>"""


@pytest.fixture
def notes_reply_json():
    return '{"top": ["Bergamot", "lemon"], "middle": ["rose", "jasmine"], "base": ["musk", "amber"]}'


@pytest.fixture
def notes_reply_with_preamble(notes_reply_json):
    """Model chatter followed by the JSON object at the very end."""
    return "Sure! Here are the notes for your scene:\n\n" + notes_reply_json


@pytest.fixture
def notes_reply_prose():
    """No JSON at all; notes listed under bucket headings."""
    return (
        "Top notes:\n"
        "Sea salt, Bergamot, lemon zest\n"
    )


@pytest.fixture
def cse_payload():
    return {
        "items": [
            {
                "title": "Acqua di Gio Giorgio Armani",
                "link": "https://www.fragrantica.com/perfume/Giorgio-Armani/Acqua-di-Gio-410.html",
                "snippet": "Acqua di Gio by Giorgio Armani is a Floral Aquatic fragrance.",
                "displayLink": "www.fragrantica.com",
            },
            {
                "title": "Wood Sage & Sea Salt",
                "link": "https://www.parfumo.net/Perfumes/Jo_Malone/wood-sage-sea-salt",
                "snippet": "Wood Sage & Sea Salt by Jo Malone.",
            },
            {"title": "No link here", "snippet": "dropped"},
        ]
    }
