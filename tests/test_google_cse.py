"""Tests for the domain allow-list and the site-restricted Google CSE client."""

from unittest.mock import patch

import httpx
import pytest

from scent_finder.core.errors import SearchConfigError, SearchError
from scent_finder.core.settings import Settings, settings
from scent_finder.search.google_cse import GOOGLE_ENDPOINT, google_search
from scent_finder.search.whitelist import build_site_query, load_domains


class TestWhitelist:
    def test_site_query(self):
        q = build_site_query("rose musk perfume", ["fragrantica.com", "parfumo.net"])
        assert q == "rose musk perfume (site:fragrantica.com OR site:parfumo.net)"

    def test_empty_allow_list_leaves_query_alone(self):
        assert build_site_query("rose musk perfume", []) == "rose musk perfume"

    def test_domains_normalized_and_deduplicated(self):
        domains = load_domains(None, ["Fragrantica.com", "www.fragrantica.com", "https://www.basenotes.com/fragrances"])
        assert domains == ["fragrantica.com", "basenotes.com"]

    def test_file_entries_merged_after_defaults(self, tmp_path):
        f = tmp_path / "whitelist.txt"
        f.write_text("# trusted shops\nhttps://www.notino.co.uk/perfumes/\n\nparfumo.net\n", encoding="utf-8")
        assert load_domains(f, ["parfumo.net"]) == ["parfumo.net", "notino.co.uk"]

    def test_missing_file_is_ignored(self, tmp_path):
        assert load_domains(tmp_path / "nope.txt", ["parfumo.net"]) == ["parfumo.net"]

    def test_env_comma_separated_domains(self, monkeypatch):
        monkeypatch.setenv("SEARCH_DOMAINS", "fragrantica.com, parfumo.net ,")
        assert Settings(_env_file=None).search_domains == ["fragrantica.com", "parfumo.net"]


class TestGoogleSearch:
    def _resp(self, status=200, **kw):
        return httpx.Response(status, request=httpx.Request("GET", GOOGLE_ENDPOINT), **kw)

    @pytest.mark.parametrize("key,cx", [(None, "cx"), ("key", None), ("", "")])
    def test_missing_credentials_fail_before_network(self, monkeypatch, key, cx):
        monkeypatch.setattr(settings, "google_api_key", key)
        monkeypatch.setattr(settings, "google_cse_cx", cx)
        with patch("scent_finder.search.google_cse.httpx.get") as get:
            with pytest.raises(SearchConfigError, match="GOOGLE_API_KEY"):
                google_search("rose perfume", 6)
        get.assert_not_called()

    def test_request_params(self, search_credentials, cse_payload):
        with patch("scent_finder.search.google_cse.httpx.get", return_value=self._resp(json=cse_payload)) as get:
            google_search("rose musk perfume with price", 6)
        args, kwargs = get.call_args
        assert args[0] == GOOGLE_ENDPOINT
        params = kwargs["params"]
        assert params["q"] == "rose musk perfume with price (site:fragrantica.com OR site:parfumo.net)"
        assert params["num"] == "6"
        assert params["safe"] == "active"
        assert params["lr"] == "lang_en"
        assert params["key"] == "test-key"
        assert params["cx"] == "test-cx"

    def test_num_clamped_to_api_maximum(self, search_credentials, cse_payload):
        with patch("scent_finder.search.google_cse.httpx.get", return_value=self._resp(json=cse_payload)) as get:
            google_search("rose", 25)
        assert get.call_args[1]["params"]["num"] == "10"

    def test_results_reduced_in_order(self, search_credentials, cse_payload):
        with patch("scent_finder.search.google_cse.httpx.get", return_value=self._resp(json=cse_payload)):
            results = google_search("rose", 6)
        assert [r.title for r in results] == ["Acqua di Gio Giorgio Armani", "Wood Sage & Sea Salt"]
        assert results[0].link == "https://www.fragrantica.com/perfume/Giorgio-Armani/Acqua-di-Gio-410.html"
        assert results[1].snippet == "Wood Sage & Sea Salt by Jo Malone."
        assert set(results[0].model_dump()) == {"title", "link", "snippet"}

    def test_never_more_than_limit(self, search_credentials, cse_payload):
        with patch("scent_finder.search.google_cse.httpx.get", return_value=self._resp(json=cse_payload)):
            results = google_search("rose", 1)
        assert len(results) == 1

    def test_no_items(self, search_credentials):
        with patch("scent_finder.search.google_cse.httpx.get", return_value=self._resp(json={"kind": "customsearch#search"})):
            assert google_search("rose", 6) == []

    def test_http_error_is_search_error_without_key_leak(self, search_credentials):
        with patch("scent_finder.search.google_cse.httpx.get", return_value=self._resp(403, json={"error": {}})):
            with pytest.raises(SearchError) as exc_info:
                google_search("rose", 6)
        assert "HTTP 403" in str(exc_info.value)
        assert "test-key" not in str(exc_info.value)
        assert not isinstance(exc_info.value, SearchConfigError)

    def test_transport_error(self, search_credentials):
        with patch("scent_finder.search.google_cse.httpx.get", side_effect=httpx.ReadTimeout("timed out")):
            with pytest.raises(SearchError, match="timed out"):
                google_search("rose", 6)
