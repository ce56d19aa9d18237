"""
Tests for usage retrieval – token pair, usage page, relogin policy.
"""

import unittest
from datetime import datetime
from unittest.mock import MagicMock, patch

import requests

from ymobile_monitor.client import PortalClient
from ymobile_monitor.config import REQUEST_TIMEOUT
from ymobile_monitor.errors import (
    AuthRejected,
    ContainerNotFound,
    HttpStatusError,
    InsufficientTokens,
    TransportError,
)
from ymobile_monitor.models import Credentials, UsageSnapshot
from ymobile_monitor.network import build_session
from ymobile_monitor.usage import fetch_token_pair, fetch_usage, fetch_with_recovery

from tests.fixtures import ENDPOINTS, TOKEN_PAGE, make_response, usage_page

NOW = datetime(2026, 10, 18, 12, 0)
CREDS = Credentials("09012345678", "s3cret")


class TestFetchUsage(unittest.TestCase):
    def setUp(self):
        self.session = build_session()
        self.token_resp = make_response(ENDPOINTS.token_url, TOKEN_PAGE)
        self.usage_resp = make_response(ENDPOINTS.usage_url, usage_page())

    def _fetch(self, get_resp=None, post_resp=None, post_error=None):
        post_kwargs = {"side_effect": post_error} if post_error else {
            "return_value": post_resp or self.usage_resp
        }
        with patch.object(self.session, "get", return_value=get_resp or self.token_resp), \
                patch.object(self.session, "post", **post_kwargs) as mock_post:
            try:
                return fetch_usage(self.session, ENDPOINTS, now=NOW)
            finally:
                self.mock_post = mock_post

    def test_success(self):
        snap = self._fetch()
        self.assertEqual(snap.carry_over_gb, 1.23)
        self.assertEqual(snap.used_gb, 2.73)
        self.assertEqual(snap.observed_at, NOW)

    def test_posts_token_pair(self):
        self._fetch()
        self.mock_post.assert_called_once_with(
            ENDPOINTS.usage_url,
            data={"mfiv": "IV-value", "mfym": "YM-value"},
            timeout=REQUEST_TIMEOUT,
            allow_redirects=True,
        )

    def test_token_page_error_status(self):
        with self.assertRaises(HttpStatusError) as cm:
            self._fetch(get_resp=make_response(ENDPOINTS.token_url, TOKEN_PAGE, 500))
        self.assertEqual(cm.exception.status_code, 500)
        self.mock_post.assert_not_called()

    def test_token_page_empty_body(self):
        with self.assertRaises(HttpStatusError) as cm:
            self._fetch(get_resp=make_response(ENDPOINTS.token_url, "  \n"))
        self.assertTrue(cm.exception.empty_body)

    def test_token_page_without_tokens(self):
        page = '<form><input type="hidden" name="mfiv" value="IV"></form>'
        with self.assertRaises(InsufficientTokens) as cm:
            self._fetch(get_resp=make_response(ENDPOINTS.token_url, page))
        self.assertEqual(cm.exception.found, 1)
        self.assertEqual(cm.exception.names, ["mfiv"])

    def test_usage_page_error_status(self):
        with self.assertRaises(HttpStatusError) as cm:
            self._fetch(post_resp=make_response(ENDPOINTS.usage_url, "gone", 404))
        self.assertEqual(cm.exception.url, ENDPOINTS.usage_url)

    def test_usage_page_empty_body(self):
        with self.assertRaises(HttpStatusError):
            self._fetch(post_resp=make_response(ENDPOINTS.usage_url, ""))

    def test_usage_page_structure_changed(self):
        with self.assertRaises(ContainerNotFound):
            self._fetch(post_resp=make_response(ENDPOINTS.usage_url, "<html><p>?</p></html>"))

    def test_usage_page_timeout(self):
        with self.assertRaises(TransportError):
            self._fetch(post_error=requests.Timeout("read timed out"))

    def test_fetch_token_pair(self):
        with patch.object(self.session, "get", return_value=self.token_resp):
            self.assertEqual(fetch_token_pair(self.session, ENDPOINTS), ("IV-value", "YM-value"))


class TestFetchWithRecovery(unittest.TestCase):
    def setUp(self):
        self.client = MagicMock(spec=PortalClient)
        self.first = UsageSnapshot(1.0, 3.0, 0.0, 1.0, observed_at=NOW)
        self.second = UsageSnapshot(1.0, 3.0, 0.0, 2.0, observed_at=NOW)

    def test_first_success_returns_immediately(self):
        self.client.fetch_usage.return_value = self.first
        self.assertIs(fetch_with_recovery(self.client, CREDS), self.first)
        self.client.login.assert_not_called()

    def test_relogin_then_second_fetch_succeeds(self):
        self.client.fetch_usage.side_effect = [
            HttpStatusError(ENDPOINTS.token_url, 500), self.second,
        ]
        self.assertIs(fetch_with_recovery(self.client, CREDS), self.second)
        self.client.login.assert_called_once_with(CREDS)
        self.assertEqual(self.client.fetch_usage.call_count, 2)

    def test_second_failure_is_final(self):
        first_error = HttpStatusError(ENDPOINTS.token_url, 500)
        second_error = ContainerNotFound(".x")
        self.client.fetch_usage.side_effect = [first_error, second_error]
        with self.assertRaises(ContainerNotFound) as cm:
            fetch_with_recovery(self.client, CREDS)
        self.assertIs(cm.exception, second_error)
        self.assertEqual(self.client.fetch_usage.call_count, 2)
        self.client.login.assert_called_once()

    def test_no_credentials_returns_original_failure(self):
        first_error = HttpStatusError(ENDPOINTS.token_url, 500)
        self.client.fetch_usage.side_effect = first_error
        with self.assertRaises(HttpStatusError) as cm:
            fetch_with_recovery(self.client, None)
        self.assertIs(cm.exception, first_error)
        self.client.login.assert_not_called()
        self.assertEqual(self.client.fetch_usage.call_count, 1)

    def test_relogin_failure_returns_original_failure(self):
        first_error = InsufficientTokens(found=0, names=[])
        self.client.fetch_usage.side_effect = first_error
        self.client.login.side_effect = AuthRejected("https://id.my.ymobile.jp/login.php")
        with self.assertRaises(InsufficientTokens) as cm:
            fetch_with_recovery(self.client, CREDS)
        self.assertIs(cm.exception, first_error)
        self.assertEqual(self.client.fetch_usage.call_count, 1)

    def test_transport_error_recovered_like_status_error(self):
        self.client.fetch_usage.side_effect = [
            TransportError(ENDPOINTS.token_url, "timed out"), self.second,
        ]
        self.assertIs(fetch_with_recovery(self.client, CREDS), self.second)


class TestPortalClient(unittest.TestCase):
    def setUp(self):
        self.session = build_session()
        self.client = PortalClient(endpoints=ENDPOINTS, session=self.session)

    @patch("ymobile_monitor.client.login", return_value="https://my.ymobile.jp/top")
    def test_login_marks_authenticated(self, mock_login):
        self.assertFalse(self.client.is_authenticated)
        self.client.login(CREDS)
        self.assertTrue(self.client.is_authenticated)
        mock_login.assert_called_once_with(
            self.session, CREDS, ENDPOINTS, timeout=REQUEST_TIMEOUT
        )

    @patch("ymobile_monitor.client.login",
           side_effect=AuthRejected("https://id.my.ymobile.jp/login.php"))
    def test_failed_login_not_authenticated(self, mock_login):
        with self.assertRaises(AuthRejected):
            self.client.login(CREDS)
        self.assertFalse(self.client.is_authenticated)

    def test_logout_clears_cookies(self):
        self.session.cookies.store("my.ymobile.jp", [
            requests.cookies.create_cookie("SID", "abc", domain="my.ymobile.jp"),
        ])
        self.client.logout()
        self.assertEqual(self.session.cookies.hosts(), [])
        self.assertFalse(self.client.is_authenticated)

    def test_separate_clients_do_not_share_cookies(self):
        other = PortalClient(endpoints=ENDPOINTS)
        self.session.cookies.store("my.ymobile.jp", [
            requests.cookies.create_cookie("SID", "abc", domain="my.ymobile.jp"),
        ])
        self.assertEqual(other.session.cookies.hosts(), [])

    def test_fetch_with_recovery_uses_own_flows(self):
        snap = UsageSnapshot(1.0, 2.0, 0.0, 0.5, observed_at=NOW)
        with patch("ymobile_monitor.client.fetch_usage",
                   side_effect=[HttpStatusError(ENDPOINTS.token_url, 302), snap]) as mock_fetch, \
                patch("ymobile_monitor.client.login") as mock_login:
            self.assertIs(self.client.fetch_with_recovery(CREDS), snap)
        self.assertEqual(mock_fetch.call_count, 2)
        mock_login.assert_called_once()


if __name__ == "__main__":
    unittest.main()
