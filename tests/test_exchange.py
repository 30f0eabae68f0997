"""
Gateway exchange tests, against a stubbed HTTP session.
"""

import unittest
from unittest import mock

import requests

from gifddo.exceptions import ProtocolError, TransportError
from gifddo.exchange import LIVE_URL, TEST_URL, GatewayExchange
from gifddo.keys import GatewayMode

from keypair import StubSession

FIELDS = {"VK_SERVICE": "1012", "VK_VERSION": "008", "VK_MAC": "c2ln"}


class TestGatewayUrl(unittest.TestCase):

    def test_live(self):
        self.assertEqual(GatewayExchange(GatewayMode.LIVE, session=StubSession()).url, "https://gifddo.com/api/giftlink")

    def test_test(self):
        self.assertEqual(GatewayExchange(GatewayMode.TEST, session=StubSession()).url, "https://gifddo.staging.elevate.ee/api/giftlink")

    def test_mode_from_string(self):
        self.assertEqual(GatewayExchange("test", session=StubSession()).url, TEST_URL)


class TestSubmit(unittest.TestCase):

    def test_location_header_returned(self):
        target = TEST_URL + "/test"
        session = StubSession(status_code=200, headers={"Location": target})
        exchange = GatewayExchange(GatewayMode.TEST, session=session)
        self.assertEqual(exchange.submit(FIELDS), target)

    def test_redirect_status(self):
        session = StubSession(status_code=302, headers={"location": "https://pay.example.com/x"})
        exchange = GatewayExchange(GatewayMode.LIVE, session=session)
        self.assertEqual(exchange.submit(FIELDS), "https://pay.example.com/x")

    def test_post_is_form_encoded_without_redirects(self):
        session = StubSession(headers={"Location": "https://pay.example.com/x"})
        GatewayExchange(GatewayMode.LIVE, session=session, timeout=3).submit(FIELDS)

        self.assertEqual(len(session.calls), 1)
        url, kwargs = session.calls[0]
        self.assertEqual(url, LIVE_URL)
        self.assertEqual(kwargs["data"], FIELDS)
        self.assertNotIn("json", kwargs)
        self.assertIs(kwargs["allow_redirects"], False)
        self.assertEqual(kwargs["timeout"], 3)

    def test_missing_location_header(self):
        session = StubSession(status_code=200)
        with self.assertRaises(ProtocolError) as ctx:
            GatewayExchange(GatewayMode.TEST, session=session).submit(FIELDS)
        self.assertEqual(ctx.exception.status_code, 200)

    def test_error_status_without_location(self):
        session = StubSession(status_code=500)
        with self.assertRaises(ProtocolError) as ctx:
            GatewayExchange(GatewayMode.TEST, session=session).submit(FIELDS)
        self.assertEqual(ctx.exception.status_code, 500)

    def test_connection_failure(self):
        cause = requests.ConnectionError("connection refused")
        session = StubSession(error=cause)
        with self.assertRaises(TransportError) as ctx:
            GatewayExchange(GatewayMode.TEST, session=session).submit(FIELDS)
        self.assertIs(ctx.exception.cause, cause)
        self.assertIs(ctx.exception.__cause__, cause)
        self.assertIn("connection refused", str(ctx.exception))

    def test_timeout_and_tls_collapse_to_transport_error(self):
        for error in (requests.Timeout("slow"), requests.exceptions.SSLError("bad cert")):
            session = StubSession(error=error)
            with self.assertRaises(TransportError):
                GatewayExchange(GatewayMode.LIVE, session=session).submit(FIELDS)

    def test_builtin_connection_errors_collapse_to_transport_error(self):
        for cause in (ConnectionError("refused"), TimeoutError("timed out"), OSError("unreachable")):
            session = StubSession(error=cause)
            with self.assertRaises(TransportError) as ctx:
                GatewayExchange(GatewayMode.TEST, session=session).submit(FIELDS)
            self.assertIs(ctx.exception.cause, cause)

    def test_default_transport_is_requests_post(self):
        response = requests.Response()
        response.status_code = 302
        response.headers["Location"] = "https://pay.example.com/x"
        exchange = GatewayExchange(GatewayMode.LIVE, timeout=3)
        self.assertIsNone(exchange.session)
        with mock.patch("gifddo.exchange.requests.post", return_value=response) as post:
            self.assertEqual(exchange.submit(FIELDS), "https://pay.example.com/x")
        post.assert_called_once_with(LIVE_URL, data=FIELDS, allow_redirects=False, timeout=3)

    def test_no_retry(self):
        session = StubSession(error=requests.ConnectionError("down"))
        with self.assertRaises(TransportError):
            GatewayExchange(GatewayMode.LIVE, session=session).submit(FIELDS)
        self.assertEqual(len(session.calls), 1)


if __name__ == "__main__":
    unittest.main()
