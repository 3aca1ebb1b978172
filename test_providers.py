#!/usr/bin/env python3
"""
Test suite for the DNS providers

Checks the request each provider builds, its success grammar, and how
update_record classifies transport, status and body failures.
"""

import base64
import json
import unittest

import httpx

from ddns_sync.core.errors import (
    BadResponseError,
    ConfigurationError,
    ProviderRejectedError,
    ResponseDecodeError,
    SendRequestError,
    UnsupportedAddressFamilyError,
)
from ddns_sync.core.models import (
    DnsConfig,
    DynuConfig,
    GoDaddyConfig,
    HeConfig,
    NamecheapConfig,
    NoIpConfig,
    PorkbunConfig,
    WanAddress,
)
from ddns_sync.providers import (
    DynuProvider,
    GoDaddyProvider,
    HeProvider,
    NamecheapProvider,
    NoIpProvider,
    PorkbunProvider,
    create_provider,
)

WAN4 = WanAddress.parse("2.2.2.2")
WAN6 = WanAddress.parse("2001:db8::2")


class BrokenBodyStream(httpx.AsyncByteStream):
    """A response body whose connection drops while it is read."""

    async def __aiter__(self):
        raise httpx.ReadError("connection reset by peer")
        yield b""


def decode_basic_auth(request):
    scheme, token = request.headers["Authorization"].split(" ", 1)
    assert scheme == "Basic"
    return base64.b64decode(token).decode()


class ProviderTestCase(unittest.IsolatedAsyncioTestCase):
    """Base test case with a client whose requests are answered by self.respond."""

    async def asyncSetUp(self):
        self.requests = []
        self.response = httpx.Response(200, text="good 2.2.2.2")
        self.client = httpx.AsyncClient(transport=httpx.MockTransport(self.respond))

    async def asyncTearDown(self):
        await self.client.aclose()

    def respond(self, request):
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


class TestDispatch(ProviderTestCase):
    """Test the mapping from configuration to provider."""

    async def test_create_provider(self):
        configs = [
            (NamecheapConfig(domain="example.com", ddns_password="p"), NamecheapProvider),
            (HeConfig(hostname="example.com", password="p"), HeProvider),
            (NoIpConfig(hostname="example.com", username="u", password="p"), NoIpProvider),
            (DynuConfig(hostname="example.com", username="u", password="p"), DynuProvider),
            (PorkbunConfig(domain="example.com", key="k", secret="s"), PorkbunProvider),
            (GoDaddyConfig(domain="example.com", key="k", secret="s"), GoDaddyProvider),
        ]
        for config, provider_cls in configs:
            with self.subTest(provider=provider_cls.identify()):
                provider = create_provider(config, self.client)
                self.assertIsInstance(provider, provider_cls)
                self.assertEqual(provider.hostname(), "example.com")
                self.assertIs(provider.client, self.client)

    async def test_unknown_config(self):
        with self.assertRaises(ConfigurationError):
            create_provider(DnsConfig(), self.client)

    async def test_endpoint_strips_trailing_slash(self):
        config = HeConfig(hostname="example.com", password="p", base_url="http://he.test///")
        self.assertEqual(HeProvider(config, self.client).endpoint(), "http://he.test/nic/update")


class TestNamecheapProvider(ProviderTestCase):
    """Test the Namecheap provider."""

    async def asyncSetUp(self):
        await super().asyncSetUp()
        config = NamecheapConfig(
            domain="example.com",
            ddns_password="secret-1",
            records=("@", "www"),
            base_url="http://namecheap.test",
        )
        self.provider = NamecheapProvider(config, self.client)

    async def test_build_update_request(self):
        request = self.provider.build_update_request("www", WAN4)

        self.assertEqual(request.method, "GET")
        self.assertEqual(request.url.path, "/update")
        self.assertEqual(request.url.params["host"], "www")
        self.assertEqual(request.url.params["domain"], "example.com")
        self.assertEqual(request.url.params["password"], "secret-1")
        self.assertEqual(request.url.params["ip"], "2.2.2.2")

    async def test_ipv6_unsupported(self):
        """IPv6 fails explicitly and nothing is sent."""
        with self.assertRaises(UnsupportedAddressFamilyError):
            self.provider.build_update_request("www", WAN6)
        with self.assertRaises(UnsupportedAddressFamilyError):
            await self.provider.update_record("www", WAN6)
        self.assertEqual(self.requests, [])

    async def test_response_grammar(self):
        ok = "<?xml version=\"1.0\"?><interface-response><ErrCount>0</ErrCount></interface-response>"
        failed = "<interface-response><ErrCount>1</ErrCount><errors><Err1>Passwords do not match</Err1></errors></interface-response>"
        self.assertTrue(self.provider.response_indicates_success(ok))
        self.assertFalse(self.provider.response_indicates_success(failed))

    async def test_update_record_rejected(self):
        """A failure document raises with the raw body, credentials kept out of the url."""
        body = "<interface-response><ErrCount>1</ErrCount></interface-response>"
        self.response = httpx.Response(200, text=body)

        with self.assertRaises(ProviderRejectedError) as ctx:
            await self.provider.update_record("www", WAN4)

        self.assertEqual(ctx.exception.body, body)
        self.assertEqual(ctx.exception.url, "http://namecheap.test/update")
        self.assertEqual(ctx.exception.context, "namecheap update")
        self.assertNotIn("secret-1", str(ctx.exception))


class TestHeProvider(ProviderTestCase):
    """Test the Hurricane Electric provider."""

    async def asyncSetUp(self):
        await super().asyncSetUp()
        config = HeConfig(hostname="example.com", password="secret-1", base_url="http://he.test")
        self.provider = HeProvider(config, self.client)

    async def test_build_update_request(self):
        request = self.provider.build_update_request("@", WAN6)
        form = httpx.QueryParams(request.content.decode())

        self.assertEqual(request.method, "POST")
        self.assertEqual(str(request.url), "http://he.test/nic/update")
        self.assertEqual(form["hostname"], "example.com")
        self.assertEqual(form["password"], "secret-1")
        self.assertEqual(form["myip"], "2001:db8::2")

    async def test_connection_not_reused(self):
        """he.net drops connections silently, so every request asks to close."""
        request = self.provider.build_update_request("vpn", WAN4)
        self.assertEqual(request.headers["Connection"], "close")

    async def test_update_record(self):
        await self.provider.update_record("vpn", WAN4)

        self.assertEqual(len(self.requests), 1)
        self.assertIn(b"hostname=vpn.example.com", self.requests[0].content)

    async def test_response_grammar(self):
        self.assertTrue(self.provider.response_indicates_success("good 2.2.2.2"))
        self.assertTrue(self.provider.response_indicates_success("nochg 2.2.2.2"))
        self.assertFalse(self.provider.response_indicates_success("badauth"))


class TestNoIpProvider(ProviderTestCase):
    """Test the No-IP provider."""

    async def asyncSetUp(self):
        await super().asyncSetUp()
        config = NoIpConfig(
            hostname="d.root-servers.net",
            username="me@example.com",
            password="my-pass",
            base_url="http://noip.test/",
        )
        self.provider = NoIpProvider(config, self.client)

    async def test_single_apex_record(self):
        self.assertEqual(self.provider.records(), ["@"])

    async def test_build_update_request(self):
        request = self.provider.build_update_request("@", WAN4)

        self.assertEqual(request.url.path, "/nic/update")
        self.assertEqual(request.url.params["hostname"], "d.root-servers.net")
        self.assertEqual(request.url.params["myip"], "2.2.2.2")
        self.assertEqual(decode_basic_auth(request), "me@example.com:my-pass")

    async def test_response_grammar(self):
        """An unchanged address is reported as nochg and still counts as success."""
        self.assertTrue(self.provider.response_indicates_success("good 2.2.2.2"))
        self.assertTrue(self.provider.response_indicates_success("nochg 2.2.2.2"))
        self.assertFalse(self.provider.response_indicates_success("nohost"))
        self.assertFalse(self.provider.response_indicates_success("badauth"))


class TestDynuProvider(ProviderTestCase):
    """Test the Dynu provider."""

    async def asyncSetUp(self):
        await super().asyncSetUp()
        config = DynuConfig(
            hostname="example.com",
            username="myusername",
            password="secret-1",
            records=("@", "d"),
            base_url="http://dynu.test",
        )
        self.provider = DynuProvider(config, self.client)

    async def test_apex_ipv4(self):
        params = self.provider.build_update_request("@", WAN4).url.params

        self.assertEqual(params["hostname"], "example.com")
        self.assertEqual(params["myip"], "2.2.2.2")
        self.assertEqual(params["myipv6"], "no")
        self.assertNotIn("alias", params)

    async def test_alias_ipv6(self):
        request = self.provider.build_update_request("d", WAN6)
        params = request.url.params

        self.assertEqual(params["myip"], "no")
        self.assertEqual(params["myipv6"], "2001:db8::2")
        self.assertEqual(params["alias"], "d")
        self.assertEqual(decode_basic_auth(request), "myusername:secret-1")


class TestPorkbunProvider(ProviderTestCase):
    """Test the Porkbun provider."""

    async def asyncSetUp(self):
        await super().asyncSetUp()
        config = PorkbunConfig(
            domain="example.com", key="pk1", secret="sk1", base_url="http://porkbun.test/api/json/v3"
        )
        self.provider = PorkbunProvider(config, self.client)

    async def test_build_update_request(self):
        apex = self.provider.build_update_request("@", WAN4)
        sub = self.provider.build_update_request("www", WAN6)

        self.assertEqual(apex.method, "POST")
        self.assertEqual(apex.url.path, "/api/json/v3/dns/editByNameType/example.com/A")
        self.assertEqual(sub.url.path, "/api/json/v3/dns/editByNameType/example.com/AAAA/www")
        self.assertEqual(
            json.loads(apex.content),
            {"apikey": "pk1", "secretapikey": "sk1", "content": "2.2.2.2"},
        )

    async def test_response_grammar(self):
        self.assertTrue(self.provider.response_indicates_success('{"status": "SUCCESS"}'))
        self.assertFalse(
            self.provider.response_indicates_success('{"status": "ERROR", "message": "nope"}')
        )
        self.assertFalse(self.provider.response_indicates_success("<html>"))


class TestGoDaddyProvider(ProviderTestCase):
    """Test the GoDaddy provider."""

    async def asyncSetUp(self):
        await super().asyncSetUp()
        config = GoDaddyConfig(
            domain="example.com", key="key", secret="secret", base_url="http://godaddy.test"
        )
        self.provider = GoDaddyProvider(config, self.client)

    async def test_build_update_request(self):
        request = self.provider.build_update_request("@", WAN4)

        self.assertEqual(request.method, "PUT")
        self.assertEqual(request.url.path, "/v1/domains/example.com/records/A/@")
        self.assertEqual(request.headers["Authorization"], "sso-key key:secret")
        self.assertEqual(json.loads(request.content), [{"data": "2.2.2.2"}])

    async def test_update_record_empty_body(self):
        """GoDaddy answers a successful PUT with an empty body."""
        self.response = httpx.Response(200, text="")
        await self.provider.update_record("www", WAN4)
        self.assertEqual(len(self.requests), 1)


class TestUpdateRecordErrors(ProviderTestCase):
    """Test the classification of update failures."""

    async def asyncSetUp(self):
        await super().asyncSetUp()
        config = HeConfig(hostname="example.com", password="secret-1", base_url="http://he.test")
        self.provider = HeProvider(config, self.client)

    async def test_connect_error(self):
        self.response = httpx.ConnectError("connection refused")
        with self.assertRaises(SendRequestError) as ctx:
            await self.provider.update_record("@", WAN4)
        self.assertIsInstance(ctx.exception.__cause__, httpx.ConnectError)
        self.assertEqual(ctx.exception.url, "http://he.test/nic/update")

    async def test_timeout(self):
        self.response = httpx.ReadTimeout("timed out")
        with self.assertRaises(SendRequestError):
            await self.provider.update_record("@", WAN4)

    async def test_error_status(self):
        self.response = httpx.Response(503, text="down for maintenance")
        with self.assertRaises(BadResponseError) as ctx:
            await self.provider.update_record("@", WAN4)
        self.assertIsInstance(ctx.exception.__cause__, httpx.HTTPStatusError)
        self.assertIn("status 503", str(ctx.exception))

    async def test_unreadable_body(self):
        self.response = httpx.Response(200, stream=BrokenBodyStream())
        with self.assertRaises(ResponseDecodeError) as ctx:
            await self.provider.update_record("@", WAN4)
        self.assertIsInstance(ctx.exception.__cause__, httpx.ReadError)
        self.assertIn("unable to deserialize response", str(ctx.exception))

    async def test_rejected_body(self):
        self.response = httpx.Response(200, text="badauth")
        with self.assertRaises(ProviderRejectedError) as ctx:
            await self.provider.update_record("@", WAN4)
        self.assertIn("badauth", str(ctx.exception))


if __name__ == "__main__":
    # Run the tests
    unittest.main(verbosity=2)
