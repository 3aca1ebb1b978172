"""
Step definitions for ddns-sync reconciliation scenarios.
"""

import asyncio
import ipaddress

import httpx
import yaml
from behave import given, then, when

from ddns_sync.core.errors import DnsResolveError
from ddns_sync.core.sync_manager import SyncManager
from ddns_sync.parsers.config import ConfigParser
from ddns_sync.utils.http_client import build_async_client


class PublishedRecords:
    """Answers lookups from the records the scenario has published."""

    def __init__(self, published):
        self.published = published

    async def ip_lookup(self, fqdn, family):
        if fqdn not in self.published:
            raise DnsResolveError(fqdn)
        return ipaddress.ip_address(self.published[fqdn])


def _handle_request(context, request):
    if request.url.host.endswith("ipify.org"):
        return httpx.Response(200, text=context.wan_address)

    context.update_requests.append(request)
    form = httpx.QueryParams(request.content.decode())
    if context.provider_body is not None:
        return httpx.Response(200, text=context.provider_body)

    # An accepted update is visible to the next lookup
    context.published[f"{form['hostname']}."] = form["myip"]
    return httpx.Response(200, text=f"good {form['myip']}")


def _write_config(context):
    config = {
        "ip_resolver": "ipify",
        "logging": {"level": "DEBUG"},
        "dns_providers": {
            "he": [
                {
                    "hostname": hostname,
                    "password": "secret-1",
                    "records": records,
                    "base_url": context.provider_base_url,
                }
                for hostname, records in context.domains
            ]
        },
    }
    with open(context.config_file, "w") as f:
        yaml.dump(config, f)


async def _run_sync(context):
    config = ConfigParser(str(context.config_file)).parse()
    transport = httpx.MockTransport(lambda request: _handle_request(context, request))
    async with build_async_client(config.http_timeout_seconds, transport=transport) as client:
        manager = SyncManager(config, client, verifier=PublishedRecords(context.published))
        return await manager.run()


@given('the WAN address is "{address}"')
def step_wan_address(context, address):
    context.wan_address = address


@given('the he.net domain "{hostname}" with records "{records}"')
def step_he_domain(context, hostname, records):
    context.domains.append((hostname, [r.strip() for r in records.split(",")]))


@given('"{name}" is published as "{address}"')
def step_published(context, name, address):
    context.published[f"{name}."] = address


@given('the provider answers "{body}"')
def step_provider_answers(context, body):
    context.provider_body = body


@when("I run the sync")
@when("I run the sync again")
def step_run_sync(context):
    _write_config(context)
    context.update_requests = []
    context.result = asyncio.run(_run_sync(context))


@then("{count:d} update request is sent")
@then("{count:d} update requests are sent")
def step_update_count(context, count):
    assert len(context.update_requests) == count, (
        f"expected {count} update request(s), got {len(context.update_requests)}"
    )


@then('an update request points "{hostname}" at "{address}"')
def step_update_points(context, hostname, address):
    sent = [httpx.QueryParams(r.content.decode()) for r in context.update_requests]
    assert any(
        form["hostname"] == hostname and form["myip"] == address for form in sent
    ), f"no update of {hostname} to {address} in {[str(form) for form in sent]}"


@then("the summary is current {current:d}, updated {updated:d}, missing {missing:d}")
def step_summary(context, current, updated, missing):
    summary = context.result.summary
    assert (summary.current, summary.updated, summary.missing) == (current, updated, missing), (
        f"unexpected summary: {summary}"
    )


@then("the exit code is {code:d}")
def step_exit_code(context, code):
    assert context.result.exit_code == code, f"exit code {context.result.exit_code}"
