"""
Step definitions for DNS Records Sync planning and filtering scenarios.
"""

from behave import given, then, when

from dns_records_sync.config import POLICIES
from dns_records_sync.core.endpoint import Endpoint
from dns_records_sync.core.plan import Plan
from dns_records_sync.sources.filter_source import FilterSource
from dns_records_sync.sources.static_source import StaticSource
from dns_records_sync.utils.domain_filter import DomainFilter
from dns_records_sync.utils.validators import parse_cidr_list, parse_dns_ignore_list


def _endpoints_from_table(table):
    endpoints = []
    for row in table:
        ttl = row["ttl"].strip()
        endpoints.append(
            Endpoint(
                name=row["name"],
                target=row["target"],
                record_type=row["type"],
                ttl=int(ttl) if ttl else None,
            )
        )
    return endpoints


@given("the desired records")
def step_impl(context):
    """Set the desired records from the step table."""
    context.desired = _endpoints_from_table(context.table)


@given("the current records")
def step_impl(context):
    """Set the current records from the step table."""
    context.current = _endpoints_from_table(context.table)


@given('the "{policy}" policy')
def step_impl(context, policy):
    """Add a policy by name."""
    context.policies.append(POLICIES[policy])


@given('the ignored network "{cidr}"')
def step_impl(context, cidr):
    """Exclude A records in a network."""
    context.filter_settings["cidr_ignore"].append(cidr)


@given('the ignored DNS name "{pattern}"')
def step_impl(context, pattern):
    """Exclude a name or wildcard."""
    context.filter_settings["dns_ignore"].append(pattern)


@given('the base domain "{domain}"')
def step_impl(context, domain):
    """Restrict records to a base domain."""
    context.filter_settings["basedomain_filter"].append(domain)


@when("the plan is calculated")
def step_impl(context):
    """Calculate the plan."""
    context.plan = Plan(
        current=context.current, desired=context.desired, policies=context.policies
    ).calculate()


@when("the desired records are filtered")
def step_impl(context):
    """Run the desired records through the filter source."""
    settings = context.filter_settings
    source = FilterSource(
        StaticSource(context.desired),
        domain_filter=DomainFilter(settings["basedomain_filter"]),
        cidr_ignore=parse_cidr_list(settings["cidr_ignore"]),
        dns_ignore=parse_dns_ignore_list(settings["dns_ignore"]),
    )
    context.filtered = source.endpoints()


@then("no changes are planned")
def step_impl(context):
    """Verify an empty change-set."""
    assert not context.plan.changes.has_changes(), context.plan.changes


@then('"{name}" is planned for creation')
def step_impl(context, name):
    """Verify a create."""
    assert name in [r.name for r in context.plan.changes.create]


@then('"{name}" is planned for update to "{target}" with TTL {ttl:d}')
def step_impl(context, name, target, ttl):
    """Verify a paired update."""
    changes = context.plan.changes
    assert [r.name for r in changes.update_old] == [name]
    updated = changes.update_new[0]
    assert updated.name == name
    assert updated.target == target
    assert updated.ttl == ttl


@then('"{name}" is planned for deletion')
def step_impl(context, name):
    """Verify a delete."""
    assert name in [r.name for r in context.plan.changes.delete]


@then("no deletions are planned")
def step_impl(context):
    """Verify that nothing is deleted."""
    assert context.plan.changes.delete == []


@then('the filtered names are "{names}"')
def step_impl(context, names):
    """Verify the names surviving the filters, in order."""
    expected = [name.strip() for name in names.split(",")]
    actual = [endpoint.name for endpoint in context.filtered]
    assert actual == expected, actual
