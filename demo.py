#!/usr/bin/env python3
"""
DNS Records Sync - Demo Script

This script demonstrates a reconciliation run against the in-memory
provider, so no real DNS records are touched.
"""

import csv
import os
import tempfile

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from dns_records_sync.config import config_logger, get_default_config, get_policies
from dns_records_sync.core.controller import Controller
from dns_records_sync.providers.inmemory_provider import InMemoryProvider
from dns_records_sync.registry.txt_registry import TXTRegistry
from dns_records_sync.sources.csv import CSVSource
from dns_records_sync.sources.filter_source import FilterSource
from dns_records_sync.utils.domain_filter import DomainFilter
from dns_records_sync.utils.validators import parse_cidr_list

console = Console()

ZONE = "cluster.example.org"


def create_demo_csv(directory):
    """Create a demo CSV file with sample records."""
    csv_file = os.path.join(directory, "demo_records.csv")

    records = [
        ["FQDN", "Target", "Type", "TTL"],
        ["web1.cluster.example.org", "10.33.1.10", "A", ""],
        ["web2.cluster.example.org", "10.33.1.12", "A", "600"],
        ["db1.cluster.example.org", "10.33.2.10", "A", ""],
        ["www.cluster.example.org", "web1.cluster.example.org", "CNAME", ""],
        ["lab.cluster.example.org", "192.168.100.10", "A", ""],
        ["web1.example.com", "10.33.9.9", "A", ""],
    ]

    with open(csv_file, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerows(records)

    return csv_file


def create_demo_provider():
    """Seed an in-memory provider with records owned by this demo."""
    owner = "heritage=dns-records-sync,dns-records-sync/owner=demo"
    records = []
    for name, target in (
        ("web1.cluster.example.org", "10.33.1.10"),
        ("web2.cluster.example.org", "10.33.1.11"),
        ("old.cluster.example.org", "10.33.4.4"),
    ):
        records.append({"name": name, "target": target, "ttl": 300})
        records.append({"name": f"_owner.{name}", "target": owner, "type": "TXT"})

    return InMemoryProvider({"records": records}, domain_filter=DomainFilter([ZONE]))


def display_state(provider, title):
    """Display the records held by the provider."""
    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Target", style="magenta")
    table.add_column("TTL", style="yellow")

    for record in sorted(provider.records(), key=lambda r: (r.name, r.record_type)):
        table.add_row(record.name, record.record_type, record.target, str(record.ttl or "-"))

    console.print(table)
    console.print()


def main():
    """Main demo function."""
    console.print(
        Panel.fit(
            "[bold blue]DNS Records Sync - Demo[/bold blue]\n"
            f"[cyan]Reconciling {ZONE} with an in-memory provider[/cyan]",
            border_style="blue",
        )
    )
    config_logger({"logging": {"level": "WARNING"}})

    with tempfile.TemporaryDirectory() as directory:
        source = FilterSource(
            CSVSource(create_demo_csv(directory)),
            domain_filter=DomainFilter([ZONE]),
            cidr_ignore=parse_cidr_list(["192.168.100.0/24"]),
        )
        provider = create_demo_provider()
        registry = TXTRegistry(provider, owner_id="demo", prefix="_owner.")
        policies = get_policies(get_default_config())

        display_state(provider, "Initial State")

        console.print("[bold]Dry run[/bold]")
        Controller(source, registry, policies, dry_run=True, console=console).run_once()

        console.print("[bold]Live run[/bold]")
        Controller(source, registry, policies, console=console).run_once()

        display_state(provider, "Final State")

        console.print("[bold]Second run (nothing left to do)[/bold]")
        Controller(source, registry, policies, console=console).run_once()

    console.print("[bold blue]Demo completed![/bold blue]")


if __name__ == "__main__":
    main()
