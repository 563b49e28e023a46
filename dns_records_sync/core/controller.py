"""
Controller - runs reconciliation ticks

Each tick reads the desired endpoints from the source and the current records
from the registry, calculates a plan, reports it and, unless running dry,
hands the changes to the registry.
"""

import logging
import threading
from datetime import datetime
from typing import List, Optional, Sequence

from rich.console import Console
from rich.table import Table

from .endpoint import Endpoint
from .plan import Changes, Plan
from .policy import Policy

logger = logging.getLogger(__name__)


class Controller:
    """Main reconciliation class that orchestrates source, planner and registry."""

    def __init__(
        self,
        source,
        registry,
        policies: Sequence[Policy],
        interval: float = 60,
        dry_run: bool = False,
        output_file: Optional[str] = None,
        console: Optional[Console] = None,
    ):
        self.source = source
        self.registry = registry
        self.policies = list(policies)
        self.interval = interval
        self.dry_run = dry_run
        self.output_file = output_file
        self.console = console or Console()

    def run_once(self, cleanup: bool = False) -> Plan:
        """
        Run a single reconciliation tick.

        Args:
            cleanup: Plan against an empty desired set, removing owned records

        Returns:
            The calculated plan
        """
        if cleanup:
            desired: List[Endpoint] = []
            logger.info("Cleanup run: planning removal of managed records")
        else:
            desired = self.source.endpoints()

        current = self.registry.records()
        logger.info(f"Planning {len(desired)} desired against {len(current)} current records")

        plan = Plan(current=current, desired=desired, policies=self.policies).calculate()
        changes = plan.changes

        self._display_changes_summary(changes)

        if self.dry_run:
            self.console.print("[yellow]DRY RUN MODE - No changes will be applied[/yellow]")
            if self.output_file:
                self._save_dry_run_output(changes, self.output_file)
                self.console.print(f"[green]Dry run output saved to: {self.output_file}[/green]")
            return plan

        if not changes.has_changes():
            self.console.print("[green]No changes required - DNS records are up to date[/green]")
            return plan

        self.registry.apply_changes(changes)
        logger.info(f"Applied {changes.total_changes} DNS changes")
        return plan

    def run(self, stop_event: Optional[threading.Event] = None, once: bool = False, cleanup: bool = False):
        """
        Run reconciliation ticks every interval until stopped.

        A failing tick is logged and retried on the next interval. With
        ``once`` a single tick runs and its errors propagate.
        """
        if once or cleanup:
            self.run_once(cleanup=cleanup)
            return

        stop_event = stop_event or threading.Event()
        while not stop_event.is_set():
            try:
                self.run_once()
            except Exception as e:
                logger.error(f"Reconciliation failed: {e}")
            stop_event.wait(self.interval)

        logger.info("Controller stopped")

    def _display_changes_summary(self, changes: Changes):
        """Display a summary of planned changes."""
        table = Table(title="DNS Changes Summary")
        table.add_column("Operation", style="cyan")
        table.add_column("Count", style="magenta")
        table.add_column("Details", style="white")

        if changes.create:
            table.add_row(
                "Create",
                str(len(changes.create)),
                ", ".join([r.name for r in changes.create]),
            )

        if changes.update_new:
            table.add_row(
                "Update",
                str(len(changes.update_new)),
                ", ".join([r.name for r in changes.update_new]),
            )

        if changes.delete:
            table.add_row(
                "Delete",
                str(len(changes.delete)),
                ", ".join([r.name for r in changes.delete]),
            )

        self.console.print(table)
        self.console.print(f"\n[bold]Total changes: {changes.total_changes}[/bold]")

    def _save_dry_run_output(self, changes: Changes, output_file: str):
        """Save dry run output to a file."""
        try:
            with open(output_file, "w") as f:
                f.write("=" * 60 + "\n")
                f.write("DNS RECORDS SYNC - DRY RUN SUMMARY\n")
                f.write("=" * 60 + "\n\n")

                f.write(f"Total Changes: {changes.total_changes}\n")
                f.write(f"Timestamp: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n\n")

                if changes.create:
                    f.write("RECORDS TO CREATE:\n")
                    f.write("-" * 20 + "\n")
                    for record in changes.create:
                        f.write(f"  + {record.name:<30} {record.record_type:<6} -> {record.target}\n")
                    f.write("\n")

                if changes.update_new:
                    f.write("RECORDS TO UPDATE:\n")
                    f.write("-" * 20 + "\n")
                    for old, new in zip(changes.update_old, changes.update_new):
                        f.write(f"  ~ {new.name:<30} {old.target} -> {new.target}\n")
                    f.write("\n")

                if changes.delete:
                    f.write("RECORDS TO DELETE:\n")
                    f.write("-" * 20 + "\n")
                    for record in changes.delete:
                        f.write(f"  - {record.name}\n")
                    f.write("\n")

                f.write("=" * 60 + "\n")
                f.write("END OF DRY RUN SUMMARY\n")
                f.write("=" * 60 + "\n")

            logger.info(f"Dry run output saved to: {output_file}")
        except OSError as e:
            logger.error(f"Failed to save dry run output to {output_file}: {e}")
            self.console.print(
                f"[red]Warning: Failed to save dry run output to {output_file}: {e}[/red]"
            )
