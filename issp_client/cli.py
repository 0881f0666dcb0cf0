#!/usr/bin/env python3
"""
Command-line front end for the ISSP request system.

Usage:
    issp <command> [options]

Examples:
    issp login --token <token>
    issp requests
    issp group 2024-2026
    issp history --cycle 2024-2026
    issp insight "Laptop"
"""

import argparse
import asyncio
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from issp_client.allocation import YearAllocation, quantity_for_year
from issp_client.auth import default_provider
from issp_client.config import ClientSettings
from issp_client.cycles import parse_cycle
from issp_client.errors import IsspClientError, ValidationError
from issp_client.fetchers import InsightFetcher, InventoryFetcher, RequestFetcher, create_session
from issp_client.grouping import group_by_cycle, latest_request, per_year_totals
from issp_client.insights import InsightLookup
from issp_client.models import Request, RequestItem, YearGroup
from issp_client.storage import GroupExporter, SessionStore
from issp_client.utils.logging import get_logger, setup_logging
from issp_client.views import (
    ALL_CYCLES,
    cycle_labels,
    filter_by_cycle,
    group_inventory_by_request,
    search_inventory,
    status_summary,
)

console = Console()
logger = get_logger()

STATUS_STYLES = {
    "approved": "green",
    "submitted": "blue",
    "rejected": "red",
    "resubmitted": "dark_orange",
    "disapproved": "red",
    "pending": "yellow",
}


def styled_status(status: Optional[str]) -> str:
    if not status:
        return "[dim]—[/dim]"
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status.replace('_', ' ').upper()}[/{style}]"


def parse_year_quantities(pairs: List[str]) -> Dict[str, str]:
    """Parse repeated ``YEAR=QTY`` arguments."""
    quantities = {}
    for pair in pairs or []:
        year, sep, qty = pair.partition("=")
        if not sep or not year.strip():
            raise ValidationError(f"Expected YEAR=QTY, got {pair!r}")
        quantities[year.strip()] = qty
    return quantities


class IsspClient:
    """Ties settings, session store and fetchers together for CLI commands."""

    def __init__(self, settings: ClientSettings):
        self.settings = settings
        self.store = SessionStore(settings.session_dir)
        credentials = default_provider(self.store)
        self.requests = RequestFetcher(settings, credentials)
        self.inventory = InventoryFetcher(settings, credentials)
        self.insights = InsightFetcher(settings, credentials)

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def login(self, token: str, email: str = "", unit: str = "") -> None:
        self.store.save_token(token)
        if email or unit:
            self.store.save_user({"email": email, "unit": unit})
        console.print("[green]Session token saved.[/green]")

    def logout(self) -> None:
        self.store.clear()
        console.print("Logged out.")

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def fetch_groups(self) -> Dict[str, YearGroup]:
        async with create_session(self.settings) as session:
            requests = await self.requests.list_requests(session)
        return group_by_cycle(requests)

    async def show_requests(self) -> None:
        groups = await self.fetch_groups()
        if not groups:
            console.print("No requests found.")
            return
        console.print(render_group_list(groups, "ISSP Requests"))

    async def show_group(self, cycle: str) -> None:
        groups = await self.fetch_groups()
        group = groups.get(cycle)
        if group is None:
            console.print(f"[red]No requests for cycle {cycle}.[/red] Known cycles: {', '.join(groups) or 'none'}")
            return
        console.print(render_group_items(group))

    async def show_history(self, cycle: str = ALL_CYCLES) -> None:
        async with create_session(self.settings) as session:
            requests = await self.requests.list_history(session)

        console.print(f"Cycles on record: {', '.join(cycle_labels(requests)) or 'none'}")
        selected = filter_by_cycle(requests, cycle)
        summary = status_summary(selected)
        console.print("  ".join(f"{styled_status(k)} {v}" for k, v in summary.items()))

        groups = group_by_cycle(selected)
        if groups:
            console.print(render_group_list(groups, "Request History"))
        else:
            console.print("No history for this selection.")

    async def create_request(
        self,
        title: str,
        cycle: str,
        item_name: str,
        year_quantities: Dict[str, str],
        quantity: Optional[str],
        price: float,
        price_range: str,
        specification: str,
        purpose: str,
        submit: bool,
    ) -> None:
        item = RequestItem(
            id=str(int(time.time() * 1000)),
            name=item_name.strip(),
            price=price,
            range=price_range,
            specification=specification,
            purpose=purpose,
        )
        allocation = YearAllocation(item, cycle)
        if allocation.has_years:
            for year, raw in year_quantities.items():
                if year not in {str(y) for y in allocation.years}:
                    raise ValidationError(f"Year {year} is outside cycle {cycle}")
                allocation.set(year, raw)
        else:
            allocation.set_total(quantity)

        request = Request(id="", request_title=title, year=cycle, items=[item])
        async with create_session(self.settings) as session:
            created = await self.requests.create_request(session, request)
            if submit and created.id:
                await self.requests.submit_request(session, created.id)
        console.print(f"[green]Created request {created.id or '(pending id)'}[/green] with {item.quantity} units of {item.name}")

    async def submit(self, request_id: str) -> None:
        async with create_session(self.settings) as session:
            await self.requests.submit_request(session, request_id)
        console.print(f"[green]Request {request_id} submitted.[/green]")

    async def set_item_status(self, request_id: str, item_id: str, status: str, remarks: str) -> None:
        async with create_session(self.settings) as session:
            await self.requests.update_item_status(session, request_id, item_id, status, remarks)
        console.print(f"Item {item_id} set to {styled_status(status)}")

    # ------------------------------------------------------------------
    # Inventory / insights / export
    # ------------------------------------------------------------------

    async def show_inventory(self, search: str = "") -> None:
        async with create_session(self.settings) as session:
            items = await self.inventory.list_items(session)
        groups = group_inventory_by_request(items)
        if search:
            groups = search_inventory(groups, search)
        if not groups:
            console.print("No inventory items found.")
            return
        for group in groups.values():
            table = Table(title=f"{group.request_title} ({group.request_year})")
            table.add_column("Item")
            table.add_column("Qty", justify="right")
            table.add_column("Purpose")
            table.add_column("Status")
            for item in group.items:
                table.add_row(item.name, str(item.quantity), item.purpose, styled_status(item.status.lower()))
            console.print(table)

    async def show_insight(self, item_name: str) -> bool:
        async with create_session(self.settings) as session:
            lookup = InsightLookup(
                lambda name: self.insights.fetch(session, name),
                debounce=self.settings.insight_debounce,
            )
            await lookup.lookup(item_name)
        if lookup.state != "ready":
            console.print(f"[red]Unable to fetch AI insights right now:[/red] {lookup.error}")
            return False
        insight = lookup.insights
        body = [
            insight.quick_summary,
            f"[bold]Price range:[/bold] {insight.price_range}",
        ]
        body.extend(f"  • {spec}" for spec in insight.specs)
        if insight.brand_suggestion:
            body.append(f"[bold]Brand:[/bold] {insight.brand_suggestion}")
        if insight.vendors:
            body.append(f"[bold]Vendors:[/bold] {', '.join(insight.vendors)}")
        if insight.caution:
            body.append(f"[yellow]{insight.caution}[/yellow]")
        console.print(Panel("\n".join(b for b in body if b), title=insight.item_name))
        return True

    async def export(self, output_dir: Path, cycle: Optional[str] = None) -> List[Path]:
        groups = await self.fetch_groups()
        if cycle:
            groups = {k: v for k, v in groups.items() if k == cycle}
        files = GroupExporter(output_dir).export_all(groups)
        for path in files:
            console.print(f"Wrote {path}")
        return files


def render_group_list(groups: Dict[str, YearGroup], title: str) -> Table:
    """One row per year group with its roll-up status."""
    table = Table(title=title)
    table.add_column("Cycle", style="bold")
    table.add_column("Requests", justify="right")
    table.add_column("Items", justify="right")
    table.add_column("Status")
    table.add_column("Latest")
    for label, group in groups.items():
        latest = latest_request(group.requests)
        table.add_row(
            label,
            str(len(group.requests)),
            str(group.total_item_count),
            styled_status(group.overall_status),
            latest.request_title if latest else "",
        )
    return table


def render_group_items(group: YearGroup) -> Table:
    """All items of a group with one quantity column per cycle year."""
    table = Table(title=f"{group.cycle_label} · {styled_status(group.overall_status)}")
    table.add_column("Request")
    table.add_column("Item")
    for year in group.years:
        table.add_column(str(year), justify="right")
    table.add_column("Total", justify="right", style="bold")
    table.add_column("Approval")
    table.add_column("Item status")

    for flat in group.flattened_items:
        item = flat.item
        table.add_row(
            flat.request_title or flat.request_id,
            item.name,
            *[str(quantity_for_year(item, y)) for y in group.years],
            str(item.quantity),
            styled_status(item.approval_status),
            styled_status(item.item_status) if item.is_approved else "[dim]—[/dim]",
        )

    if group.years:
        totals = per_year_totals(group)
        table.add_row(
            "", "[bold]TOTAL[/bold]",
            *[str(v) for v in totals.values()],
            str(sum(totals.values())), "", "",
        )
    return table


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="issp",
        description="Client for the ISSP equipment request system",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  issp login --token <token>
  issp requests
  issp group 2024-2026
  issp create --title "Lab refresh" --cycle 2024-2026 --item Laptop --qty 2024=5 --qty 2025=3
  issp export --output-dir data
        """
    )
    parser.add_argument("--api-url", help="Backend URL (default: $ISSP_API_URL or http://localhost:5000)")
    parser.add_argument("--log-dir", type=Path, help="Also write a debug log file here")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging (debug level)")

    sub = parser.add_subparsers(dest="command")

    login = sub.add_parser("login", help="Store a session token")
    login.add_argument("--token", required=True)
    login.add_argument("--email", default="")
    login.add_argument("--unit", default="")

    sub.add_parser("logout", help="Forget the stored session token")
    sub.add_parser("requests", help="List requests grouped by year cycle")

    group = sub.add_parser("group", help="Show every item of one year cycle")
    group.add_argument("cycle")

    history = sub.add_parser("history", help="Submitted, approved and rejected requests")
    history.add_argument("--cycle", default=ALL_CYCLES)

    inventory = sub.add_parser("inventory", help="List inventory items by request")
    inventory.add_argument("--search", default="")

    insight = sub.add_parser("insight", help="AI price and spec hints for an item")
    insight.add_argument("name")

    create = sub.add_parser("create", help="Create a request with one item")
    create.add_argument("--title", default="")
    create.add_argument("--cycle", required=True, help="Year cycle, e.g. 2024-2026")
    create.add_argument("--item", required=True, help="Item name")
    create.add_argument("--qty", action="append", default=[], metavar="YEAR=QTY",
                        help="Quantity for one year of the cycle (repeatable)")
    create.add_argument("--quantity", help="Total quantity when the cycle has no years")
    create.add_argument("--price", type=float, default=0.0)
    create.add_argument("--range", dest="price_range", choices=("low", "mid", "high"), default="mid")
    create.add_argument("--specification", default="")
    create.add_argument("--purpose", default="")
    create.add_argument("--submit", action="store_true", help="Submit right after creating")

    submit = sub.add_parser("submit", help="Submit a draft request")
    submit.add_argument("request_id")

    item_status = sub.add_parser("item-status", help="Update fulfilment status of an approved item")
    item_status.add_argument("request_id")
    item_status.add_argument("item_id")
    item_status.add_argument("status")
    item_status.add_argument("--remarks", default="")

    export = sub.add_parser("export", help="Export year groups to JSON and CSV")
    export.add_argument("cycle", nargs="?")
    export.add_argument("--output-dir", type=Path, default=Path("data"))

    cycle = sub.add_parser("cycle", help="Show the years a cycle label covers")
    cycle.add_argument("label")

    return parser


def run(args: argparse.Namespace) -> int:
    settings = ClientSettings.from_env(api_base=args.api_url)
    client = IsspClient(settings)
    command = args.command

    if command == "login":
        client.login(args.token, args.email, args.unit)
    elif command == "logout":
        client.logout()
    elif command == "cycle":
        years = parse_cycle(args.label)
        if not years:
            console.print(f"[red]{args.label!r} is not a valid cycle[/red]")
            return 1
        console.print(", ".join(str(y) for y in years))
    elif command == "requests":
        asyncio.run(client.show_requests())
    elif command == "group":
        asyncio.run(client.show_group(args.cycle))
    elif command == "history":
        asyncio.run(client.show_history(args.cycle))
    elif command == "inventory":
        asyncio.run(client.show_inventory(args.search))
    elif command == "insight":
        return 0 if asyncio.run(client.show_insight(args.name)) else 1
    elif command == "create":
        asyncio.run(client.create_request(
            title=args.title,
            cycle=args.cycle,
            item_name=args.item,
            year_quantities=parse_year_quantities(args.qty),
            quantity=args.quantity,
            price=args.price,
            price_range=args.price_range,
            specification=args.specification,
            purpose=args.purpose,
            submit=args.submit,
        ))
    elif command == "submit":
        asyncio.run(client.submit(args.request_id))
    elif command == "item-status":
        asyncio.run(client.set_item_status(args.request_id, args.item_id, args.status, args.remarks))
    elif command == "export":
        asyncio.run(client.export(args.output_dir, args.cycle))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    setup_logging(args.log_dir, verbose=args.verbose)
    try:
        return run(args)
    except IsspClientError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
