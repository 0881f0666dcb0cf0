"""
Year-group export utilities.

Writes year-group view-models to JSON and the per-year item table of a
single group to CSV.
"""

import csv
import json
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, List

from issp_client.allocation import quantity_for_year
from issp_client.grouping import per_year_totals
from issp_client.models import YearGroup
from issp_client.utils.logging import get_logger

logger = get_logger()


def _slug(label: str) -> str:
    return re.sub(r"[^0-9A-Za-z_-]+", "_", label).strip("_") or "cycle"


class GroupExporter:
    """Exports year groups to JSON and CSV."""

    def __init__(self, output_dir: Path):
        """
        Initialize exporter.

        Args:
            output_dir: Directory for output files (created on first export)
        """
        self.output_dir = Path(output_dir)

    def export_groups_json(self, groups: Dict[str, YearGroup]) -> Path:
        """Export every year group to year_groups.json."""
        output = {
            "exported_at": datetime.now().isoformat(),
            "total_groups": len(groups),
            "total_requests": sum(len(g.requests) for g in groups.values()),
            "groups": [g.to_dict() for g in groups.values()],
        }
        groups_file = self.output_dir / "year_groups.json"
        self._write_json(groups_file, output)
        logger.info(f"Exported {len(groups)} year groups to {groups_file}")
        return groups_file

    def export_group_csv(self, group: YearGroup) -> Path:
        """
        Export one group's flattened items with a column per cycle year.

        Groups whose label covers no years get a single quantity column.

        Returns:
            Path to the created CSV file
        """
        csv_file = self.output_dir / f"items_{_slug(group.cycle_label)}.csv"
        year_columns = [str(y) for y in group.years]

        self.output_dir.mkdir(parents=True, exist_ok=True)
        with open(csv_file, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(
                ['request_id', 'request_title', 'request_status', 'item_id', 'item',
                 'range', 'price', 'approval_status', 'item_status']
                + year_columns + ['total_quantity']
            )
            for flat in group.flattened_items:
                item = flat.item
                writer.writerow(
                    [flat.request_id, flat.request_title, flat.request_status,
                     item.id, item.name, item.range, item.price,
                     item.approval_status, item.item_status or ""]
                    + [quantity_for_year(item, y) for y in group.years]
                    + [item.quantity]
                )
            if year_columns:
                totals = per_year_totals(group)
                writer.writerow(
                    ['', 'TOTAL', '', '', '', '', '', '', '']
                    + [totals[y] for y in year_columns]
                    + [sum(totals.values())]
                )

        logger.info(f"Exported {len(group.flattened_items)} items to {csv_file}")
        return csv_file

    def export_all(self, groups: Dict[str, YearGroup]) -> List[Path]:
        """Export the JSON summary plus one CSV per group."""
        exported = [self.export_groups_json(groups)]
        exported.extend(self.export_group_csv(g) for g in groups.values())
        return exported

    def _write_json(self, path: Path, data: Dict) -> None:
        """Write data to JSON file."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
