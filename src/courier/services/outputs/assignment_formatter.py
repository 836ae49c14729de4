"""Serializers for batch assignment outputs."""

from __future__ import annotations

import csv
import io
from dataclasses import asdict

from ...models.domain import BatchAssignmentResult


def batch_result_to_json(result: BatchAssignmentResult) -> dict:
    return {
        "summary": {
            "total": result.total,
            "assigned": result.assigned,
            "unassigned": result.unassigned,
        },
        "successful": [asdict(item) for item in result.successful],
        "failed": [{"order_id": item.order_id, "reason": item.reason} for item in result.failed],
    }


def batch_result_to_csv(result: BatchAssignmentResult) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "order_id",
        "assigned",
        "driver_id",
        "driver_name",
        "score",
        "distance_km",
        "reason",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames, lineterminator="\n")
    writer.writeheader()
    for item in result.items:
        row = asdict(item)
        if row["distance_km"] is not None:
            row["distance_km"] = round(row["distance_km"], 2)
        writer.writerow(row)
    return buffer.getvalue()
