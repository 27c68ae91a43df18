"""
Human-readable output formatting.

Centralizes all CLI output formatting so commands stay thin: they fetch,
validate into models, and hand off to a printer here.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Mapping, Optional

import typer

from ..models import (
    AccountSettings,
    ImageInspection,
    NamespaceDetails,
    Plan,
    Quota,
    RemoteAPIImage,
    RestoreResult,
    RetentionPolicy,
    Trash,
)


def print_regions(endpoints: Mapping[str, str]) -> None:
    width = max(len(region) for region in endpoints)
    for region, url in endpoints.items():
        typer.echo(f"{region.ljust(width)}  {url}")


def print_namespaces(namespaces: List[str]) -> None:
    if not namespaces:
        typer.echo("No namespaces found")
        return
    for name in namespaces:
        typer.echo(name)


def print_namespace_details(details: List[NamespaceDetails]) -> None:
    if not details:
        typer.echo("No namespaces found")
        return
    for ns in details:
        group = ns.resource_group or "(unassigned)"
        typer.echo(f"{ns.name}  resource_group={group}  created={ns.created_date or '-'}")


def print_images(images: List[RemoteAPIImage]) -> None:
    """
    Print one line per tag, like `ibmcloud cr images`.

    Images without tags are shown by their first repo digest.
    """
    if not images:
        typer.echo("No images found")
        return
    for image in images:
        names = image.repo_tags or image.repo_digests or ["<none>"]
        created = _format_timestamp(image.created)
        size = _format_bytes(image.size or 0)
        status = image.vulnerable or "-"
        for name in names:
            typer.echo(f"{name}  {created}  {size}  {status}")


def print_image_inspection(image: str, inspection: ImageInspection) -> None:
    typer.echo(f"Image: {image}")
    typer.echo(f"Id: {inspection.id or '-'}")
    typer.echo(f"Created: {inspection.created or '-'}")
    typer.echo(f"Platform: {inspection.os or '?'}/{inspection.architecture or '?'}")
    typer.echo(f"Size: {_format_bytes(inspection.size or 0)}")
    if inspection.root_fs and inspection.root_fs.layers:
        typer.echo(f"Layers: {len(inspection.root_fs.layers)}")


def print_quota(quota: Quota) -> None:
    for label, details in (("Usage", quota.usage), ("Limit", quota.limit)):
        if details is None:
            continue
        typer.echo(
            f"{label}: storage {_format_quota(details.storage_bytes)}, "
            f"traffic {_format_quota(details.traffic_bytes)}"
        )


def print_plan(plan: Plan) -> None:
    typer.echo(f"Plan: {plan.plan or 'unknown'}")


def print_account_settings(settings: AccountSettings) -> None:
    typer.echo(f"Platform metrics: {_on_off(settings.platform_metrics)}")


def print_messages(message: Optional[str]) -> None:
    typer.echo(message or "No service messages")


def print_retention_policy(policy: RetentionPolicy) -> None:
    images = "unlimited" if policy.images_per_repo in (None, -1) else str(policy.images_per_repo)
    typer.echo(f"Namespace: {policy.namespace}")
    typer.echo(f"Images per repository: {images}")
    typer.echo(f"Retain untagged: {_on_off(policy.retain_untagged)}")


def print_trash(trash: Dict[str, Trash]) -> None:
    if not trash:
        typer.echo("Trash is empty")
        return
    for digest, entry in sorted(trash.items()):
        days = entry.days_until_expiry if entry.days_until_expiry is not None else "?"
        tags = ", ".join(entry.tags or []) or "<none>"
        typer.echo(f"{digest}  expires in {days} days  tags: {tags}")


def print_restore_result(result: RestoreResult) -> None:
    for name in result.successful or []:
        typer.echo(f"Restored: {name}")
    for name in result.unsuccessful or []:
        typer.echo(f"Not restored: {name}")


def print_done(message: str) -> None:
    typer.echo(message)


def _on_off(value: Optional[bool]) -> str:
    if value is None:
        return "unknown"
    return "on" if value else "off"


def _format_timestamp(epoch_seconds: Optional[int]) -> str:
    if not epoch_seconds:
        return "-"
    return datetime.fromtimestamp(epoch_seconds, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def _format_quota(size_bytes: Optional[int]) -> str:
    if size_bytes is None:
        return "-"
    if size_bytes < 0:
        return "unlimited"
    return _format_bytes(size_bytes)


def _format_bytes(size_bytes: int) -> str:
    """
    Format byte count as human-readable string.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "42 KB")
    """
    if size_bytes == 0:
        return "0 B"
    elif size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.1f} GB"
