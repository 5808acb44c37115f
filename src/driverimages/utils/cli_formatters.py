"""Presentation layer formatting functions for the driver-images CLI."""

from __future__ import annotations

import click

from driverimages.driverimage import DriverImage


def format_image_table(images: list[DriverImage]) -> str:
    """Format driver images as a text table.

    Args:
        images: Driver images in display order.

    Returns:
        Formatted multi-line string (no trailing newline).
    """
    if not images:
        return "No driver images found."

    snapshot_vals = [i.display_snapshots() or "-" for i in images]

    # Column widths
    w_name = max(len("Name"), *(len(i.name) for i in images)) + 2
    w_id = max(len("Image ID"), *(len(i.image_id) for i in images)) + 2
    w_date = max(len("Creation Date"), *(len(i.creation_date) for i in images)) + 2
    w_snap = max(len("Snapshots"), *(len(v) for v in snapshot_vals))

    columns: list[tuple[str, int, list[str]]] = [
        ("Name", w_name, [i.name for i in images]),
        ("Image ID", w_id, [i.image_id for i in images]),
        ("Creation Date", w_date, [i.creation_date for i in images]),
        ("Snapshots", w_snap, snapshot_vals),
    ]

    header = " ".join(f"{col[0]:<{col[1]}}" for col in columns)
    total_width = sum(col[1] for col in columns) + len(columns) - 1
    separator = "-" * total_width

    lines = [header, separator]
    for i in range(len(images)):
        row = " ".join(f"{col[2][i]:<{col[1]}}" for col in columns)
        lines.append(row.rstrip())

    return "\n".join(lines)


def display_image_detail(image: DriverImage):
    """Display a single driver image with one line per snapshot."""
    click.echo(f"Name:           {image.name}")
    click.echo(f"Image ID:       {image.image_id}")
    click.echo(f"Creation Date:  {image.creation_date}")

    if image.snapshots:
        click.echo("\nSnapshots:")
        for snapshot in image.snapshots:
            click.echo(f"  {snapshot.snapshot_id}  (volume: {snapshot.volume_id})")
    else:
        click.echo("\nSnapshots:      none")
