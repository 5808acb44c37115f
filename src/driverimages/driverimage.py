"""Display-ready representation of driver images and their snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Snapshot:
    """An EBS snapshot backing a driver image."""

    snapshot_id: str
    volume_id: str

    def __str__(self) -> str:
        return "%s (volume: %s)" % (self.snapshot_id, self.volume_id)


@dataclass(frozen=True)
class DriverImage:
    """A driver image as assembled from the image catalog.

    An empty ``snapshots`` tuple means either that the image had no
    snapshot-backed block device mapping or that the snapshot lookup
    failed; both cases are logged when the image is built.
    """

    name: str
    image_id: str
    creation_date: str
    snapshots: tuple[Snapshot, ...] = field(default_factory=tuple)

    def display_snapshots(self) -> str:
        """Join the snapshots into a single comma-separated string."""
        return ",".join(str(s) for s in self.snapshots)
