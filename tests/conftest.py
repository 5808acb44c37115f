"""Shared pytest fixtures for driver-images tests."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

import pytest
import yaml

from driverimages.aws import QueryError


def make_raw_image(
        image_id: str,
        name: str | None = None,
        creation_date: str = "2024-05-01T12:00:00.000Z",
        snapshot_ids: list[str | None] | None = None,
        no_ebs: int = 0,
) -> dict[str, Any]:
    """Build a describe_images record.

    ``snapshot_ids`` entries of None produce an Ebs mapping without a
    SnapshotId; ``no_ebs`` adds that many ephemeral (non-EBS) mappings.
    """
    mappings: list[dict[str, Any]] = []
    for i, snap in enumerate(snapshot_ids or []):
        ebs = {"DeleteOnTermination": True, "VolumeSize": 30}
        if snap is not None:
            ebs["SnapshotId"] = snap
        mappings.append({"DeviceName": "/dev/sd%s" % chr(ord("a") + i), "Ebs": ebs})
    for i in range(no_ebs):
        mappings.append({"DeviceName": "/dev/sdz%d" % i, "VirtualName": "ephemeral%d" % i})
    return {
        "ImageId": image_id,
        "Name": name or "java-driver-jammy-64-%s" % image_id,
        "CreationDate": creation_date,
        "BlockDeviceMappings": mappings,
    }


def snapshot_record(snapshot_id: str) -> dict[str, Any]:
    return {"SnapshotId": snapshot_id, "VolumeId": "vol-" + snapshot_id.removeprefix("snap-")}


class FakeCatalog:
    """In-memory stand-in for Ec2ImageCatalog.

    Snapshots resolve to ``vol-<suffix>`` unless the ID is listed in
    ``missing_snapshots``.  Lookups containing an ID in ``failing_snapshots``
    raise QueryError, as does any search when ``search_error`` is set.
    """

    def __init__(self, images: list[dict[str, Any]] | None = None):
        self.images = list(images or [])
        self.search_error: str | None = None
        self.failing_snapshots: set[str] = set()
        self.missing_snapshots: set[str] = set()
        self.deregister_result = True
        self.search_calls: list[str] = []
        self.lookup_calls: list[list[str]] = []
        self.deregister_calls: list[str] = []
        self._lock = threading.Lock()

    def search_images(self, pattern: str):
        self.search_calls.append(pattern)
        if self.search_error:
            raise QueryError(self.search_error)
        return list(self.images)

    def search_images_by_id(self, image_id: str):
        self.search_calls.append("image-id=%s" % image_id)
        if self.search_error:
            raise QueryError(self.search_error)
        return [i for i in self.images if i["ImageId"] == image_id]

    def lookup_snapshots(self, snapshot_ids: list[str]):
        with self._lock:
            self.lookup_calls.append(list(snapshot_ids))
        if self.failing_snapshots.intersection(snapshot_ids):
            raise QueryError("InvalidSnapshot.NotFound")
        return [snapshot_record(s) for s in snapshot_ids if s not in self.missing_snapshots]

    def deregister_image(self, image_id: str) -> bool:
        self.deregister_calls.append(image_id)
        if self.search_error:
            raise QueryError(self.search_error)
        return self.deregister_result


@pytest.fixture
def raw_images() -> list[dict[str, Any]]:
    """Three well-formed images, one snapshot each except the last (two)."""
    return [
        make_raw_image("ami-001", name="java-driver-jammy-64-1", snapshot_ids=["snap-001"]),
        make_raw_image("ami-002", name="java-driver-focal-64-2", snapshot_ids=["snap-002"]),
        make_raw_image("ami-003", name="java-driver-rocky9-64-3", snapshot_ids=["snap-003a", "snap-003b"]),
    ]


@pytest.fixture
def catalog(raw_images) -> FakeCatalog:
    return FakeCatalog(raw_images)


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a small config file and return its path."""
    path = tmp_path / "config.yaml"
    with open(path, "w") as f:
        yaml.dump({"aws": {"region": "us-west-2"}, "concurrency": {"max_workers": 2}}, f)
    return path
