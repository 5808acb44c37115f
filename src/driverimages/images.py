"""Assemble :class:`DriverImage` instances from the image catalog.

Image search failures are fatal and propagate as
:class:`~driverimages.aws.QueryError`.  Snapshot resolution is best-effort
per image: a failed lookup or a malformed mapping leaves that image with
fewer (possibly zero) snapshots and a warning in the log, but never aborts
the other images.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from driverimages.aws import Ec2ImageCatalog, QueryError
from driverimages.config import DEFAULT_MAX_WORKERS
from driverimages.driverimage import DriverImage, Snapshot
from driverimages.naming import (
    ImageLang,
    ImagePlatform,
    build_filter_string,
)

logger = logging.getLogger(__name__)


class ImageNotFoundError(Exception):
    """Raised when a lookup by image ID matches no image."""

    def __init__(self, image_id: str):
        self.image_id = image_id
        super().__init__("No image found for ID %s" % image_id)


def get_valid_snapshot_ids(image: dict[str, Any]) -> list[str]:
    """Return the snapshot IDs of an image's EBS-backed block device mappings.

    Mappings without an ``Ebs`` entry, or whose ``Ebs`` entry has no
    snapshot ID, are skipped with a warning. An image left with no snapshot
    IDs at all is also logged.
    """
    image_id = image["ImageId"]
    snapshot_ids = []
    for mapping in image.get("BlockDeviceMappings", []):
        ebs = mapping.get("Ebs")
        if ebs is None:
            # Runner images are built with EBS; anything else that matched the search is ignored
            logger.warning("Empty ebs entry for image %s", image_id)
            continue
        snapshot_id = ebs.get("SnapshotId")
        if not snapshot_id:
            logger.warning("Empty snapshot ID for ebs entry for image %s", image_id)
            continue
        snapshot_ids.append(snapshot_id)
    if not snapshot_ids:
        logger.warning("No snapshot-backed block device mappings for image %s", image_id)
    return snapshot_ids


def _to_snapshots(image_id: str, records: list[dict[str, Any]]) -> tuple[Snapshot, ...]:
    snapshots = []
    for record in records:
        snapshot_id = record.get("SnapshotId")
        volume_id = record.get("VolumeId")
        if not snapshot_id or not volume_id:
            logger.warning("Dropping incomplete snapshot record for image %s: %s", image_id, record)
            continue
        snapshots.append(Snapshot(snapshot_id=snapshot_id, volume_id=volume_id))
    return tuple(snapshots)


def build_driver_image(catalog: Ec2ImageCatalog, image: dict[str, Any]) -> DriverImage:
    """Build a :class:`DriverImage` from a raw EC2 image record.

    Issues one snapshot lookup covering all of the image's snapshot IDs.
    ``ImageId``, ``Name`` and ``CreationDate`` are required; a record
    missing any of them raises ``KeyError``.
    """
    image_id = image["ImageId"]
    try:
        records = catalog.lookup_snapshots(get_valid_snapshot_ids(image))
    except QueryError as e:
        logger.warning("Error retrieving snapshots for image with ID %s, using no snapshots: %s",
                       image_id, e)
        records = []

    return DriverImage(
        name=image["Name"],
        image_id=image_id,
        creation_date=image["CreationDate"],
        snapshots=_to_snapshots(image_id, records),
    )


def build_driver_images(
        catalog: Ec2ImageCatalog,
        images: list[dict[str, Any]],
        max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[DriverImage]:
    """Build driver images for raw records, resolving snapshots concurrently.

    Args:
        catalog: Catalog used for the per-image snapshot lookups.
        images: Raw image records, in search order.
        max_workers: Upper bound on concurrent snapshot lookups.

    Returns:
        One DriverImage per input record, in input order.
    """
    if not images:
        return []

    t0 = time.monotonic()
    workers = max(1, min(max_workers, len(images)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(build_driver_image, catalog, image) for image in images]
        # join on every future before returning; order follows the search result
        results = [future.result() for future in futures]

    logger.debug("Resolved snapshots for %d images with %d workers (%.1fs)",
                 len(results), workers, time.monotonic() - t0)
    return results


def build_driver_images_by_lang_and_platform(
        catalog: Ec2ImageCatalog,
        lang: ImageLang | None = None,
        platform: ImagePlatform | None = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
) -> list[DriverImage]:
    """Search for driver images by language and platform.

    Raises:
        QueryError: If the image search itself fails.
    """
    images = catalog.search_images(build_filter_string(lang, platform))
    logger.debug("Image search returned %d images", len(images))
    return build_driver_images(catalog, images, max_workers=max_workers)


def build_driver_image_by_id(catalog: Ec2ImageCatalog, image_id: str) -> DriverImage:
    """Look up a single driver image by its image ID.

    Raises:
        QueryError: If the image search fails.
        ImageNotFoundError: If the search succeeded but matched nothing.
    """
    images = catalog.search_images_by_id(image_id)
    if not images:
        raise ImageNotFoundError(image_id)
    return build_driver_image(catalog, images[0])
