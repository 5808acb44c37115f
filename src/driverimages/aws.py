"""EC2 image catalog operations.

Functions in this module return raw boto3 response records.  Translation
into :class:`~driverimages.driverimage.DriverImage` happens in
:mod:`driverimages.images`.
"""

from __future__ import annotations

import logging
from typing import Any, TYPE_CHECKING

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

if TYPE_CHECKING:
    from driverimages.config import DriverImagesConfig

logger = logging.getLogger(__name__)


class QueryError(Exception):
    """Raised when a call against the image catalog fails."""


class Ec2ImageCatalog:
    """Image search, snapshot lookup and deregistration against EC2.

    The underlying boto3 client is shared read-only between the worker
    threads used for snapshot lookups.
    """

    def __init__(self, client, owners: list[str] | None = None):
        self.client = client
        self.owners = list(owners or [])

    def _describe_images(self, filter_name: str, value: str) -> list[dict[str, Any]]:
        kwargs: dict[str, Any] = {"Filters": [{"Name": filter_name, "Values": [value]}]}
        if self.owners:
            kwargs["Owners"] = self.owners
        try:
            resp = self.client.describe_images(**kwargs)
        except (ClientError, BotoCoreError) as e:
            raise QueryError("describe_images failed for %s=%s: %s" % (filter_name, value, e)) from e
        return resp.get("Images", [])

    def search_images(self, pattern: str) -> list[dict[str, Any]]:
        """Return raw image records whose name matches *pattern*."""
        logger.debug("Retrieving image data by name, filter string: %s", pattern)
        return self._describe_images("name", pattern)

    def search_images_by_id(self, image_id: str) -> list[dict[str, Any]]:
        """Return raw image records with the given image ID (zero or one)."""
        logger.debug("Retrieving image data by image ID: %s", image_id)
        return self._describe_images("image-id", image_id)

    def lookup_snapshots(self, snapshot_ids: list[str]) -> list[dict[str, Any]]:
        """Return raw snapshot records for *snapshot_ids* in a single call.

        Stale or missing IDs may make the result shorter than the input.
        An empty ID list returns an empty result without calling EC2, which
        would otherwise list every visible snapshot.
        """
        if not snapshot_ids:
            return []
        logger.debug("Retrieving snapshot data, snapshot_ids: %s", ",".join(snapshot_ids))
        try:
            resp = self.client.describe_snapshots(SnapshotIds=list(snapshot_ids))
        except (ClientError, BotoCoreError) as e:
            raise QueryError("describe_snapshots failed for %s: %s" % (",".join(snapshot_ids), e)) from e
        return resp.get("Snapshots", [])

    def deregister_image(self, image_id: str) -> bool:
        """Deregister an image and delete its associated snapshots.

        Returns:
            The success flag reported by EC2.
        """
        logger.debug("Deregistering image (and deleting snapshots) with image ID: %s", image_id)
        try:
            resp = self.client.deregister_image(ImageId=image_id, DeleteAssociatedSnapshots=True)
        except (ClientError, BotoCoreError) as e:
            raise QueryError("Error deregistering image: %s" % e) from e
        for result in resp.get("DeleteSnapshotResults", []):
            logger.debug("  snapshot %s: %s", result.get("SnapshotId"), result.get("ReturnCode"))
        return bool(resp["Return"])


def build_catalog(config: DriverImagesConfig) -> Ec2ImageCatalog:
    """Create an :class:`Ec2ImageCatalog` from user configuration.

    Region and profile fall back to the usual boto3 resolution chain
    (environment, shared config files) when the config leaves them unset.
    """
    try:
        session = boto3.Session(
            profile_name=config.aws_profile,
            region_name=config.aws_region,
        )
        client_config = Config(
            connect_timeout=config.connect_timeout,
            read_timeout=config.read_timeout,
            retries={"max_attempts": config.max_attempts, "mode": "standard"},
        )
        client = session.client("ec2", config=client_config)
    except BotoCoreError as e:
        raise QueryError("Unable to create EC2 client: %s" % e) from e
    return Ec2ImageCatalog(client, owners=config.owners)
