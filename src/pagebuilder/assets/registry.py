"""Asset Registry - session-held binaries and their liveness in the forest."""

import asyncio
import mimetypes
import os
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import BinaryIO, Union

from returns.result import Failure, Result, Success

from ..catalog import ComponentType
from ..core import Settings, get_logger, get_settings, hash_bytes
from ..core.id import new_asset_id
from ..editor.models import Node
from ..editor.store import TreeStore
from ..monitoring import MetricsCollector, metrics_collector
from .models import IngestionError, LocalAsset
from .references import is_local_reference

logger = get_logger(__name__)

Payload = Union[bytes, bytearray, memoryview, str, os.PathLike, BinaryIO]


class AssetRegistry:
    """
    Tracks locally-held assets for one editing session.

    Assets are referenced, never owned, by image nodes through ``props.src``.
    Deleting a node does not drop its asset; ``sweep_unused`` does.
    """

    def __init__(
        self,
        store: TreeStore,
        settings: Settings | None = None,
        id_factory: Callable[[], str] = new_asset_id,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.store = store
        self.settings = settings or get_settings()
        self.metrics = metrics or metrics_collector
        self._new_id = id_factory
        self._assets: list[LocalAsset] = []

    @property
    def assets(self) -> list[LocalAsset]:
        return list(self._assets)

    def __len__(self) -> int:
        return len(self._assets)

    def lookup(self, asset_id: str) -> LocalAsset | None:
        for asset in self._assets:
            if asset.id == asset_id:
                return asset
        return None

    # ========================================================================
    # Liveness
    # ========================================================================

    def has_local_references(self) -> bool:
        """True if any image node anywhere points at a local asset."""
        return any(True for _ in self._local_sources())

    def used_ids(self) -> set[str]:
        """Distinct local references held by image nodes."""
        return set(self._local_sources())

    def used_assets(self) -> list[LocalAsset]:
        """Registered assets that some image node references."""
        used = self.used_ids()
        return [asset for asset in self._assets if asset.id in used]

    def sweep_unused(self) -> list[LocalAsset]:
        """
        Discard every asset no image node references. Irreversible.

        Returns:
            The discarded assets
        """
        used = self.used_ids()
        kept = [asset for asset in self._assets if asset.id in used]
        discarded = [asset for asset in self._assets if asset.id not in used]
        self._assets = kept

        if discarded:
            logger.info("assets_swept", discarded=len(discarded), kept=len(kept))
            self.metrics.record_sweep(len(discarded))
        return discarded

    def clear(self) -> None:
        self._assets = []

    def _local_sources(self):
        for node in self.store.iter_nodes():
            if node.type == ComponentType.IMAGE:
                src = node.props.get("src")
                if is_local_reference(src):
                    yield src

    # ========================================================================
    # Ingestion
    # ========================================================================

    async def ingest(
        self,
        payload: Payload,
        filename: str,
        mime_type: str | None = None,
    ) -> LocalAsset:
        """
        Read a payload and register it as a new asset.

        ``payload`` may be raw bytes, a filesystem path (``str`` or PathLike),
        or a binary file object. Reading runs in a worker thread; the registry
        only changes once the read has completed and the payload is accepted.

        Raises:
            IngestionError: If the payload is unreadable, empty, too large or
                not an image (when images-only is enforced)
        """
        mime_type = mime_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"

        try:
            data = await asyncio.to_thread(_read_payload, payload)
        except IngestionError as e:
            self._ingest_failed(filename, str(e))
            raise
        except (OSError, ValueError) as e:
            self._ingest_failed(filename, str(e))
            raise IngestionError(f"Could not read '{filename}': {e}", filename) from e

        problem = self._check(data, mime_type)
        if problem:
            self._ingest_failed(filename, problem)
            raise IngestionError(problem, filename)

        asset = LocalAsset(
            id=self._fresh_id(),
            filename=filename,
            mime_type=mime_type,
            payload=data,
            checksum=hash_bytes(data),
        )
        self._assets.append(asset)

        logger.info("asset_ingested", asset_id=asset.id, filename=filename, size=asset.size)
        self.metrics.record_ingest("success", asset.size)
        return asset

    async def try_ingest(
        self,
        payload: Payload,
        filename: str,
        mime_type: str | None = None,
    ) -> Result[LocalAsset, IngestionError]:
        """Result-pattern version of :meth:`ingest`."""
        try:
            return Success(await self.ingest(payload, filename, mime_type))
        except IngestionError as e:
            return Failure(e)

    def _check(self, data: bytes, mime_type: str) -> str | None:
        if not data:
            return "Asset payload is empty"
        if len(data) > self.settings.max_asset_bytes:
            return f"Asset size {len(data)} bytes exceeds maximum {self.settings.max_asset_bytes} bytes"
        if self.settings.image_assets_only and not mime_type.startswith("image/"):
            return f"Unsupported asset type '{mime_type}'"
        return None

    def _fresh_id(self) -> str:
        asset_id = self._new_id()
        while self.lookup(asset_id) is not None:
            asset_id = self._new_id()
        return asset_id

    def _ingest_failed(self, filename: str, reason: str) -> None:
        logger.warning("asset_ingest_failed", filename=filename, reason=reason)
        self.metrics.record_ingest("error")

    # ========================================================================
    # Export
    # ========================================================================

    def inline_forest(self, forest: Iterable[Node]) -> list[Node]:
        """
        Copy of ``forest`` with every local image ``src`` replaced by the
        asset's ``data:`` URL. References to unregistered ids are left as-is.
        """
        copies = [node.model_copy(deep=True) for node in forest]
        for root in copies:
            for node in root.walk():
                if node.type != ComponentType.IMAGE:
                    continue
                src = node.props.get("src")
                if not is_local_reference(src):
                    continue
                asset = self.lookup(src)
                if asset is None:
                    logger.warning("asset_missing", node_id=node.id, src=src)
                    continue
                node.props = {**node.props, "src": asset.data_url}
        return copies


def _read_payload(payload: Payload) -> bytes:
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return bytes(payload)
    if isinstance(payload, (str, os.PathLike)):
        return Path(payload).read_bytes()
    read = getattr(payload, "read", None)
    if read is None:
        raise IngestionError(f"Unsupported payload type {type(payload).__name__}")
    data = read()
    if not isinstance(data, (bytes, bytearray)):
        raise IngestionError("File object did not return bytes")
    return bytes(data)
