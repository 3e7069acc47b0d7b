# substrate_indexer/decode/extension_decoder.py

from typing import Optional, Tuple, Union

import msgspec

from ..core.errors import ExtensionDecodeError
from ..core.logging import LoggingMixin
from ..database.interfaces import EntityStore
from ..types import (
    AppLookupRecord,
    CommitmentRecord,
    EntityKind,
    ExtensionEnvelope,
    HeaderExtensionRecord,
    HeaderExtensionV1,
    HeaderExtensionVariant,
)
from ..utils.scale import bytes_to_hex


ExtensionRecords = Tuple[HeaderExtensionRecord, CommitmentRecord, AppLookupRecord]


def parse_extension(raw: Union[str, bytes, dict]) -> ExtensionEnvelope:
    if isinstance(raw, (str, bytes)):
        return msgspec.json.decode(raw, type=ExtensionEnvelope)
    return msgspec.convert(raw, type=ExtensionEnvelope)


class ExtensionDecoder(LoggingMixin):
    """Decodes the versioned data-availability extension of a header"""

    def __init__(self, store: EntityStore):
        self.store = store

    def decode(self, block_number: int, raw: Union[str, bytes, dict, None]) -> Optional[ExtensionRecords]:
        if not raw:
            return None

        try:
            variant = parse_extension(raw).variant()
        except (msgspec.ValidationError, msgspec.DecodeError) as e:
            raise ExtensionDecodeError(f"malformed header extension: {e}",
                                       block_number=block_number, entity="extension") from e

        if variant is None:
            raise ExtensionDecodeError("header extension carries no known version",
                                       block_number=block_number, entity="extension")

        return self.build_records(block_number, variant)

    def build_records(self, block_number: int, variant: HeaderExtensionVariant) -> ExtensionRecords:
        block_id = str(block_number)
        version = "v1" if isinstance(variant, HeaderExtensionV1) else "v2"

        extension = HeaderExtensionRecord(id=block_id, block_id=block_id, version=version)

        commitment = CommitmentRecord(
            id=block_id,
            block_id=block_id,
            header_extension_id=extension.id,
            rows=variant.commitment.rows,
            cols=variant.commitment.cols,
            data_root=variant.commitment.data_root,
            commitment=bytes_to_hex(variant.commitment.commitment),
        )

        app_lookup = AppLookupRecord(
            id=block_id,
            block_id=block_id,
            header_extension_id=extension.id,
            size=variant.app_lookup.size,
            index=msgspec.json.encode(variant.app_lookup.index).decode(),
        )

        return extension, commitment, app_lookup

    async def handle(self, block_number: int, raw: Union[str, bytes, dict, None]) -> Optional[ExtensionRecords]:
        """Decode and persist the extension, commitment and app lookup in that order"""
        records = self.decode(block_number, raw)
        if records is None:
            return None

        extension, commitment, app_lookup = records
        await self.store.create(EntityKind.HEADER_EXTENSION, extension)
        await self.store.create(EntityKind.COMMITMENT, commitment)
        await self.store.create(EntityKind.APP_LOOKUP, app_lookup)

        self.log_debug("Header extension recorded", block_number=block_number, version=extension.version)
        return records
