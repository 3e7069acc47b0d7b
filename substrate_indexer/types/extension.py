# substrate_indexer/types/extension.py
"""
Data-availability header extension payloads.

The node serializes the extension as an externally tagged enum, e.g.
``{"v2": {"appLookup": {...}, "commitment": {...}}}``. Only one version key is
populated per header. ``ExtensionEnvelope`` mirrors that wire shape and
``ExtensionEnvelope.variant()`` turns it into the internally tagged
``HeaderExtensionV1 | HeaderExtensionV2`` union used by the decoder.
"""

from typing import Any, Optional, Union

from msgspec import Struct


class KateCommitment(Struct, rename="camel"):
    rows: int
    cols: int
    commitment: Any  # byte list or hex text, stored as text
    data_root: Optional[str] = None


class AppLookupEntry(Struct, rename="camel"):
    app_id: int
    start: int


class DataLookup(Struct, rename="camel"):
    size: int
    index: list[AppLookupEntry] = []


class ExtensionBody(Struct, rename="camel"):
    commitment: KateCommitment
    app_lookup: DataLookup


class HeaderExtensionV1(ExtensionBody, tag="v1"):
    pass


class HeaderExtensionV2(ExtensionBody, tag="v2"):
    pass


HeaderExtensionVariant = Union[HeaderExtensionV1, HeaderExtensionV2]


class ExtensionEnvelope(Struct):
    v1: Optional[ExtensionBody] = None
    v2: Optional[ExtensionBody] = None

    def variant(self) -> Optional[HeaderExtensionVariant]:
        # v2 wins when a node reports both
        if self.v2 is not None:
            return HeaderExtensionV2(commitment=self.v2.commitment, app_lookup=self.v2.app_lookup)
        if self.v1 is not None:
            return HeaderExtensionV1(commitment=self.v1.commitment, app_lookup=self.v1.app_lookup)
        return None
