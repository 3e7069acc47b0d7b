# substrate_indexer/types/__init__.py

# Raw chain input
from .chain import (
    ArgMeta,
    CallMeta,
    EventMeta,
    RawExtrinsic,
    ApplyExtrinsic,
    Finalization,
    Initialization,
    Phase,
    RawEvent,
    RawEventRecord,
    RawDigestItem,
    RawHeader,
    RawBlock,
)

# Header extension payloads
from .extension import (
    KateCommitment,
    AppLookupEntry,
    DataLookup,
    ExtensionBody,
    HeaderExtensionV1,
    HeaderExtensionV2,
    HeaderExtensionVariant,
    ExtensionEnvelope,
)

# Normalized records
from .records import (
    EntityKind,
    entity_id,
    description_id,
    BlockRecord,
    ExtrinsicRecord,
    EventRecord,
    LogRecord,
    SessionRecord,
    SpecVersionRecord,
    ExtrinsicDescriptionRecord,
    EventDescriptionRecord,
    HeaderExtensionRecord,
    CommitmentRecord,
    AppLookupRecord,
    RECORD_TYPES,
)

# Configuration
from .config import (
    DatabaseConfig,
    FeeConfig,
    LoggingConfig,
    DEFAULT_FEE_MODULES,
)
