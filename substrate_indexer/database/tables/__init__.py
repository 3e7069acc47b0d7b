# substrate_indexer/database/tables/__init__.py

from ...types import EntityKind

from .blocks import DBBlock, DBLog, DBSession, DBSpecVersion
from .calls import DBExtrinsic, DBEvent, DBExtrinsicDescription, DBEventDescription
from .extension import DBHeaderExtension, DBCommitment, DBAppLookup

TABLES = {
    EntityKind.BLOCK: DBBlock,
    EntityKind.EXTRINSIC: DBExtrinsic,
    EntityKind.EVENT: DBEvent,
    EntityKind.LOG: DBLog,
    EntityKind.SESSION: DBSession,
    EntityKind.SPEC_VERSION: DBSpecVersion,
    EntityKind.EXTRINSIC_DESCRIPTION: DBExtrinsicDescription,
    EntityKind.EVENT_DESCRIPTION: DBEventDescription,
    EntityKind.HEADER_EXTENSION: DBHeaderExtension,
    EntityKind.COMMITMENT: DBCommitment,
    EntityKind.APP_LOOKUP: DBAppLookup,
}

__all__ = [
    'TABLES',
    'DBBlock', 'DBLog', 'DBSession', 'DBSpecVersion',
    'DBExtrinsic', 'DBEvent', 'DBExtrinsicDescription', 'DBEventDescription',
    'DBHeaderExtension', 'DBCommitment', 'DBAppLookup',
]
