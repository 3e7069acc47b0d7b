# substrate_indexer/decode/session_resolver.py

from typing import List, Optional, Tuple

from ..core.logging import LoggingMixin
from ..database.interfaces import EntityStore
from ..types import EntityKind, RawDigestItem, SessionRecord
from ..utils.scale import decode_engine_id, decode_u32, decode_u64, hex_to_bytes
from .interfaces import ChainStateClient
from .log_decoder import normalize_kind


AURA_ENGINE = "aura"
BABE_ENGINE = "BABE"


def authority_index(engine: str, payload: bytes) -> Optional[int]:
    """
    Authority position encoded by a pre-runtime digest, before reduction by the set size.

    aura: the payload is the u64 slot number.
    BABE: a variant byte followed by the u32 authority index.
    """
    if engine == AURA_ENGINE and len(payload) >= 8:
        return decode_u64(payload)
    if engine == BABE_ENGINE and len(payload) >= 5:
        return decode_u32(payload, offset=1)
    return None


def extract_author(digest: List[RawDigestItem], validators: List[str]) -> Optional[str]:
    if not validators:
        return None

    for item in digest:
        # seals carry the block signature, only pre-runtime entries encode the slot
        if normalize_kind(item.type) != "PreRuntime":
            continue
        if not isinstance(item.value, (list, tuple)) or len(item.value) != 2:
            continue

        engine = decode_engine_id(item.value[0])
        try:
            payload = hex_to_bytes(item.value[1])
        except (ValueError, TypeError):
            continue

        index = authority_index(engine, payload)
        if index is not None:
            return validators[index % len(validators)]

    return None


class SessionResolver(LoggingMixin):
    """Resolves the validator session of a block and the validator that authored it"""

    def __init__(self, store: EntityStore, chain: ChainStateClient):
        self.store = store
        self.chain = chain

    async def get_session(self, block_hash: str) -> SessionRecord:
        session_index = await self.chain.current_session_index(block_hash)
        session_id = str(session_index)

        session = await self.store.get(EntityKind.SESSION, session_id)
        if session is None:
            validators = await self.chain.session_validators(block_hash)
            session = SessionRecord(id=session_id, validators=[str(v) for v in validators])
            await self.store.create(EntityKind.SESSION, session)
            self.log_info("New session recorded",
                          session_id=session_id, validator_count=len(session.validators))
        return session

    async def resolve(self, block_number: int, block_hash: str,
                      digest: List[RawDigestItem]) -> Tuple[Optional[int], Optional[str]]:
        """
        Returns (session id, author). Failures are logged and give (None, None):
        a block without session data is still indexed.
        """
        try:
            session = await self.get_session(block_hash)
            author = extract_author(digest, session.validators)
            return int(session.id), author
        except Exception as e:
            self.log_error("Update session error",
                           block_number=block_number,
                           error=str(e),
                           exception_type=type(e).__name__)
            return None, None
