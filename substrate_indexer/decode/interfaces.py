"""
Interfaces for the collaborators the decode pipeline depends on.

Node access, fee computation and balance bookkeeping live outside this
package. Callers supply implementations of these interfaces when wiring the
pipeline (see ``substrate_indexer.create_indexer``).
"""
from abc import ABC, abstractmethod
from typing import AsyncIterator, List, Optional

from ..types import RawBlock, RawEventRecord


class ChainStateClient(ABC):
    """Read access to runtime storage of the session pallet."""

    @abstractmethod
    async def current_session_index(self, block_hash: str) -> int:
        """
        Session index active at the given block.
        """
        pass

    @abstractmethod
    async def session_validators(self, block_hash: str) -> List[str]:
        """
        Validator set of the session active at the given block, in authority index order.
        """
        pass


class FeeOracle(ABC):

    @abstractmethod
    async def get_fee(self, call_data: str, block_hash: str) -> Optional[str]:
        """
        Partial fee of an encoded extrinsic, as a base-10 string in the smallest unit.
        """
        pass


class AccountUpdater(ABC):

    @abstractmethod
    async def refresh_accounts(self, account_ids: List[str]) -> None:
        """
        Reload balances of the given accounts.
        """
        pass

    @abstractmethod
    async def record_transfer(self, event: RawEventRecord, block_id: str, block_hash: str,
                              timestamp: int, extrinsic_id: str) -> None:
        """
        Persist a transfer derived from a balances.Transfer event.
        """
        pass


class BlockSource(ABC):

    @abstractmethod
    def blocks(self, start: int, end: int) -> AsyncIterator[RawBlock]:
        """
        Yield raw blocks from start to end (inclusive) in increasing order.
        """
        pass
