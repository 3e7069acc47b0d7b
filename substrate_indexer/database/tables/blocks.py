# substrate_indexer/database/tables/blocks.py

from sqlalchemy import Column, String, Integer, BigInteger, Boolean, Text, JSON

from ..base import DBBaseModel


class DBBlock(DBBaseModel):
    __tablename__ = 'blocks'

    number = Column(BigInteger, nullable=False, unique=True, index=True)
    hash = Column(String(66), nullable=False, index=True)
    timestamp = Column(BigInteger, nullable=False, index=True)
    parent_hash = Column(String(66), nullable=False)
    state_root = Column(String(66), nullable=False)
    extrinsics_root = Column(String(66), nullable=False)
    runtime_version = Column(Integer, nullable=False, index=True)
    nb_extrinsics = Column(Integer, nullable=False, default=0)
    finalized = Column(Boolean, nullable=False, default=False)
    session_id = Column(BigInteger, nullable=True, index=True)
    author = Column(String(66), nullable=True, index=True)

    def __repr__(self) -> str:
        return f"<Block(number={self.number}, hash={self.hash[:10]}...)>"


class DBLog(DBBaseModel):
    __tablename__ = 'logs'

    block_id = Column(String(32), nullable=False, index=True)
    type = Column(String(64), nullable=False, index=True)
    engine = Column(String(32), nullable=True)
    data = Column(Text, nullable=False, default="")


class DBSession(DBBaseModel):
    __tablename__ = 'sessions'

    validators = Column(JSON, nullable=False, default=list)


class DBSpecVersion(DBBaseModel):
    __tablename__ = 'spec_versions'

    block_height = Column(BigInteger, nullable=False, index=True)
