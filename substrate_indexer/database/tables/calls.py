# substrate_indexer/database/tables/calls.py

from sqlalchemy import Column, String, Integer, BigInteger, Boolean, Text, Float, JSON

from ..base import DBBaseModel


class DBExtrinsic(DBBaseModel):
    __tablename__ = 'extrinsics'

    block_id = Column(String(32), nullable=False, index=True)
    tx_hash = Column(String(66), nullable=False, index=True)
    module = Column(String(128), nullable=False, index=True)
    call = Column(String(128), nullable=False, index=True)
    block_height = Column(BigInteger, nullable=False, index=True)
    success = Column(Boolean, nullable=False)
    is_signed = Column(Boolean, nullable=False)
    extrinsic_index = Column(Integer, nullable=False)
    timestamp = Column(BigInteger, nullable=False, index=True)
    description_id = Column(String(255), nullable=False)
    signer = Column(String(66), nullable=True, index=True)
    signature = Column(Text, nullable=True)
    nonce = Column(BigInteger, nullable=True)
    args_name = Column(JSON, nullable=False, default=list)
    args_value = Column(JSON, nullable=False, default=list)
    nb_events = Column(Integer, nullable=False, default=0)
    fees = Column(String(78), nullable=True)
    fees_rounded = Column(Float, nullable=True)

    def __repr__(self) -> str:
        return f"<Extrinsic(id={self.id}, {self.module}.{self.call})>"


class DBEvent(DBBaseModel):
    __tablename__ = 'events'

    block_id = Column(String(32), nullable=False, index=True)
    module = Column(String(128), nullable=False, index=True)
    event = Column(String(128), nullable=False, index=True)
    block_height = Column(BigInteger, nullable=False, index=True)
    event_index = Column(Integer, nullable=False)
    call = Column(String(128), nullable=False)
    description_id = Column(String(255), nullable=False)
    args_name = Column(JSON, nullable=False, default=list)
    args_value = Column(JSON, nullable=False, default=list)
    extrinsic_id = Column(String(64), nullable=True, index=True)

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, {self.module}.{self.event})>"


class DBExtrinsicDescription(DBBaseModel):
    __tablename__ = 'extrinsic_descriptions'

    module = Column(String(128), nullable=False)
    call = Column(String(128), nullable=False)
    description = Column(Text, nullable=False, default="")


class DBEventDescription(DBBaseModel):
    __tablename__ = 'event_descriptions'

    module = Column(String(128), nullable=False)
    event = Column(String(128), nullable=False)
    description = Column(Text, nullable=False, default="")
