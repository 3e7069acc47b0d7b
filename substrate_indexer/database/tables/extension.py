# substrate_indexer/database/tables/extension.py

from sqlalchemy import Column, String, Integer, Text

from ..base import DBBaseModel


class DBHeaderExtension(DBBaseModel):
    __tablename__ = 'header_extensions'

    block_id = Column(String(32), nullable=False, unique=True, index=True)
    version = Column(String(8), nullable=False)


class DBCommitment(DBBaseModel):
    __tablename__ = 'commitments'

    block_id = Column(String(32), nullable=False, unique=True, index=True)
    header_extension_id = Column(String(32), nullable=False, index=True)
    rows = Column(Integer, nullable=False)
    cols = Column(Integer, nullable=False)
    data_root = Column(String(66), nullable=True)
    commitment = Column(Text, nullable=False, default="")


class DBAppLookup(DBBaseModel):
    __tablename__ = 'app_lookups'

    block_id = Column(String(32), nullable=False, unique=True, index=True)
    header_extension_id = Column(String(32), nullable=False, index=True)
    size = Column(Integer, nullable=False)
    index = Column(Text, nullable=False, default="[]")
