# substrate_indexer/database/base.py

from datetime import datetime, timezone
from typing import Any, Dict, Type

from sqlalchemy import Column, DateTime, String, text
from sqlalchemy.orm import declarative_base
import msgspec


IndexerBase = declarative_base()


class TimestampMixin:
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text('CURRENT_TIMESTAMP')
    )


class DBBaseModel(IndexerBase, TimestampMixin):
    __abstract__ = True

    id = Column(String(255), primary_key=True)

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)

            if isinstance(value, datetime):
                result[column.name] = value.isoformat()
            else:
                result[column.name] = value

        return result

    @classmethod
    def from_record(cls, record: msgspec.Struct, **overrides):
        data = msgspec.structs.asdict(record)
        data.update(overrides)
        valid_columns = {col.name for col in cls.__table__.columns}
        filtered_data = {k: v for k, v in data.items() if k in valid_columns}

        return cls(**filtered_data)

    def to_record(self, record_type: Type[msgspec.Struct]) -> msgspec.Struct:
        field_names = {field.name for field in msgspec.structs.fields(record_type)}
        data = {k: v for k, v in self.to_dict().items() if k in field_names}
        return msgspec.convert(data, type=record_type)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"
