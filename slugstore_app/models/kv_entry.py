from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from slugstore_app.database.connection import Base


class KVEntry(Base):
    """
    One key-value pair of a namespace.
    
    (namespace, key) is the primary key, so a duplicate INSERT fails
    with IntegrityError. SQLKVStore relies on that for insert-if-absent.
    """
    __tablename__ = "kv_entries"

    namespace = Column(String(64), primary_key=True)
    key = Column(String(512), primary_key=True)
    value = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
