"""
Records Service - Record SQLAlchemy Model
==========================================

What:  ORM mapping of the `records` table.
Who:   Used by RecordService to build its statements.

Table layout:
    id    BIGINT identity primary key (INTEGER on SQLite, where only an
          INTEGER PRIMARY KEY aliases the auto-incrementing rowid)
    name  TEXT NOT NULL
    type  TEXT NOT NULL

No indexes or other schema objects beyond the primary key.
"""

from sqlalchemy import BigInteger, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from records_service.database import Base


class Record(Base):
    """
    A single persisted record.

    Lifecycle:
        1. Inserted by Create; storage assigns the id
        2. Read by List and Get
        3. Fully overwritten by Replace (name and type; the id never changes)
        4. Removed by Delete
    """

    __tablename__ = "records"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Record(id={self.id}, name='{self.name}', type='{self.type}')>"
