"""SQLAlchemy 2.0 ORM model for the subscriber list.

Single table:
  - subscriber_data_table: subscriber_id, subscriber_name, subscriber_email
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class SubscriberRow(Base):
    """subscriber_data_table — one contact entry."""

    __tablename__ = "subscriber_data_table"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(
        "subscriber_id", Integer, primary_key=True, autoincrement=True
    )
    name: Mapped[str] = mapped_column("subscriber_name", Text, nullable=False)
    email: Mapped[str] = mapped_column("subscriber_email", Text, nullable=False)

    def __repr__(self) -> str:
        return f"<SubscriberRow id={self.id} email={self.email!r}>"
