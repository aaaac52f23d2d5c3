from sqlalchemy import BigInteger, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from bundle_registry.db.base import Base


class Bundle(Base):
    __tablename__ = "bundles"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    owner_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    header_chat_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    header_msg_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    created_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    finalized_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    files_count: Mapped[int | None] = mapped_column(Integer, nullable=True, default=0, server_default="0")


class BundleFile(Base):
    """A file entry; ``code`` references a bundle id without a foreign key."""

    __tablename__ = "files"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    code: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    channel_msg_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    header_chat_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    caption: Mapped[str | None] = mapped_column(Text, nullable=True)
    added_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
