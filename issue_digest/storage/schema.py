"""SQLAlchemy tables for the issue cache."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class CachedIssue(Base):
    """One open issue of one repository.

    Rows are keyed by (repo, id) so the same upstream issue may live in two
    repository caches. ``position`` keeps the order of the last save.
    """

    __tablename__ = "issues"

    repo: Mapped[str] = mapped_column(String, primary_key=True)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    body: Mapped[str | None] = mapped_column(Text)
    html_url: Mapped[str] = mapped_column(Text, nullable=False)
    state: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[str] = mapped_column(String, nullable=False)
    updated_at: Mapped[str] = mapped_column(String, nullable=False)
    author_login: Mapped[str | None] = mapped_column(String)
    labels: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    comments: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    assignees: Mapped[str] = mapped_column(Text, nullable=False, default="[]")


class ScanRecord(Base):
    """Last completed scan per repository."""

    __tablename__ = "scans"

    repo: Mapped[str] = mapped_column(String, primary_key=True)
    issue_count: Mapped[int] = mapped_column(Integer, nullable=False)
    scanned_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
