"""SQLite cache of open issues, keyed by repository."""

import json
import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, delete, func, insert, select
from sqlalchemy.orm import Session, sessionmaker

from ..github_client.models import IssueLabel, IssueRecord, ScanInfo
from .schema import Base, CachedIssue, ScanRecord

logger = logging.getLogger(__name__)

# Rows per INSERT statement; keeps bound parameters under SQLite's limit.
INSERT_BATCH_SIZE = 500


class IssueCache:
    """Stores the open issues of each scanned repository.

    Saving a repository replaces its whole cached set in one transaction, so
    readers see either the previous set or the new one.
    """

    def __init__(self, db_path: str | Path = "issues.db"):
        """Initialize the cache and create tables if needed.

        Args:
            db_path: SQLite database file, or ":memory:"
        """
        self.db_path = str(db_path)
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self.engine = create_engine(f"sqlite:///{self.db_path}")
        Base.metadata.create_all(self.engine)
        self._session_factory = sessionmaker(bind=self.engine)

    @contextmanager
    def get_session(self) -> Iterator[Session]:
        """Session that commits on success and rolls back on error."""
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def _to_row(self, record: IssueRecord, repo: str, position: int) -> dict[str, Any]:
        return {
            "repo": repo,
            "id": record.id,
            "position": position,
            "number": record.number,
            "title": record.title,
            "body": record.body,
            "html_url": record.html_url,
            "state": record.state,
            "created_at": record.created_at,
            "updated_at": record.updated_at,
            "author_login": record.author_login,
            "labels": record.labels_json(),
            "comments": record.comments,
            "assignees": record.assignees_json(),
        }

    def _to_record(self, row: CachedIssue) -> IssueRecord:
        return IssueRecord(
            id=row.id,
            number=row.number,
            repo=row.repo,
            title=row.title,
            body=row.body,
            html_url=row.html_url,
            state=row.state,
            created_at=row.created_at,
            updated_at=row.updated_at,
            author_login=row.author_login,
            labels=[IssueLabel(**label) for label in json.loads(row.labels or "[]")],
            comments=row.comments,
            assignees=json.loads(row.assignees or "[]"),
        )

    def save_issues(self, repo: str, records: Sequence[IssueRecord]) -> int:
        """Replace the cached issues of a repository.

        All existing rows for ``repo`` are deleted, then ``records`` are
        inserted in batches and the scan bookkeeping is updated, all in a
        single transaction.

        Args:
            repo: Repository as owner/name
            records: Issues from the latest scan (may be empty)

        Returns:
            Number of issues stored
        """
        rows = [
            self._to_row(record, repo, position)
            for position, record in enumerate(records)
        ]

        with self.get_session() as session:
            session.execute(delete(CachedIssue).where(CachedIssue.repo == repo))

            for start in range(0, len(rows), INSERT_BATCH_SIZE):
                session.execute(
                    insert(CachedIssue).values(rows[start : start + INSERT_BATCH_SIZE])
                )
                if len(rows) > 1000 and (start + INSERT_BATCH_SIZE) % 2000 == 0:
                    logger.info(
                        "Inserted %d/%d issues for %s",
                        min(start + INSERT_BATCH_SIZE, len(rows)),
                        len(rows),
                        repo,
                    )

            session.merge(
                ScanRecord(
                    repo=repo,
                    issue_count=len(rows),
                    scanned_at=datetime.now(timezone.utc).replace(tzinfo=None),
                )
            )

        logger.info("Cached %d issues for %s", len(rows), repo)
        return len(rows)

    def get_issues(self, repo: str) -> list[IssueRecord]:
        """Return the cached issues of a repository in saved order."""
        with self.get_session() as session:
            rows = session.scalars(
                select(CachedIssue)
                .where(CachedIssue.repo == repo)
                .order_by(CachedIssue.position)
            ).all()
            return [self._to_record(row) for row in rows]

    def has_issues(self, repo: str) -> bool:
        """Check whether at least one issue is cached for a repository.

        A scan that found zero open issues also returns False; use
        ``get_scan_info`` to tell that apart from a repository never scanned.
        """
        with self.get_session() as session:
            first = session.scalars(
                select(CachedIssue.id).where(CachedIssue.repo == repo).limit(1)
            ).first()
            return first is not None

    def get_issue_count(self, repo: str) -> int:
        """Return the number of cached issues for a repository."""
        with self.get_session() as session:
            return session.scalar(
                select(func.count())
                .select_from(CachedIssue)
                .where(CachedIssue.repo == repo)
            ) or 0

    def clear_issues(self, repo: str) -> None:
        """Delete the cached issues and scan record of a repository."""
        with self.get_session() as session:
            session.execute(delete(CachedIssue).where(CachedIssue.repo == repo))
            session.execute(delete(ScanRecord).where(ScanRecord.repo == repo))

    def get_scan_info(self, repo: str) -> ScanInfo | None:
        """Return when a repository was last scanned, or None if never."""
        with self.get_session() as session:
            scan = session.get(ScanRecord, repo)
            if scan is None:
                return None
            return ScanInfo(
                repo=scan.repo,
                issue_count=scan.issue_count,
                scanned_at=scan.scanned_at,
            )

    def list_repositories(self) -> list[ScanInfo]:
        """Return scan records for every cached repository."""
        with self.get_session() as session:
            scans = session.scalars(select(ScanRecord).order_by(ScanRecord.repo))
            return [
                ScanInfo(
                    repo=scan.repo,
                    issue_count=scan.issue_count,
                    scanned_at=scan.scanned_at,
                )
                for scan in scans
            ]
