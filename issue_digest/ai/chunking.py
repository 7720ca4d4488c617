"""Split issue collections into batches that fit one LLM request."""

from collections.abc import Sequence

from ..github_client.models import IssueRecord


def plan_chunks(
    records: Sequence[IssueRecord], max_per_chunk: int
) -> list[list[IssueRecord]]:
    """Partition records into contiguous batches.

    Args:
        records: Issues to split, order is preserved
        max_per_chunk: Maximum issues per batch

    Returns:
        Batches of ``max_per_chunk`` issues, the last one possibly smaller.
        Empty input gives an empty list.
    """
    if max_per_chunk < 1:
        raise ValueError(f"max_per_chunk must be at least 1, got {max_per_chunk}")

    return [
        list(records[start : start + max_per_chunk])
        for start in range(0, len(records), max_per_chunk)
    ]
