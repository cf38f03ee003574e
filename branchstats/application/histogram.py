"""Branch name histogram over successfully fetched repositories."""
from collections import Counter
from typing import Dict, Iterable

from branchstats.domain.models import RepositoryResult


def count_branches(results: Iterable[RepositoryResult]) -> Dict[str, int]:
    """Count how often each branch name appears across the given results.

    Every listed name counts once per occurrence. Failed results are skipped,
    although the collector never passes them in.
    """
    counts: Counter = Counter()
    for result in results:
        if not result.succeeded:
            continue
        counts.update(result.branches)
    return dict(counts)


def compute_percentages(histogram: Dict[str, int], total: int) -> Dict[str, float]:
    """Express each count as a percentage of ``total`` repositories.

    Returns an empty mapping when ``total`` is 0, since there is nothing to
    report against.
    """
    if total <= 0:
        return {}
    return {name: count / total * 100 for name, count in histogram.items()}
