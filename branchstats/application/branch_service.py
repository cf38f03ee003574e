"""Branch statistics service orchestrating the concurrent branch crawl."""
import asyncio
import logging
import time
from typing import List, Optional, Sequence, Tuple
from branchstats.application.histogram import count_branches
from branchstats.domain.errors import GitHubError
from branchstats.domain.github_interface import IGitHubClient
from branchstats.domain.models import BranchReport, RepositoryDescriptor, RepositoryResult


logger = logging.getLogger(__name__)


class BranchStatsService:
    """Application service for collecting branch statistics of an account.

    Fans out one task per repository, each reporting exactly one
    RepositoryResult on a shared queue, and fans the results back in with a
    fixed-count receive loop. The queue is the only state the tasks share.
    """

    def __init__(
        self,
        github_client: IGitHubClient,
        max_concurrency: int = 0,
        sort_results: bool = False
    ):
        """Initialize branch statistics service.

        Args:
            github_client: GitHub API client implementation
            max_concurrency: Cap on simultaneous branch requests, 0 for no cap
            sort_results: Order successful repositories by name instead of arrival
        """
        self._github_client = github_client
        self._max_concurrency = max_concurrency
        self._sort_results = sort_results

    async def fetch_repository(
        self,
        repository: RepositoryDescriptor,
        results: "asyncio.Queue[RepositoryResult]",
        semaphore: Optional[asyncio.Semaphore] = None
    ) -> None:
        """Fetch one repository's branches and put exactly one result on the queue."""
        try:
            if semaphore is None:
                branches = await self._github_client.list_branches(repository.branches_url)
            else:
                async with semaphore:
                    branches = await self._github_client.list_branches(repository.branches_url)
            result = RepositoryResult.success(repository.name, [b.name for b in branches])
        except GitHubError as e:
            result = RepositoryResult.failure(repository.name, e.message)
        except Exception as e:
            logger.exception(f"Unexpected error fetching branches of {repository.name}")
            result = RepositoryResult.failure(repository.name, str(e) or type(e).__name__)

        await results.put(result)

    def fan_out(
        self,
        repositories: Sequence[RepositoryDescriptor],
        results: "asyncio.Queue[RepositoryResult]"
    ) -> List["asyncio.Task[None]"]:
        """Launch one branch fetch task per repository.

        Must be called from a running event loop.
        """
        semaphore = asyncio.Semaphore(self._max_concurrency) if self._max_concurrency > 0 else None
        return [
            asyncio.create_task(self.fetch_repository(repository, results, semaphore))
            for repository in repositories
        ]

    @staticmethod
    async def collect(
        results: "asyncio.Queue[RepositoryResult]",
        expected: int
    ) -> Tuple[List[RepositoryResult], List[RepositoryResult]]:
        """Receive exactly ``expected`` results, in arrival order.

        Returns:
            Successful results and failed results
        """
        successes: List[RepositoryResult] = []
        failures: List[RepositoryResult] = []

        for _ in range(expected):
            result = await results.get()
            if result.succeeded:
                successes.append(result)
            else:
                logger.error(f"Error in repository [{result.name}]: {result.error}")
                failures.append(result)

        return successes, failures

    async def collect_branch_stats(self, account: str) -> BranchReport:
        """Crawl every repository of an account and aggregate its branch names.

        Errors while listing the repositories propagate; errors for single
        repositories are logged and excluded from the statistics.

        Args:
            account: GitHub user name

        Returns:
            BranchReport over the successfully fetched repositories
        """
        start_time = time.time()

        repositories = await self._github_client.list_repositories(account)
        logger.info(f"Fetching branches of {len(repositories)} repositories for {account}")

        results: "asyncio.Queue[RepositoryResult]" = asyncio.Queue()
        tasks = self.fan_out(repositories, results)
        successes, failures = await self.collect(results, len(tasks))
        # Every task has put its result, so this only reaps finished tasks
        await asyncio.gather(*tasks)

        if self._sort_results:
            successes.sort(key=lambda result: result.name)

        histogram = count_branches(successes)
        if self._sort_results:
            histogram = dict(sorted(histogram.items()))

        duration = time.time() - start_time
        logger.info(
            f"Crawl completed: {len(successes)} of {len(repositories)} repositories "
            f"fetched in {duration:.2f} seconds ({len(failures)} failed)"
        )

        return BranchReport(
            repositories=tuple(successes),
            failures=tuple(failures),
            histogram=histogram
        )

    async def close(self) -> None:
        """Close connections."""
        await self._github_client.close()
