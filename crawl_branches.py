"""Main entry point for the GitHub branch statistics crawler.

Lists the repositories of the configured account, fetches every repository's
branches concurrently and prints how common each branch name is.
"""
import asyncio
import sys
import logging
from branchstats.config import Settings, load_settings
from branchstats.domain.errors import GitHubError
from branchstats.infrastructure.github_client import GitHubRestClient
from branchstats.application.branch_service import BranchStatsService
from branchstats.application.report import format_report


logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


async def main(settings: Settings) -> int:
    """Execute the branch crawl and print the report.

    Returns:
        Process exit code
    """
    github_client = GitHubRestClient(
        base_url=settings.api_url,
        request_timeout=settings.request_timeout
    )
    service = BranchStatsService(
        github_client=github_client,
        max_concurrency=settings.max_concurrency,
        sort_results=settings.sort_results
    )

    logger.info(f"Starting branch crawl for {settings.account}")

    try:
        report = await service.collect_branch_stats(settings.account)
    except GitHubError as e:
        logger.error(f"Could not list repositories of {settings.account}: {e}")
        return 1
    finally:
        await service.close()

    for line in format_report(report):
        print(line)

    return 0


def run() -> None:
    """Console script entry point."""
    try:
        settings = load_settings()
    except ValueError as e:
        configure_logging("INFO")
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(settings.log_level)
    sys.exit(asyncio.run(main(settings)))


if __name__ == "__main__":
    run()
