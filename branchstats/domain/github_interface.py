"""GitHub API interface (port) for listing repositories and branches.

This is the anti-corruption layer that shields the domain from GitHub API specifics.
"""
from abc import ABC, abstractmethod
from typing import List
from branchstats.domain.models import BranchDescriptor, RepositoryDescriptor


class IGitHubClient(ABC):
    """Abstract interface for GitHub API operations.

    Implementations raise subclasses of ``branchstats.domain.errors.GitHubError``.
    """

    @abstractmethod
    async def list_repositories(self, account: str) -> List[RepositoryDescriptor]:
        """List every repository owned by an account.

        Args:
            account: GitHub user name

        Returns:
            Repository descriptors, possibly empty
        """
        pass

    @abstractmethod
    async def list_branches(self, branches_url: str) -> List[BranchDescriptor]:
        """List the branches behind a repository's templated branches URL.

        Args:
            branches_url: URI template as returned in ``branches_url``

        Returns:
            Branch descriptors in the order GitHub returned them
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        pass
