"""Domain models representing core business entities."""
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple


@dataclass(frozen=True)
class RepositoryDescriptor:
    """Immutable repository entry as listed for an account.

    ``branches_url`` is a URI template such as
    ``https://api.github.com/repos/owner/name/branches{/branch}``.
    """
    name: str
    branches_url: str


@dataclass(frozen=True)
class BranchDescriptor:
    """A single branch of a repository."""
    name: str


@dataclass(frozen=True)
class RepositoryResult:
    """Outcome of fetching the branches of one repository.

    ``error`` is None on success. Failed results never carry branches.
    """
    name: str
    branches: Tuple[str, ...] = ()
    error: Optional[str] = None

    def __post_init__(self) -> None:
        if self.error is not None and self.branches:
            raise ValueError(f"Failed result for {self.name} cannot carry branches")

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, name: str, branches: Iterable[str]) -> 'RepositoryResult':
        return cls(name=name, branches=tuple(branches))

    @classmethod
    def failure(cls, name: str, reason: str) -> 'RepositoryResult':
        return cls(name=name, error=reason)


@dataclass(frozen=True)
class BranchReport:
    """Aggregated branch statistics for one run."""
    repositories: Tuple[RepositoryResult, ...]
    failures: Tuple[RepositoryResult, ...] = ()
    histogram: Dict[str, int] = field(default_factory=dict)

    @property
    def successful_count(self) -> int:
        return len(self.repositories)
