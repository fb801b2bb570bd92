from __future__ import annotations

from typing import Protocol


class CohortRepository(Protocol):
    """Read-only view of enrollment, which is owned outside this package."""

    def list_cohort(self) -> set[str]:
        """Claimant ids of every approved member."""

        raise NotImplementedError
