from __future__ import annotations

from abc import ABC, abstractmethod

from ...company.model import CompanyPolicy
from ...users.model import EmployeeProfile
from ..model import PayrollResult


class CompensationCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def apply(
        self,
        result: PayrollResult,
        profile: EmployeeProfile,
        company: CompanyPolicy,
        *,
        include_contributions: bool = False,
        include_tax: bool = False,
    ) -> PayrollResult:
        """Return ``result`` with its compensation breakdown filled in."""
        raise NotImplementedError
