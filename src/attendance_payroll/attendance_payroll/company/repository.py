from __future__ import annotations

from typing import Optional, Protocol

from .model import CompanyPolicy


class CompanyRepository(Protocol):
    def get_by_id(self, company_id: int) -> Optional[CompanyPolicy]:
        raise NotImplementedError
