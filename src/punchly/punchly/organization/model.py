from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Company:
    id: int
    name: str
    address: str = ""


@dataclass(frozen=True)
class Department:
    id: int
    name: str
    company_id: int


@dataclass(frozen=True)
class EmployeeType:
    id: int
    name: str
    company_id: int


@dataclass(frozen=True)
class AbsenceType:
    """Company-defined absence reason (vacation, sick, homeday, ...)."""

    id: int
    name: str
    company_id: int
