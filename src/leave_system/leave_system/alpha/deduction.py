from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.constants import DEFAULT_ALPHA_DEDUCTION_RATE


class DeductionPolicy(ABC):
    """How much an employee loses for a number of unexcused absences."""

    @abstractmethod
    def deduction_for(self, alpha_count: int) -> int:
        raise NotImplementedError


class FlatRateDeduction(DeductionPolicy):
    """Fixed amount per alpha record."""

    def __init__(self, rate: int = DEFAULT_ALPHA_DEDUCTION_RATE):
        self.rate = int(rate)

    def deduction_for(self, alpha_count: int) -> int:
        return max(int(alpha_count), 0) * self.rate
