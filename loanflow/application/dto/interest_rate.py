"""Data transfer objects for the interest rate table."""

from dataclasses import dataclass
from typing import List

from loanflow.service.workflow import workflow_settings


@dataclass(frozen=True)
class InterestRateRequest:
    months: int
    rate: float

    def validate(self) -> List[str]:
        errors = []

        low = workflow_settings.min_duration_months
        high = workflow_settings.max_duration_months
        if not low <= self.months <= high:
            errors.append(f"months must be between {low} and {high}")

        if not 0 <= self.rate <= 100:
            errors.append("rate must be between 0 and 100")

        return errors
