"""
Workflow Settings for the LoanFlow back office.

Tunable limits used by the review, intake and disbursement rules.
Override via environment variables with the WORKFLOW_ prefix:
    WORKFLOW_DEFAULT_INTEREST_RATE=15.5
    WORKFLOW_HIGH_RISK_AMOUNT=500000
"""

from functools import lru_cache
from typing import Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class WorkflowSettings(BaseSettings):
    """
    Configurable limits for the loan workflow.

    Amounts are in the operating currency's major unit.
    """

    model_config = SettingsConfigDict(
        env_prefix="WORKFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Loan Terms ===
    min_duration_months: int = Field(default=1, ge=1)
    max_duration_months: int = Field(default=60, ge=1)
    default_interest_rate: float = Field(
        default=15.5,
        ge=0.0,
        le=100.0,
        description="Annual % applied when no active rate exists for a duration",
    )

    # === Risk Bands ===
    high_risk_amount: float = Field(
        default=500_000,
        description="Amounts above this are banded High",
    )
    medium_risk_amount: float = Field(
        default=200_000,
        description="Amounts above this are banded Medium",
    )

    # === Documents ===
    max_document_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Largest document that may be registered",
    )
    allowed_mime_types: Tuple[str, ...] = (
        "application/pdf",
        "image/jpeg",
        "image/png",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    )


@lru_cache
def get_workflow_settings() -> WorkflowSettings:
    """Get cached workflow settings instance."""
    return WorkflowSettings()


workflow_settings = get_workflow_settings()
