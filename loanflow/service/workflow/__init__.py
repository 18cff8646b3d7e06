"""
Loan Workflow Rules for the LoanFlow back office
"""

from .settings import WorkflowSettings, workflow_settings, get_workflow_settings
from .transitions import (
    REVIEW_TRANSITIONS,
    STAGE_REQUIRED_STATUS,
    can_create_loan,
    can_disburse,
    can_review,
    infer_stage,
    info_return_status,
    next_review_status,
    parse_decision,
    parse_review_type,
    stage_for_role,
)
from .terms import LoanTerms, add_months, calculate_loan_terms, risk_band
from .visibility import ApplicationScope, application_scope, can_view_application

__all__ = [
    # Settings
    "WorkflowSettings",
    "workflow_settings",
    "get_workflow_settings",
    # Status model
    "REVIEW_TRANSITIONS",
    "STAGE_REQUIRED_STATUS",
    "can_create_loan",
    "can_disburse",
    "can_review",
    "infer_stage",
    "info_return_status",
    "next_review_status",
    "parse_decision",
    "parse_review_type",
    "stage_for_role",
    # Terms
    "LoanTerms",
    "add_months",
    "calculate_loan_terms",
    "risk_band",
    # Visibility
    "ApplicationScope",
    "application_scope",
    "can_view_application",
]
