"""
LoanFlow - Loan Origination Back Office

A FastAPI service that takes loan applications through officer review,
approver sign-off and disbursement, with an audit trail and in-app
notifications for every step.
"""

__version__ = "0.1.0"
