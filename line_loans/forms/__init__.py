"""Form view-models."""
from .open_loan import FormState, LoanFormDisplay, OpenLoanForm, transition

__all__ = ["FormState", "LoanFormDisplay", "OpenLoanForm", "transition"]
