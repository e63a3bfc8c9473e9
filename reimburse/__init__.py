"""Reimburse — expense reimbursement API with policy-driven auto-adjudication."""
