"""Services package — all business logic lives here, never in routers.

Files:
  authorization.py    — membership/role guard called first by every org-scoped operation
  policy_resolver.py  — user-specific over organization-wide policy precedence
  expense.py          — submission + auto-adjudication state machine
  policy.py / category.py / group.py / organization.py / message.py / user.py — CRUD

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""
