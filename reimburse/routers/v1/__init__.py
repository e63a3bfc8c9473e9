"""v1 router package — all /api/v1/* endpoints live here.

Files:
  users.py          — registration, current user
  organizations.py  — organizations, members, invitations
  categories.py     — expense categories
  policies.py       — spending policies + resolution debugger
  expenses.py       — submission, listings, review queue
  groups.py         — group tree and group members
  messages.py       — organization message board

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to reimburse/services/.
"""
