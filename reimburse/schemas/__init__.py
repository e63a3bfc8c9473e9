"""Pydantic schemas package.

Folder intent:
  common.py        — CamelModel base + HealthResponse (all schemas inherit CamelModel)
  user.py          — user registration / identity
  organization.py  — organizations, memberships, invitations
  category.py      — expense categories
  policy.py        — spending policies and resolution results
  expense.py       — submissions, expenses, review audit entries
  group.py         — groups, group members, hierarchy nodes
  message.py       — message board
"""
