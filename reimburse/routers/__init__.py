"""Routers package — HTTP endpoint definitions.

Files:
  deps.py  — session + current-user dependencies
  v1/      — Versioned API routes (/api/v1/*)
"""
