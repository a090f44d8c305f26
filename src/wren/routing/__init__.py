"""Routing — two-tier route table with exact-match precedence.

Routes are registered during setup and compiled into an immutable
lookup structure when the app freezes.
"""
