"""
Elevate ownership service

Maintains who owns which organization, ART and team, and which roles
employees hold on their teams.
"""

__version__ = "0.1.0"
