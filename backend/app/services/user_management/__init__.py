"""
user_management package — Administrative routines over users and ownership.
"""

from app.services.user_management.reset import ResetReport, UserManagementReset

__all__ = ["ResetReport", "UserManagementReset"]
