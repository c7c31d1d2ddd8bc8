"""GUI view layer.

Exports:
 - DashboardWindow
"""

from .dashboard_view import DashboardWindow  # noqa: F401
