"""
Connectivity module exceptions.
"""

from tourline.shared.exceptions import TourlineError


class ConnectivityError(TourlineError):
    """Base exception for connectivity errors."""

    pass


class MonitorAlreadyRunningError(ConnectivityError):
    """Raised when start() is called on a monitor that is already subscribed."""

    def __init__(self):
        super().__init__("Connectivity monitor is already running", code="MONITOR_RUNNING")
