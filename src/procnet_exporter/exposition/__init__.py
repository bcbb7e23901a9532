"""
HTTP exposition of the connection metrics.
"""

from .app import METRICS_PATH, MetricsServer, ThreadingWSGIServer, create_app

__all__ = [
    "METRICS_PATH",
    "MetricsServer",
    "ThreadingWSGIServer",
    "create_app",
]
