"""easyalert - a minimal alerting backend."""

__version__ = "1.0.0"
