"""Socket.IO transport, first-run database setup and data models for Uptime Kuma."""

__version__ = "0.1.0"