"""SessionBell: desktop notifications, sounds and hooks for coding-agent sessions."""

__version__ = "0.1.0"
