"""Wallet behaviour profiling, strategy clone scoring and clone reports."""

__version__ = "0.1.0"

__all__ = [
    "config",
    "models",
    "sweep",
    "scoring",
    "families",
    "diff",
    "seeds",
    "outputs",
    "reports",
    "explain",
]