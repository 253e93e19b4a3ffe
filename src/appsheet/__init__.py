"""appsheet - list the youngest users with valid US phone numbers."""

__version__ = "0.1.0"
