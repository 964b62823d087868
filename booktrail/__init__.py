"""booktrail: append-only audit trail for bookings.

Records every state change of a booking and rebuilds a translation-ready
timeline for authorized viewers.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
