"""SQL query building, response envelopes, settings, records and governance and pool helpers."""

__version__ = "0.1.0"