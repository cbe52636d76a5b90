"""Aggregation module for inventory summaries.

- Reads the status ledger and resource tables, produces per-execution
  summaries (row counts, monthly spend, current status)
- Forbidden: writes of any kind
"""
