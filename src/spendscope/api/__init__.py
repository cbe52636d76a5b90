"""API module for spendscope.

Read-only HTTP surface:
- Lists executions, serves inventory summaries and raw resource rows
- Forbidden: ledger writes, table cleanup
"""
