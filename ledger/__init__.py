"""
ledger: per-user income and expense records.

Provides:
  • ``LedgerStore`` with the ``income_ledger`` / ``expense_ledger`` instances
  • ``summarize`` for totals, monthly breakdowns and recent history
"""
