"""Typed exceptions for the scorekeeping core.

Gameplay guards never raise: rejected operations are no-ops. The only
failure that can reach a caller is a stored snapshot that cannot be turned
back into a consistent ledger.
"""


class SnapshotError(ValueError):
    """Stored snapshot violates ledger invariants (score lengths, round, ids, phase)."""
