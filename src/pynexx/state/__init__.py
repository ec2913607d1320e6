"""State layer.

This package owns the per-device door state machine and the two
mechanisms that keep it honest: the periodic reconciliation loop and
the optimistic confirmation timer.
"""
