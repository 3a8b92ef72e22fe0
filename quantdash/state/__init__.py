"""
Session state module.

Holds the explicit session record, the command functions that replace it,
and the runner that executes computations off the caller's thread.
"""
