# tests/property/__init__.py
"""Property-based tests for eddy.

Property-based testing validates invariants that must hold for ALL inputs,
not just the specific examples we think of.

Test categories:
- backoff: bounds and monotonicity of the poll interval
- span: row-selection exclusivity and span membership
- quiescence: the race-free termination test
"""
