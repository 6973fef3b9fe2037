"""
Performance tests for the ratsweep sweep.

This package contains performance regression tests that ensure
the sweep doesn't slow down over time.

Tests:
- test_perf_sweep.py - Random segment sets (50, 100, 200 segments), sweep vs naive
"""
