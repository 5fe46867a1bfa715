"""
tsprimer Test Suite

Tests organized by chapter:
- test_ch1_cleaning.py: Chapter 1 field extraction and reshape
- test_ch2_decomposition.py: Chapter 2 additive decomposition invariants
- test_ch2_forecasting.py: Chapter 2 forecast recurrences
- test_ch2_ets.py: Chapter 2 ETS grid and AutoETS selection
- test_ch2_metrics.py: Chapter 2 metrics (NaN handling)
- test_smoke.py: Smoke test (both walkthroughs on synthetic data)
"""
