"""
Core modules for AI Workflow Estimator.

This package contains the pricing table, usage profiles, the cost model,
and discovery workflow mapping.
"""
