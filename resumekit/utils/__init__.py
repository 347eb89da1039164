"""
Shared utilities for RESUMEKIT.

Common functionality used across contexts:
- Logger setup
- Timestamps
- Resume lifecycle event log
"""
