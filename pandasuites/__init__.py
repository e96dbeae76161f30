"""
Automation Panda blog test suites package.

Kept importable to support:
  - IDE navigation
  - programmatic runners (e.g., `run_tests.py`)
  - step modules loaded through `pytest_plugins`
"""
