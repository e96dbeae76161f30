"""
Step definitions binding the Gherkin vocabulary to page object calls.

Loaded as pytest plugins from the repository ``conftest.py`` so every
scenario module under ``ui_testing/tests`` sees them.
"""
