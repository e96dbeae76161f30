"""Framework and page model tests that run against fake pages (no browser)."""
