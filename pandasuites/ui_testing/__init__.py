"""UI scenarios for https://automationpanda.com/ (Playwright + pytest-bdd)."""
