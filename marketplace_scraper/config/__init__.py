"""
The config package contains application settings.

Modules:
    settings: Environment-based settings, FailurePolicy and ScraperConfig.
"""
