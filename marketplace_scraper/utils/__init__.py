"""
The utils package contains helper utilities.

Modules:
    logger: Logging system setup and function for getting module logger.
"""
