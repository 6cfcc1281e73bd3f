"""
The core package contains base application components.

Modules:
    models: Value objects passed between parsers, pipeline and report writer.
    versioning: Dotted version comparison and version ranges.
    report: Report aggregation and JSON output.
    exceptions: Scraper exception hierarchy.
"""
