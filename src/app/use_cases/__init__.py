"""
Use Cases

Organized by domain folder:
- webhooks/: Signed identity-provider event ingestion
- applications/: Application management
- events/: Event log, stats, trend, purge and Excel export
"""
