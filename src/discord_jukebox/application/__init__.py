"""
Application Layer

Contains use cases, command handlers, and application services.
This layer orchestrates domain objects and infrastructure to fulfill use cases.

Structure:
- commands/: Write operations (AddQueryCommand, SkipSongCommand, etc.)
- services/: Source resolution, per-guild players and their registry
- interfaces/: Port interfaces for infrastructure adapters
"""
