"""discord.py adapters for voice playback and channel lookups."""
