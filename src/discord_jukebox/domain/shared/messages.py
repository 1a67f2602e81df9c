"""Centralized message constants for error messages, validation, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Discord ID Validation Errors
    INVALID_SNOWFLAKE = "Discord snowflake ID must be positive"
    SNOWFLAKE_TOO_LARGE = "Discord snowflake ID exceeds maximum value (2^64)"

    # Resolution Errors
    NOT_FOUND = "that doesn't exist"
    NO_SONGS_FOUND = "no songs found"
    SPOTIFY_NOT_CONFIGURED = "Spotify links are not supported: no Spotify credentials configured"
    SPOTIFY_UNSUPPORTED_LINK = "unsupported Spotify link"
    NO_STREAM_URL = "No stream URL found for {title}"

    # Voice Errors
    NO_VOICE_DESTINATION = "you need to be in a voice channel, or someone else does"
    VOICE_PLAY_REFUSED = "Voice connection refused to play {title}"
    NOT_CONNECTED = "Not connected to a voice channel"
    NOTHING_TO_PLAY = "Queue is empty"

    # Database Validation Errors
    INVALID_DATABASE_URL = "Database URL must start with sqlite://"
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Authentication/Security Errors
    DISCORD_TOKEN_REQUIRED = "DISCORD_TOKEN environment variable is required"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."
    CONTAINER_NOT_FOUND = "Container not found on bot instance"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Database Lifecycle
    DATABASE_INITIALIZED = "Database initialized at %s"
    DATABASE_CLOSED = "Database manager closed"

    # Guild Settings
    GUILD_SETTINGS_SAVED = "Saved settings for guild %s (playlist_limit=%s)"

    # Cache Operations
    CACHE_HIT_URL = "Cache hit for URL: %s"
    CACHE_EXPIRED_CLEANED = "Cleaned %d expired cache entries"

    # Resolution
    RESOLVE_STARTED = "Resolving query %r (playlist_limit=%s, split_chapters=%s)"
    RESOLVE_BRANCH = "Query %r dispatched to %s branch"
    RESOLVE_COMPLETED = "Resolved %d song(s) for query %r"
    CATALOG_SAMPLED = "Catalog has %d entries, sampling %d"
    CATALOG_ENTRY_MISSED = "No playable match for catalog entry %r"
    CATALOG_ENTRY_FAILED = "Lookup failed for catalog entry %r: %s"
    CATALOG_FETCHED = "Fetched Spotify %s %r with %d entries"

    # yt-dlp
    YTDLP_FAILED_EXTRACT_INFO = "Failed to extract info for %s"
    YTDLP_FAILED_SEARCH = "Search failed for %r"
    YTDLP_FAILED_EXTRACT_PLAYLIST = "Failed to extract playlist %s"
    YTDLP_NO_URL_IN_INFO_DICT = "No URL in info dict, skipping entry"
    YTDLP_CHAPTERS_SPLIT = "Split %r into %d chapter(s)"

    # Voice/Audio Operations
    VOICE_CONNECTED = "Connected to voice channel %s in %s"
    VOICE_DISCONNECTED = "Disconnected from voice in guild %s"
    VOICE_CONNECTION_TIMEOUT = "Timeout connecting to channel %s"
    VOICE_NO_PERMISSION = "No permission to connect to channel %s"
    VOICE_CLIENT_ERROR = "Client error connecting: %r"
    VOICE_NOT_CONNECTED = "Not connected to voice in guild %s"
    VOICE_STALE_CLEANUP = "Found stale voice client in guild %s, cleaning up"
    GUILD_NOT_FOUND = "Guild %s not found"
    CHANNEL_NOT_VOICE = "Channel %s is not a voice channel"

    # Playback Operations
    PLAYBACK_STARTED = "Started playing '%s' in guild %s"
    PLAYBACK_STOPPED = "Stopped playback in guild %s"
    PLAYBACK_PAUSED = "Paused playback in guild %s"
    PLAYBACK_RESUMED = "Resumed playback in guild %s"
    PLAYBACK_ERROR = "Playback error in guild %s: %s"
    PLAYBACK_RETRY = "Could not start %r in guild %s (%s), trying the next song"
    PLAYBACK_ALREADY_PLAYING = "Guild %s is already playing, play() is a no-op"
    PLAYBACK_IGNORING_CALLBACK = "Ignoring track-end callback for guild %s after manual stop"
    PLAYBACK_CALLBACK_ERROR = "Track-end callback failed for guild %s: %r"
    PLAYBACK_NO_PLAYER = "Track ended in guild %s but no player is registered"
    PLAYBACK_NO_CALLBACK = "No track-end callback registered for guild %s"
    PLAYBACK_CALLBACK_CRASHED = "Unhandled error in track-end callback for guild %s"
    TRACK_ENDED = "Track ended in guild %s"
    TRACK_FORWARDED = "Forwarded %d song(s) in guild %s"
    QUEUE_EXHAUSTED = "Queue exhausted in guild %s"

    # Queue Operations
    QUEUE_ADDED = "Added %d song(s) to the %s of the queue in guild %s"
    QUEUE_SHUFFLED = "Shuffled queue in guild %s"

    # Player Registry
    PLAYER_CREATED = "Created player for guild %s"
    PLAYER_REMOVED = "Removed player for guild %s"

    # Bot Lifecycle
    BOT_STARTING = "Starting bot in {environment} mode"
    BOT_STARTING_RUN = "Starting bot..."
    BOT_CATALOG_ENABLED = (
        "Spotify catalog enabled (default playlist limit %d, %d concurrent lookups)"
    )
    BOT_CATALOG_DISABLED = "Spotify catalog disabled: no credentials, Spotify links will be rejected"
    BOT_COMMAND_PREFIX = "Message commands use prefix %r"
    LOGGING_CONFIG_FALLBACK = "Could not load %s, falling back to basic config"
    BOT_STOPPED = "Bot stopped"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down"
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SETUP = "Setting up bot..."
    BOT_CONTAINER_INITIALIZED = "Container initialized"
    BOT_CONTAINER_INIT_FAILED = "Failed to initialize container: %s"
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"
    BOT_COGS_LOADED_SUMMARY = "Loaded %d cog(s), %d failed"
    BOT_READY = "Logged in as %s (ID: %s)"
    BOT_CONNECTED_GUILDS = "Connected to %d guild(s)"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_CONTAINER_SHUTDOWN = "Container shut down"
    BOT_CONTAINER_SHUTDOWN_ERROR = "Error shutting down container: %s"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %.1fs"
    BOT_SYNC_ON_STARTUP_FAILED = "Failed to sync commands on startup: %s"
    BOT_SYNCED_GUILD = "Synced %d command(s) to guild %s"
    BOT_SYNC_GUILD_FAILED = "Failed to sync commands to guild %s: %s"
    BOT_SYNCED_GLOBAL = "Synced %d global command(s)"
    BOT_SYNC_GLOBAL_FAILED = "Failed to sync global commands: %s"
    BOT_SLASH_COMMAND_ERROR = "Error in slash command %s: %s"
    BOT_ERROR_MESSAGE_SEND_FAILED = "Failed to send error message to user"

    # Commands
    COMMAND_FAILED = "Command %s failed in guild %s: %s"
    COMMAND_UNEXPECTED_ERROR = "Unexpected error running %s in guild %s"


class DiscordUIMessages:
    """User-facing strings rendered by the Discord transport."""

    # Guards
    STATE_SERVER_ONLY = "This command only works in a server."
    STATE_VERIFY_VOICE_FAILED = "Could not verify your voice state."

    # Queue outcomes
    QUEUE_ADDED_SINGLE = "{title} added to the{front} queue{note}"
    QUEUE_ADDED_MANY = "{title} and {others} other songs were added to the queue{note}"
    QUEUE_FRONT_OF_THE = " front of the"
    NOTE_RESUMING = "resuming playback"
    NOTE_SAMPLED = "a random sample of {limit} songs was taken"
    NOTE_ONE_NOT_FOUND = "1 song was not found"
    NOTE_MANY_NOT_FOUND = "{count} songs were not found"

    # Playback controls
    SKIP_SKIPPING = "skipping"
    SKIP_NOTHING = "no songs to skip"
    STOP_NOT_CONNECTED = "not connected"
    STOP_NOT_PLAYING = "not currently playing"
    STOP_STOPPED = "stopped"
    PAUSE_NOT_CONNECTED = "not connected"
    PAUSE_NOT_PLAYING = "not currently playing"
    PAUSE_PAUSED = "paused"
    RESUME_NOT_PAUSED = "not paused"
    RESUME_RESUMED = "resumed"
    SHUFFLE_NOT_ENOUGH = "not enough songs to shuffle"
    SHUFFLE_DONE = "shuffled"

    # Settings
    SETTINGS_PLAYLIST_LIMIT_UPDATED = "playlist limit set to {limit}"

    # Embeds
    EMBED_NOW_PLAYING = "Now Playing"
    EMBED_PAUSED = "Paused"
    EMBED_LIVE = "LIVE"
    EMBED_REQUESTED_BY = "Requested by"
    EMBED_UP_NEXT = "Up next"
    EMBED_QUEUE_LENGTH = "{count} song(s) in queue"
    EMBED_QUEUE_DURATION = " ({duration})"

    # Errors
    ERROR_GENERIC = "❌ An error occurred: {error}"
    ERROR_UNEXPECTED = "❌ Something went wrong, please try again."
