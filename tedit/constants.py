"""Constants and configuration for the tedit editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Screen layout
    PREFIX_SIZE = 5  # Minimum width of the "NNN| " line-number gutter
    STATUS_SIZE = 1  # Status bar rows at the top
    MESSAGE_SIZE = 1  # Message bar rows at the bottom

    # Timing
    REFRESH_INTERVAL = 0.01  # Render tick (seconds)
    QUIT_CONFIRM_DELAY = 0.011  # Pause before waiting for the second Ctrl-Q (seconds)
    MESSAGE_TIMEOUT = 5.0  # How long a status message stays visible (seconds)

    # Editing defaults
    DEFAULT_TAB_SIZE = 4
    MAX_TAB_SIZE = 16

    # Configuration file
    APP_NAME = "tedit"
    CONFIG_FILE_NAME = "config.json"

    # File operations
    LINE_TERMINATOR = b"\r\n"
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Self-pipe markers
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize
    WAKE_PIPE_MARKER = b'W'  # Byte written to pipe to interrupt a blocking read

    # Prompts
    SAVE_PROMPT_LABEL = "Path:"
    SEARCH_PROMPT_LABEL = "Search:"

    # Status messages
    NO_FILE_STATUS = "No file selected"
    HELP_MESSAGE = "Ctrl+S save | Ctrl+F find | Ctrl+Q quit"
    QUIT_CONFIRM_MESSAGE = "Press Ctrl + Q again to quit"
    SAVED_MESSAGE = "Saved: {}"
    FOUND_MESSAGE = 'Found: "{}" at Ln:{}, Col:{}'
    NOT_FOUND_MESSAGE = 'Phrase: "{}" not found'
