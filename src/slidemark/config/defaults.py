"""
slidemark.config.defaults - Default configuration values.
"""

CONFIG_FILE_NAME = ".slidemark.toml"

DEFAULT_CONFIG = {
    "parser": {
        # Base URL for "@name" author lines
        "profile_url": "http://twitter.com/",
        # Whether .play snippets are marked runnable
        "play_enabled": False,
    },
    "lessons": {
        "extension": ".article",
    },
}
