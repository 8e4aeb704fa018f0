"""Message templates."""

from cube.templates.messages import (
    BUSY,
    HELP,
    INVALID_SELECTION,
    NO_ADDRESS,
    PROMPT_AUDIT,
    PROMPT_SOCIALS,
    TRENDING_LIMITS,
    TRENDING_MENU,
    UNKNOWN_COMMAND_HINT,
    USAGE_CHECK,
    WELCOME,
)

__all__ = [
    "WELCOME",
    "HELP",
    "BUSY",
    "USAGE_CHECK",
    "UNKNOWN_COMMAND_HINT",
    "TRENDING_MENU",
    "TRENDING_LIMITS",
    "INVALID_SELECTION",
    "PROMPT_SOCIALS",
    "PROMPT_AUDIT",
    "NO_ADDRESS",
]
