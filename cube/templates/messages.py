"""
Message templates for the command shell.

All operator-facing text is defined here for consistent messaging.
Styled entries are (style, text) pairs; the style names are resolved
by the console.

Template naming convention:
- WELCOME, HELP - informational messages
- PROMPT_*, TRENDING_* - secondary prompts
- USAGE_*, INVALID_*, NO_* - input errors
"""

# =============================================================================
# Informational Messages
# =============================================================================

WELCOME = [
    "Welcome to the CUBE Terminal!",
    "Type 'help' for a list of commands.",
]

HELP = [
    ("help.title", "Available commands:"),
    ("help.basic", "  help                Show available commands"),
    ("help.basic", "  clear               Clear the terminal"),
    ("help.check", "  check [address]     Check token details (supply, distribution, mint authority)"),
    ("help.trending", "  trending            Fetch top trending coins from Dextools"),
    ("help.socials", "  socials             Fetch social info of a token"),
    ("help.audit", "  audit               Fetch security audit of a token"),
]

BUSY = "Busy: wait for the current command to finish."

# =============================================================================
# Secondary Prompts
# =============================================================================

TRENDING_MENU = [
    "Select the number of trending coins to display:",
    "1) Top 5",
    "2) Top 10",
    "3) Top 15",
]

TRENDING_LIMITS = {
    "1": 5,
    "2": 10,
    "3": 15,
}

PROMPT_SOCIALS = "Enter contract address to check socials:"

PROMPT_AUDIT = "Enter contract address to check audit:"

# =============================================================================
# Input Errors
# =============================================================================

UNKNOWN_COMMAND_HINT = "Type 'help' for a list of commands."

USAGE_CHECK = "Usage: check <address>"

INVALID_SELECTION = "Invalid selection. Try again."

NO_ADDRESS = "No address entered."
