"""
Solana address validation.

Validates that a string is a valid Solana public key address.
Uses actual base58 decoding instead of regex for accuracy.

Solana addresses:
- Use base58 encoding (no 0, O, I, l characters)
- Decode to exactly 32 bytes
- Typically 32-44 characters when encoded
"""

import base58

from cube.core.exceptions import InvalidAddressError


def validate_solana_address(address: str) -> tuple[bool, str | None]:
    """
    Validate a Solana address.

    Args:
        address: String to validate as Solana address

    Returns:
        Tuple of (is_valid, error_message)
        - (True, None) if address is valid
        - (False, "error description") if invalid

    Examples:
        >>> validate_solana_address("So11111111111111111111111111111111111111112")
        (True, None)

        >>> validate_solana_address("")
        (False, 'Address must not be empty')
    """
    if not address:
        return False, "Address must not be empty"

    if address != address.strip():
        return False, "Address contains whitespace"

    if len(address) < 32 or len(address) > 44:
        return False, f"Invalid address length: {len(address)} characters (expected 32-44)"

    try:
        decoded = base58.b58decode(address)
    except ValueError:
        # base58 raises ValueError for characters outside the alphabet
        return False, "Invalid base58 encoding"

    if len(decoded) != 32:
        return False, f"Invalid key length: expected 32 bytes, got {len(decoded)}"

    return True, None


def is_valid_solana_address(address: str) -> bool:
    """
    Simple boolean check for Solana address validity.

    Args:
        address: String to validate

    Returns:
        True if valid Solana address, False otherwise
    """
    valid, _ = validate_solana_address(address)
    return valid


def require_solana_address(address: str) -> str:
    """
    Return the address unchanged or raise InvalidAddressError.

    Used by the gateway to reject malformed input before any upstream call.
    """
    valid, error = validate_solana_address(address)
    if not valid:
        raise InvalidAddressError(
            message=f"Invalid token address: {error}.",
            technical_message=f"Rejected address {address[:8]!r}: {error}",
        )
    return address
