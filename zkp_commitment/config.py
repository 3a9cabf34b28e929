"""
⚠️ DRAFT — requires crypto review before production use

Configuration constants for keyed-commitment proofs.

The scheme is an HMAC-SHA256 commitment over a canonical message, NOT a
zero-knowledge proof: the verifier learns the attribute in order to recompute
the commitment.
"""

# ============================================================================
# KEY MATERIAL
# ============================================================================

# HMAC-SHA256 key, supplied as Base64 by an external secret store
HMAC_KEY_SIZE_BYTES = 32
MAC_ALGORITHM = "HMAC-SHA256"
MAC_SIZE_BYTES = 32

# Environment variable the factory reads the Base64 key from
HMAC_KEY_ENV_VAR = "ZKP_HMAC_KEY"

# ============================================================================
# SALT
# ============================================================================

SALT_SIZE_BYTES = 32

# Remote verifier contracts reject shorter salts
MIN_SALT_SIZE_BYTES = 16

RANDOMNESS_SOURCE = "secrets"  # Platform CSPRNG

# ============================================================================
# CANONICAL ENCODING
# ============================================================================

DATE_FORMAT = "%Y-%m-%d"
TEXT_ENCODING = "utf-8"
DECIMAL_SEPARATOR = "."

# Decimals are written without exponent, so both the magnitude (adjusted
# exponent) and the number of fractional digits are capped. Every finite
# float fits.
MAX_DECIMAL_EXPONENT = 400

# ============================================================================
# PREDICATES
# ============================================================================

DEFAULT_REQUIRED_AGE = 18
REQUIRED_AGE_ENV_VAR = "ZKP_REQUIRED_AGE"

# ============================================================================
# BATCH / SERIALIZATION
# ============================================================================

MAX_BATCH_SIZE = 1000
BUNDLE_VERSION = 1  # Increment for breaking changes


# ============================================================================
# VALIDATION
# ============================================================================


def validate_config() -> bool:
    """
    Validate configuration parameters.

    Returns:
        True if configuration is valid

    Raises:
        AssertionError: If configuration is invalid
    """
    assert HMAC_KEY_SIZE_BYTES == 32, "HMAC-SHA256 key must be 256 bits"
    assert SALT_SIZE_BYTES >= MIN_SALT_SIZE_BYTES, "Salt too small for verifier"
    assert MAC_SIZE_BYTES == 32, "Invalid MAC size"
    assert DEFAULT_REQUIRED_AGE >= 0, "Required age cannot be negative"
    assert MAX_BATCH_SIZE > 0, "Batch size must be positive"
    assert DECIMAL_SEPARATOR == ".", "Decimals must be culture-invariant"
    assert MAX_DECIMAL_EXPONENT >= 324, "Decimal limit must cover every float"

    return True


# Auto-validate on import
validate_config()
