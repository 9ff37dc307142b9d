"""
Input Validation Utilities
"""
import re
from typing import Optional

from config.constants import MAX_DOMAIN_LENGTH, PRIMARY_EXTENSION
from core.exceptions import ValidationError

_DOMAIN_PATTERN = re.compile(
    r'^(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}$'
)


def normalize_domain(domain: str) -> str:
    """Normalize user-entered domain text

    Strips scheme, "www." and any path, lowercases, and appends ".com" when
    there is no extension.

    Args:
        domain: Raw domain text

    Returns:
        Normalized domain
    """
    domain = domain.strip().lower()

    # Remove protocol if present
    domain = re.sub(r'^[a-z][a-z0-9+.-]*://', '', domain)

    # Remove path, query and port
    domain = re.split(r'[/?#:]', domain, maxsplit=1)[0]

    # Remove www
    if domain.startswith('www.'):
        domain = domain[4:]

    domain = domain.strip('.')

    if domain and '.' not in domain:
        domain += PRIMARY_EXTENSION

    return domain


def validate_domain(domain: str) -> bool:
    """Validate domain format

    Args:
        domain: Domain name

    Returns:
        True if valid format
    """
    if not domain or len(domain) > MAX_DOMAIN_LENGTH:
        return False
    return bool(_DOMAIN_PATTERN.match(domain.lower()))


def clean_domain(domain: Optional[str]) -> str:
    """Normalize and validate a domain or raise ValidationError"""
    normalized = normalize_domain(domain or "")
    if not validate_domain(normalized):
        raise ValidationError(
            f"Invalid domain name: {domain}",
            error_code="invalid_domain",
            details={"domain": domain}
        )
    return normalized


def sanitize_input(text: str, max_length: int = 1000) -> str:
    """Sanitize user input

    Args:
        text: Input text
        max_length: Maximum allowed length

    Returns:
        Sanitized text
    """
    # Remove control characters
    text = ''.join(char for char in text if ord(char) >= 32 or char == '\n')

    # Trim whitespace
    text = text.strip()

    # Limit length
    if len(text) > max_length:
        text = text[:max_length]

    return text
