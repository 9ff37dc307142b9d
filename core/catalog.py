"""
Extension Catalog
"""
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Tuple

from config.constants import EXTENSION_CATALOG, PRIMARY_EXTENSION
from core.exceptions import UnsupportedExtensionError

CENTS = Decimal("0.01")


def to_price(value) -> Decimal:
    """Convert a table value to a two-decimal price"""
    return Decimal(str(value)).quantize(CENTS)


@dataclass(frozen=True)
class Extension:
    """Supported TLD with its baseline list price"""
    suffix: str
    base_price: Decimal


class ExtensionCatalog:
    """Read-only table of supported extensions"""

    def __init__(self, rows: Iterable[Tuple[str, str]] = EXTENSION_CATALOG,
                 primary: str = PRIMARY_EXTENSION):
        self._extensions: Dict[str, Extension] = {}
        for suffix, price in rows:
            suffix = normalize_extension(suffix)
            self._extensions[suffix] = Extension(suffix=suffix, base_price=to_price(price))
        self.primary = primary

    def __contains__(self, suffix: str) -> bool:
        return normalize_extension(suffix) in self._extensions

    def __iter__(self):
        return iter(self._extensions.values())

    def __len__(self) -> int:
        return len(self._extensions)

    @property
    def suffixes(self) -> List[str]:
        return list(self._extensions)

    def get(self, suffix: str) -> Optional[Extension]:
        return self._extensions.get(normalize_extension(suffix))

    def base_price(self, suffix: str) -> Decimal:
        extension = self.get(suffix)
        if extension is None:
            raise UnsupportedExtensionError([suffix])
        return extension.base_price

    def ordered(self, allowed: Optional[Iterable[str]] = None) -> List[Extension]:
        """Extensions in evaluation order, primary extension first

        Args:
            allowed: Optional restriction; every entry must be in the catalog

        Raises:
            UnsupportedExtensionError: When a restriction is not in the catalog
        """
        if allowed:
            wanted = {normalize_extension(s) for s in allowed}
            unknown = wanted - set(self._extensions)
            if unknown:
                raise UnsupportedExtensionError(unknown)
        else:
            wanted = set(self._extensions)

        ordered = [ext for ext in self._extensions.values() if ext.suffix in wanted]
        ordered.sort(key=lambda ext: ext.suffix != self.primary)
        return ordered


def normalize_extension(suffix: str) -> str:
    """Lowercase an extension and make sure it has a leading dot"""
    suffix = suffix.strip().lower()
    if not suffix.startswith("."):
        suffix = f".{suffix}"
    return suffix


def split_domain(domain: str) -> Tuple[str, str]:
    """Split a domain into (stem, extension) at the last dot"""
    stem, _, tld = domain.rpartition(".")
    if not stem:
        return domain, ""
    return stem, f".{tld}"


@lru_cache()
def get_extension_catalog() -> ExtensionCatalog:
    """Process-wide catalog, built once"""
    return ExtensionCatalog()
