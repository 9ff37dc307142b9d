"""
Application constants and static tables
"""
from enum import Enum
from typing import Dict, List, Tuple


class SortOption(str, Enum):
    """Presentation sort orders for candidate lists"""
    RELEVANCE = "relevance"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    LENGTH = "length"
    ALPHABETICAL = "alphabetical"


class DomainApiProvider(str, Enum):
    """Supported authoritative lookup providers"""
    WHOISXML = "whoisxml"
    WHOAPI = "whoapi"


# Variation vocabulary
PREFIXES: Tuple[str, ...] = (
    "get", "my", "the", "best", "top",
    "pro", "smart", "quick", "fast", "easy"
)

SUFFIXES: Tuple[str, ...] = (
    "hub", "lab", "pro", "zone", "spot",
    "base", "link", "space", "world", "place"
)

# Extension catalog: (suffix, base list price in USD)
EXTENSION_CATALOG: Tuple[Tuple[str, str], ...] = (
    (".com", "12.99"),
    (".net", "14.99"),
    (".org", "13.99"),
    (".io", "39.99"),
    (".co", "29.99"),
    (".tech", "49.99"),
    (".app", "19.99"),
    (".dev", "17.99"),
)

PRIMARY_EXTENSION = ".com"
COMMON_EXTENSIONS = frozenset({".com", ".net", ".org"})

# Registrar price tables (USD per year)
REGISTRAR_PRICING: Dict[str, Dict[str, str]] = {
    "GoDaddy": {
        ".com": "17.99", ".net": "19.99", ".org": "19.99", ".io": "59.99",
        ".co": "32.99", ".tech": "52.99", ".app": "19.99", ".dev": "17.99",
        ".ai": "89.99", ".xyz": "12.99", ".me": "19.99", ".info": "19.99"
    },
    "Namecheap": {
        ".com": "13.98", ".net": "15.98", ".org": "14.98", ".io": "48.88",
        ".co": "28.88", ".tech": "48.88", ".app": "18.88", ".dev": "15.88",
        ".ai": "85.88", ".xyz": "8.88", ".me": "18.88", ".info": "18.88"
    },
    "Hover": {
        ".com": "15.99", ".net": "17.99", ".org": "16.99", ".io": "79.00",
        ".co": "39.99", ".tech": "59.99", ".app": "19.99", ".dev": "17.99",
        ".ai": "99.99", ".xyz": "14.99", ".me": "19.99", ".info": "19.99"
    },
    "Porkbun": {
        ".com": "10.73", ".net": "11.98", ".org": "11.98", ".io": "56.00",
        ".co": "29.47", ".tech": "49.47", ".app": "16.47", ".dev": "14.47",
        ".ai": "81.47", ".xyz": "3.47", ".me": "16.47", ".info": "16.47"
    },
    "Squarespace": {
        ".com": "20.00", ".net": "20.00", ".org": "20.00", ".io": "70.00",
        ".co": "35.00", ".tech": "60.00", ".app": "25.00", ".dev": "22.00",
        ".ai": "95.00", ".xyz": "15.00", ".me": "25.00", ".info": "25.00"
    }
}

PREMIUM_PRICE_THRESHOLD = "30.00"

# Names that are always treated as registered by the heuristic
WELL_KNOWN_BRANDS: List[str] = [
    "google", "facebook", "amazon", "apple", "microsoft",
    "netflix", "twitter", "instagram", "youtube", "linkedin",
    "paypal", "tesla", "uber", "airbnb", "spotify",
    "adobe", "oracle", "nvidia", "samsung", "walmart"
]

# Common dictionary words; names built from them are more likely taken
COMMON_WORDS: List[str] = [
    "app", "web", "tech", "hub", "pro", "plus", "best", "top",
    "smart", "quick", "easy", "fast", "cool", "new", "good", "great",
    "super", "shop", "store", "cloud", "data", "home", "world", "online",
    "digital", "media", "net", "soft", "code", "dev", "lab", "link"
]

# Heuristic scoring weights
HEURISTIC_BASE_SCORE = 0.55
HEURISTIC_SHORT_LENGTH = 8
HEURISTIC_SHORT_BONUS = 0.05
HEURISTIC_HYPHEN_BONUS = 0.10
HEURISTIC_DIGIT_BONUS = 0.10
HEURISTIC_UNCOMMON_EXTENSION_BONUS = 0.15
HEURISTIC_COM_PENALTY = 0.15
HEURISTIC_WORD_PENALTY = 0.05
HEURISTIC_MAX_WORD_PENALTY = 0.15
HEURISTIC_JITTER = 0.20
HEURISTIC_THRESHOLD = 0.5

# Availability source labels
LABEL_RATE_LIMITED = "rate-limited"
LABEL_REGISTRY_AVAILABLE = "Available (Registry API)"
LABEL_REGISTERED = "Registered"
LABEL_DNS_ACTIVE = "DNS Active"
LABEL_DNS_VERIFIED = "Registered (DNS Verified)"
LABEL_WEBSITE = "Active Website"
LABEL_WEBSITE_HTTPS = "Active Website (HTTPS)"
LABEL_NO_DNS = "No DNS Records"
LABEL_NO_PRESENCE = "No Web Presence"
LABEL_BRAND = "Registered (Well-Known Brand)"
LABEL_ESTIMATED_AVAILABLE = "Estimated Available"
LABEL_ESTIMATED_REGISTERED = "Estimated Registered"
LABEL_UNVERIFIED = "Unverified"

# DNS record types probed, in order, with the label each one yields
DNS_PROBE_ORDER: Tuple[Tuple[str, str], ...] = (
    ("A", LABEL_DNS_ACTIVE),
    ("AAAA", LABEL_DNS_ACTIVE),
    ("MX", LABEL_DNS_VERIFIED),
    ("NS", LABEL_DNS_VERIFIED),
)

# Keyword categories for domain metrics
KEYWORD_CATEGORIES: Dict[str, List[str]] = {
    "tech": ["tech", "app", "web", "digital", "online", "cyber", "net", "soft", "code", "dev"],
    "business": ["biz", "pro", "corp", "company", "enterprise", "solutions", "services", "group"],
    "lifestyle": ["life", "style", "living", "home", "family", "personal", "daily", "wellness"],
    "creative": ["art", "design", "creative", "studio", "media", "photo", "video", "music"],
    "health": ["health", "fit", "wellness", "medical", "care", "therapy", "nutrition"],
    "education": ["learn", "edu", "school", "training", "course", "academy", "knowledge"],
    "finance": ["finance", "money", "invest", "bank", "pay", "budget", "wealth", "fund"],
    "travel": ["travel", "trip", "vacation", "journey", "explore", "adventure", "tour"],
    "food": ["food", "recipe", "cook", "kitchen", "restaurant", "cafe", "meal", "taste"],
    "shopping": ["shop", "store", "market", "buy", "sell", "deal", "discount", "sale"]
}

# Text length limits
MAX_QUERY_LENGTH = 500
MAX_DOMAIN_LENGTH = 253

# Search history
DEFAULT_RECENT_SEARCHES = 10
MAX_RECENT_SEARCHES = 100
STORED_SEARCH_LIMIT = 500

# Error messages
ERROR_MESSAGES = {
    "empty_query": "No valid keywords found",
    "invalid_domain": "Invalid domain name: {domain}",
    "unknown_extension": "Unsupported extension(s): {extensions}",
    "price_range": "minPrice cannot be greater than maxPrice",
    "storage_unavailable": "Result store is unavailable"
}
