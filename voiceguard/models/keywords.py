from types import MappingProxyType

# Category -> trigger phrases. Matched as lower-case substrings.
SCAM_KEYWORDS = MappingProxyType({
    "urgency": (
        "urgent", "immediately", "right now", "act fast", "limited time",
        "expires today", "hurry",
    ),
    "financial": (
        "bank account", "credit card", "wire transfer", "bitcoin",
        "cryptocurrency", "investment", "money", "cash prize", "lottery", "won",
    ),
    "otp": (
        "otp", "one time password", "verification code", "pin number",
        "security code",
    ),
    "impersonation": (
        "irs", "social security", "police", "fbi", "government", "microsoft",
        "amazon", "apple", "tech support",
    ),
    "threats": (
        "arrest", "warrant", "legal action", "lawsuit", "suspended", "blocked",
        "terminated",
    ),
    "pressure": (
        "dont tell anyone", "don't tell", "keep this secret", "stay on the line",
        "do not hang up",
    ),
})

# Provider language code -> display name. ISO 639-1 and 639-3 forms.
LANGUAGE_CODES = MappingProxyType({
    "en": "English",
    "ta": "Tamil",
    "hi": "Hindi",
    "te": "Telugu",
    "ml": "Malayalam",
    "eng": "English",
    "tam": "Tamil",
    "hin": "Hindi",
    "tel": "Telugu",
    "mal": "Malayalam",
})

DEFAULT_LANGUAGE = "English"


def language_name(code) -> str:
    if not code:
        return DEFAULT_LANGUAGE
    return LANGUAGE_CODES.get(code.strip().lower(), DEFAULT_LANGUAGE)
