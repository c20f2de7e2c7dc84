from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Tuple

from email_validator import EmailNotValidError, validate_email

from .casing import to_title_case
from .models import ParsedName, ParsedPhoneNumber

logger = logging.getLogger(__name__)

E164_RE = re.compile(r"^\+[1-9]\d{1,14}$")
PHONE_EXTENSION_RE = re.compile(r"\b(?:extension|ext\.?|x)\s*(\d+)", re.IGNORECASE)
E164_MAX_DIGITS = 15
PHONE_MIN_DIGITS = 7

# (country code, predicate on the full digit string) checked in order for "+" numbers
KNOWN_COUNTRY_PREFIXES: Tuple[Tuple[str, Callable[[str], bool]], ...] = (
    ("1", lambda digits: len(digits) == 11),
    ("44", lambda digits: len(digits) >= 12),
    ("91", lambda digits: len(digits) == 12),
    ("86", lambda digits: len(digits) == 13),
    ("49", lambda digits: len(digits) >= 11),
)

EMAIL_DOMAIN_CORRECTIONS: Dict[str, str] = {
    "gmial.com": "gmail.com",
    "gmal.com": "gmail.com",
    "gamil.com": "gmail.com",
    "gnail.com": "gmail.com",
    "gmaill.com": "gmail.com",
    "hotmal.com": "hotmail.com",
    "hotmai.com": "hotmail.com",
    "hotamil.com": "hotmail.com",
    "yahooo.com": "yahoo.com",
    "yaho.com": "yahoo.com",
    "outloo.com": "outlook.com",
    "outlok.com": "outlook.com",
}

NAME_PREFIXES = frozenset(
    {
        "mr",
        "mrs",
        "ms",
        "miss",
        "dr",
        "prof",
        "professor",
        "rev",
        "reverend",
        "fr",
        "father",
        "sr",
        "sister",
        "hon",
        "honorable",
        "judge",
        "justice",
        "sir",
        "dame",
        "lord",
        "lady",
        "capt",
        "captain",
        "col",
        "colonel",
        "gen",
        "general",
        "lt",
        "lieutenant",
        "sgt",
        "sergeant",
        "cpl",
        "corporal",
        "pvt",
        "private",
        "adm",
        "admiral",
        "cmdr",
        "commander",
        "maj",
        "major",
    }
)

NAME_SUFFIXES = frozenset(
    {
        "jr",
        "sr",
        "i",
        "ii",
        "iii",
        "iv",
        "v",
        "vi",
        "vii",
        "viii",
        "ix",
        "x",
        "phd",
        "md",
        "dds",
        "dvm",
        "jd",
        "esq",
        "esquire",
        "cpa",
        "rn",
        "rph",
        "pe",
        "ra",
        "aia",
        "faia",
        "ret",
        "retired",
        "usn",
        "usmc",
        "usaf",
        "usa",
    }
)


def _digits(value: str) -> str:
    return re.sub(r"\D", "", value)


def is_valid_e164(phone: str) -> bool:
    if not isinstance(phone, str):
        return False
    return bool(E164_RE.match(phone))


def clean_phone_number(phone: Any, default_country_code: str = "1") -> str:
    """
    Format a phone number as E.164 using digit-count heuristics only.

    The classification is the contract, checked in this order on the digits:
    leading ``+`` kept verbatim; 11 digits starting with 1 (NANP); exactly 10
    digits (default country code prepended); 11 digits starting with 0 (UK
    trunk prefix, rewritten to +44); 12 digits starting with 44; 7-10 digits
    (default country code prepended). Anything else, including numbers with no
    digits or more than 15 digits, is returned unchanged.
    """
    if not isinstance(phone, str) or not phone:
        return ""
    has_plus = phone.strip().startswith("+")
    digits = _digits(phone)

    if not digits or len(digits) > E164_MAX_DIGITS:
        return phone
    if has_plus:
        return f"+{digits}"
    if len(digits) == 11 and digits.startswith("1"):
        return f"+{digits}"
    if len(digits) == 10:
        return f"+{default_country_code}{digits}"
    if len(digits) == 11 and digits.startswith("0"):
        return f"+44{digits[1:]}"
    if len(digits) == 12 and digits.startswith("44"):
        return f"+{digits}"
    if PHONE_MIN_DIGITS <= len(digits) <= 10:
        return f"+{default_country_code}{digits}"

    logger.debug("Unrecognized phone pattern left unchanged: %s", phone)
    return phone


def _split_country_code(digits: str, has_plus: bool, default_country_code: str) -> Tuple[str, str]:
    if has_plus:
        for code, length_matches in KNOWN_COUNTRY_PREFIXES:
            if digits.startswith(code) and length_matches(digits):
                return code, digits[len(code) :]
        if len(digits) > 10:
            code_length = min(len(digits) - 10, 3)
            return digits[:code_length], digits[code_length:]
        return default_country_code, digits
    if len(digits) == 11 and digits.startswith("1"):
        return "1", digits[1:]
    if len(digits) == 11 and digits.startswith("0"):
        return "44", digits[1:]
    return default_country_code, digits


def parse_phone_number(phone: Any, default_country_code: str = "1") -> ParsedPhoneNumber:
    if not isinstance(phone, str) or not phone:
        return ParsedPhoneNumber()

    result = ParsedPhoneNumber(original=phone)
    working = phone
    extension_match = PHONE_EXTENSION_RE.search(working)
    if extension_match:
        working = (working[: extension_match.start()] + working[extension_match.end() :]).strip()

    has_plus = working.strip().startswith("+")
    digits = _digits(working)
    if len(digits) < PHONE_MIN_DIGITS or len(digits) > E164_MAX_DIGITS:
        return result

    if extension_match:
        result.extension = extension_match.group(1)
    country_code, national = _split_country_code(digits, has_plus, default_country_code)
    result.country_code = country_code

    if len(national) >= 10:
        result.area_code = national[:3]
        result.local_number = national[3:]
    elif len(national) >= PHONE_MIN_DIGITS:
        result.local_number = national

    result.e164 = f"+{country_code}{national}"
    if len(national) == 10:
        result.national = f"({national[:3]}) {national[3:6]}-{national[6:]}"
        result.international = f"+{country_code} {national[:3]} {national[3:6]} {national[6:]}"
    elif len(national) == 7:
        result.national = f"{national[:3]}-{national[3:]}"
        result.international = f"+{country_code} {national}"
    else:
        result.national = national
        result.international = f"+{country_code} {national}"

    if result.extension:
        result.national += f" ext. {result.extension}"
        result.international += f" ext. {result.extension}"

    result.is_valid = is_valid_e164(result.e164)
    return result


def normalize_email(email: Any) -> str:
    if not isinstance(email, str) or not email:
        return ""
    normalized = email.strip().lower()
    at_index = normalized.find("@")
    if at_index < 1 or at_index == len(normalized) - 1:
        return normalized
    domain = normalized[at_index + 1 :]
    corrected = EMAIL_DOMAIN_CORRECTIONS.get(domain, domain)
    if corrected != domain:
        logger.debug("Corrected email domain %s -> %s", domain, corrected)
    return normalized[: at_index + 1] + corrected


def is_valid_email(email: Any) -> bool:
    if not isinstance(email, str):
        return False
    candidate = email.strip().lower()
    if not candidate:
        return False
    try:
        validate_email(candidate, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def normalize_name_token(token: str) -> str:
    return (token or "").lower().replace(".", "").replace(",", "")


def _is_suffix_token(token: str) -> bool:
    return normalize_name_token(token) in NAME_SUFFIXES


def build_initials(*parts: str) -> str:
    letters = [part[0].upper() for part in parts if part]
    return ".".join(letters) + ("." if letters else "")


def assign_name_parts(result: ParsedName, tokens: List[str]) -> ParsedName:
    if len(tokens) == 1:
        result.first_name = tokens[0]
    elif len(tokens) == 2:
        result.first_name, result.last_name = tokens
    elif len(tokens) >= 3:
        result.first_name = tokens[0]
        result.middle_name = " ".join(tokens[1:-1])
        result.last_name = tokens[-1]
    result.initials = build_initials(result.first_name, result.middle_name, result.last_name)
    return result


def _reorder_last_first(name: str) -> str:
    last_part, *rest = [part.strip() for part in name.split(",")]
    rest = [part for part in rest if part]
    if not rest:
        return last_part
    given = " ".join(rest).split()
    suffixes: List[str] = []
    while given and _is_suffix_token(given[-1]):
        suffixes.insert(0, given.pop())
    if not given:
        # "John Smith, Jr." carries a suffix after the comma, not a given name
        return " ".join([last_part] + suffixes)
    return " ".join(given + [last_part] + suffixes)


def parse_name(full_name: Any) -> ParsedName:
    result = ParsedName()
    if not isinstance(full_name, str):
        return result
    name = re.sub(r"\s+", " ", full_name.strip())
    if not name:
        return result
    result.full = name

    if "," in name:
        name = _reorder_last_first(name)

    tokens = [token for token in name.split(" ") if token]
    if not tokens:
        return result

    if len(tokens) > 1 and normalize_name_token(tokens[0]) in NAME_PREFIXES:
        result.prefix = tokens.pop(0)

    suffixes: List[str] = []
    while len(tokens) > 1 and _is_suffix_token(tokens[-1]):
        suffixes.insert(0, tokens.pop())
    result.suffix = " ".join(suffixes)

    return assign_name_parts(result, tokens)


def _split_username(cleaned: str) -> List[str]:
    if any(separator in cleaned for separator in "_.-"):
        return [part for part in re.split(r"[_.\-]+", cleaned) if part]
    camel_parts = re.sub(r"([a-z])([A-Z])", r"\1 \2", cleaned).split(" ")
    if len(camel_parts) > 1:
        return camel_parts
    return [cleaned] if cleaned else []


def parse_username(username: Any) -> ParsedName:
    if not isinstance(username, str) or not username:
        return ParsedName()

    cleaned = re.sub(r"^[@#]", "", username)
    cleaned = re.sub(r"[0-9]+$", "", cleaned)
    tokens = [to_title_case(part) for part in _split_username(cleaned)]
    tokens = [token for token in tokens if token]

    result = assign_name_parts(ParsedName(), tokens)
    result.full = " ".join(
        part for part in (result.first_name, result.middle_name, result.last_name) if part
    )
    return result


__all__ = [
    "EMAIL_DOMAIN_CORRECTIONS",
    "NAME_PREFIXES",
    "NAME_SUFFIXES",
    "build_initials",
    "clean_phone_number",
    "is_valid_e164",
    "is_valid_email",
    "normalize_email",
    "parse_name",
    "parse_phone_number",
    "parse_username",
]
