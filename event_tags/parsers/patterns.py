"""Compiled tag patterns.

Every regular expression the extractors use is built and compiled here, once,
at import time. Tags are single-line and never nest:

    keyed tag   [KEY: value]       e.g. [SESSION: 2025-06-01 18:00-20:00]
    bare tag    [WORD WORD]        e.g. [STAGE], [TOUS LES CLUBS]

Value-level patterns (dates, times, amounts, postal codes) run on
accent-folded, lower-cased text.
"""

import re
from typing import Dict

_LETTERS = "A-Za-zÀ-ÖØ-öø-ÿ"
_WORD = rf"[{_LETTERS}]+"

ANY_TAG = re.compile(
    rf"\[[ \t]*(?:"
    rf"(?P<key>{_WORD}(?:[ _-]{_WORD})*)[ \t]*:(?P<value>[^\[\]\n]*)"
    rf"|(?P<token>{_WORD}(?:[ '_-]{_WORD})*)[ \t]*"
    rf")\]"
)

# Any bracketed run on one line, used to scrub a raw title
BRACKETED = re.compile(r"\[[^\[\]\n]*\]")

# Folded key -> tag family
KEY_FAMILIES: Dict[str, str] = {
    "SESSION": "session",
    "SESSIONS": "session",
    "DATES": "session",
    "DATE": "date",
    "HORAIRE": "time",
    "HORAIRES": "time",
    "HEURE": "time",
    "TIME": "time",
    "PRIX": "price",
    "PRICE": "price",
    "TARIF": "tariff",
    "TARIFS": "tariff",
    "TARIFF": "tariff",
    "TARIFFS": "tariff",
    "LIEU": "venue",
    "VENUE": "venue",
    "SALLE": "venue",
    "ADRESSE": "address",
    "ADDRESS": "address",
    "CAPACITE": "capacity",
    "CAPACITY": "capacity",
    "PLACES": "capacity",
    "TYPE": "event_type",
    "CLUB": "club",
    "CLUBS": "club",
}

# --- dates -----------------------------------------------------------------

FRENCH_MONTHS: Dict[str, int] = {
    "janvier": 1, "janv": 1, "jan": 1,
    "fevrier": 2, "fevr": 2, "fev": 2,
    "mars": 3, "mar": 3,
    "avril": 4, "avr": 4,
    "mai": 5,
    "juin": 6,
    "juillet": 7, "juil": 7,
    "aout": 8,
    "septembre": 9, "sept": 9, "sep": 9,
    "octobre": 10, "oct": 10,
    "novembre": 11, "nov": 11,
    "decembre": 12, "dec": 12,
}

_WEEKDAY = r"(?:lundi|mardi|mercredi|jeudi|vendredi|samedi|dimanche)"
_MONTH = "|".join(sorted(FRENCH_MONTHS, key=len, reverse=True))

_ISO_DATE = r"(?P<iso_y>\d{4})-(?P<iso_m>\d{1,2})-(?P<iso_d>\d{1,2})"
_DMY_DATE = r"(?P<dmy_d>\d{1,2})[/.-](?P<dmy_m>\d{1,2})[/.-](?P<dmy_y>\d{4})"
_FR_DATE = (
    rf"(?P<fr_d>\d{{1,2}})(?:er)?\s+(?P<fr_m>{_MONTH})\.?\s+(?P<fr_y>\d{{4}})"
)

# A leading weekday ("samedi 01/06/2025") is part of the token
DATE_TOKEN = re.compile(
    rf"(?<!\d)(?:{_WEEKDAY}\s+)?(?:{_ISO_DATE}|{_DMY_DATE}|{_FR_DATE})(?!\d)"
)

# --- times -----------------------------------------------------------------

_TIME = r"\d{1,2}(?:(?:[h:]\d{2})?\s*[ap]\.?m\b\.?|[h:]\d{2}|h)"

TIME_VALUE = re.compile(
    r"(?P<hour>\d{1,2})(?:[h:](?P<minute>\d{2})?)?\s*(?:(?P<period>[ap])\.?m\.?)?"
)
TIME_RANGE = re.compile(
    rf"(?<!\d)(?P<start>{_TIME})(?:(?:\s*(?:-|–|—)\s*|\s+(?:a|to)\s+)(?P<end>{_TIME}))?"
)

# --- prices ----------------------------------------------------------------

CURRENCY_CODES: Dict[str, str] = {
    "€": "EUR",
    "eur": "EUR",
    "euro": "EUR",
    "euros": "EUR",
    "$": "USD",
    "usd": "USD",
    "£": "GBP",
    "gbp": "GBP",
    "chf": "CHF",
}

_CURRENCY = r"(?:€|euros?\b|eur\b|\$|usd\b|£|gbp\b|chf\b)"
_NUMBER = r"\d+(?:[.,]\d+)?"

AMOUNT = re.compile(
    rf"(?:(?P<prefix>{_CURRENCY})\s*)?(?P<number>{_NUMBER})(?:\s*(?P<suffix>{_CURRENCY}))?",
    re.IGNORECASE,
)
TARIFF_ENTRY = re.compile(
    # The label starts and ends on a non-space so it never competes with \s* for blanks
    rf"[\s,;|]*(?P<label>[^:|;=\s](?:[^:|;=]*?[^:|;=\s])?)\s*[:|=]\s*"
    rf"(?P<amount>(?:{_CURRENCY}\s*)?{_NUMBER}(?:\s*{_CURRENCY})?)"
    rf"\s*(?:[,;|]|$)",
    re.IGNORECASE,
)

# --- locations -------------------------------------------------------------

POSTAL_LOCALITY = re.compile(
    rf"(?:^|[\s,])(?P<postal>\d{{5}})\s+(?P<city>[{_LETTERS}][^,\d]*?)"
    rf"\s*(?:,\s*[{_LETTERS}][^,\d]*)?\s*$"
)

# --- capacity --------------------------------------------------------------

INTEGER = re.compile(r"[+-]?\d+")
