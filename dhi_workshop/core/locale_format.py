"""Locale Formatting — CLDR-backed date/time and currency formatting for the ICU demo.

Invariants:
    - Pure functions: no IO, the clock is passed in by the caller
    - Locale and timezone strings are echoed back exactly as received
    - Malformed locale tags and unknown timezones surface as InvalidLocaleError,
      carrying a message that names the rejected value
    - Well-formed but unknown locale tags fall back to their nearest known
      parent, then to en-US (Intl behaviour)
    - Timezone ids match case-insensitively against the IANA database
    - currency_for_locale() never fails (USD fallback)

Design Decisions:
    - Babel over PyICU: same CLDR data, pure-Python wheel, no libicu in the
      hardened runtime image
    - Date rendered with the "full" style and time with the "long" style, joined
      by the locale's "atTime" pattern where one is known, as Intl.DateTimeFormat
      {dateStyle: "full", timeStyle: "long"}
    - Extension (-u-, -t-) and private-use (-x-) sequences are dropped before
      lookup: Babel has no data for them
"""

import re
import zoneinfo
from dataclasses import asdict, dataclass
from datetime import datetime, timezone, tzinfo
from functools import lru_cache

from babel import Locale, UnknownLocaleError
from babel.dates import (
    format_date, format_time, get_datetime_format, get_timezone,
)
from babel.numbers import format_currency

from dhi_workshop.core.errors import InvalidLocaleError

DEFAULT_CURRENCY = "USD"
FALLBACK_LOCALE = "en_US"

_CURRENCY_BY_LOCALE: dict[str, str] = {
    "en-US": "USD",
    "en-GB": "GBP",
    "fr-FR": "EUR",
    "de-DE": "EUR",
    "ja-JP": "JPY",
    "zh-CN": "CNY",
    "es-ES": "EUR",
    "it-IT": "EUR",
    "pt-BR": "BRL",
    "ko-KR": "KRW",
}

# CLDR dateTimeFormats-atTime (full); Babel ships only the standard patterns
_AT_TIME_PATTERNS: dict[str, str] = {
    "en": "{1} 'at' {0}",
    "de": "{1} 'um' {0}",
    "fr": "{1} 'à' {0}",
}

_SUBTAG = re.compile(r"^[A-Za-z0-9]{1,8}$")
_LANGUAGE = re.compile(r"^(?:[A-Za-z]{2,3}|[A-Za-z]{5,8})$")


@dataclass(frozen=True)
class TimeReport:
    """Everything GET /api/time answers with."""
    locale: str
    tz: str
    formatted: str
    number_example: str
    timestamp: str
    icu_data_path: str

    def to_dict(self) -> dict:
        return asdict(self)


def supported_locales() -> list[str]:
    """Locales with a dedicated currency in the demo."""
    return list(_CURRENCY_BY_LOCALE)


def currency_for_locale(locale: str) -> str:
    """ISO 4217 code for the demo amount; exact tag match, USD otherwise."""
    return _CURRENCY_BY_LOCALE.get(locale, DEFAULT_CURRENCY)


def _core_subtags(tag: str) -> list[str]:
    """Language/script/region/variant subtags of a well-formed tag.

    Everything from the first singleton (u, t, x, ...) on is dropped.
    """
    subtags = re.split(r"[-_]", tag)
    if not all(_SUBTAG.match(s) for s in subtags) or not _LANGUAGE.match(subtags[0]):
        raise InvalidLocaleError(
            f"Incorrect locale information provided: {tag!r}", field="locale",
        )
    core = []
    for subtag in subtags:
        if len(subtag) == 1:
            break
        core.append(subtag)
    return core


def parse_locale(tag: str) -> Locale:
    """Parse a BCP-47 tag (en-US or en_US) into a Babel Locale."""
    core = _core_subtags(tag)
    while core:
        try:
            return Locale.parse("_".join(core), sep="_")
        except (UnknownLocaleError, ValueError):
            core.pop()
    return Locale.parse(FALLBACK_LOCALE)


@lru_cache
def _zone_ids() -> dict[str, str]:
    """Lower-cased IANA id → canonical spelling."""
    return {name.lower(): name for name in zoneinfo.available_timezones()}


def resolve_timezone(tz: str) -> tzinfo:
    """Resolve an IANA zone id (e.g. Europe/Paris, europe/paris)."""
    canonical = _zone_ids().get(tz.lower())
    if canonical is None:
        raise InvalidLocaleError(f"Unknown timezone {tz}", field="tz")
    try:
        return get_timezone(canonical)
    except (LookupError, ValueError, OSError) as exc:
        raise InvalidLocaleError(str(exc), field="tz") from exc


def format_datetime_full(now: datetime, locale: Locale, zone: tzinfo) -> str:
    """Full date + long time of `now` as seen in `zone`."""
    local_now = now.astimezone(zone)
    date_part = format_date(local_now.date(), format="full", locale=locale)
    time_part = format_time(now, format="long", tzinfo=zone, locale=locale)
    pattern = _AT_TIME_PATTERNS.get(
        locale.language, get_datetime_format("full", locale=locale),
    )
    return (
        pattern.replace("'", "")
        .replace("{0}", time_part)
        .replace("{1}", date_part)
    )


def format_sample_currency(amount: float, locale_tag: str, locale: Locale) -> str:
    """Currency-style rendering of `amount` in the locale's demo currency."""
    return format_currency(
        amount, currency_for_locale(locale_tag), locale=locale,
    )


def iso_timestamp(now: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix."""
    utc = now.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_time_report(
    locale_tag: str,
    tz: str,
    now: datetime,
    icu_data_path: str | None = None,
    amount: float = 12345.67,
) -> TimeReport:
    """Format `now` for the given locale and timezone.

    Raises InvalidLocaleError when either identifier is rejected.
    """
    locale = parse_locale(locale_tag)
    zone = resolve_timezone(tz)
    return TimeReport(
        locale=locale_tag,
        tz=tz,
        formatted=format_datetime_full(now, locale, zone),
        number_example=format_sample_currency(amount, locale_tag, locale),
        timestamp=iso_timestamp(now),
        icu_data_path=icu_data_path or "built-in",
    )
