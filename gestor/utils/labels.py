"""Human-readable period labels."""

from __future__ import annotations

from typing import Dict, Optional

from .periods import AllTime, Day, Month, Week, Year, parse_period

DEFAULT_LOCALE = "en"

LOCALES: Dict[str, Dict[str, object]] = {
    "en": {
        "all": "Entire history",
        "year": "Year {year}",
        "week": "Week {week} of {year}",
        "month": "{month_name} {year}",
        "day": "{weekday}, {month_name} {day}, {year}",
        "months": (
            "January", "February", "March", "April", "May", "June",
            "July", "August", "September", "October", "November", "December",
        ),
        "weekdays": (
            "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
        ),
    },
    "pt-BR": {
        "all": "Todo o Período",
        "year": "Ano de {year}",
        "week": "Semana {week} de {year}",
        "month": "{month_name} de {year}",
        "day": "{weekday}, {day} de {month_name} de {year}",
        "months": (
            "janeiro", "fevereiro", "março", "abril", "maio", "junho",
            "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
        ),
        "weekdays": (
            "segunda-feira", "terça-feira", "quarta-feira", "quinta-feira",
            "sexta-feira", "sábado", "domingo",
        ),
    },
}


def resolve_locale(locale: Optional[str]) -> Dict[str, object]:
    """Locale table for ``locale``; ``pt_BR``/``pt`` style names fall back sensibly."""
    if not locale:
        return LOCALES[DEFAULT_LOCALE]
    name = str(locale).replace("_", "-")
    if name in LOCALES:
        return LOCALES[name]
    lang = name.split("-")[0].lower()
    for key, table in LOCALES.items():
        if key.split("-")[0].lower() == lang:
            return table
    return LOCALES[DEFAULT_LOCALE]


def period_label(granularity: str, value: Optional[str], locale: Optional[str] = None) -> str:
    """Display label for a period; "" when the value cannot be read."""
    table = resolve_locale(locale)
    if granularity == "all":
        return str(table["all"])

    period = parse_period(granularity, value)
    if period is None or isinstance(period, AllTime):
        return ""

    if isinstance(period, Year):
        return str(table["year"]).format(year=f"{period.year:04d}")
    if isinstance(period, Month):
        return str(table["month"]).format(
            month_name=table["months"][period.month - 1],
            year=f"{period.year:04d}",
        )
    if isinstance(period, Week):
        return str(table["week"]).format(week=period.token, year=f"{period.year:04d}")
    if isinstance(period, Day):
        d = period.day
        return str(table["day"]).format(
            weekday=table["weekdays"][d.weekday()],
            day=d.day,
            month_name=table["months"][d.month - 1],
            year=f"{d.year:04d}",
        )
    return ""


__all__ = ["DEFAULT_LOCALE", "LOCALES", "period_label", "resolve_locale"]
