"""
Display helpers for Brazilian formats.
Currency, documents, phone numbers, dates, durations and text.
"""

import re
import unicodedata
from datetime import date, datetime
from decimal import Decimal

_NON_DIGITS = re.compile(r"\D")


def _digits(value: str | None) -> str:
    return _NON_DIGITS.sub("", value or "")


class BrazilianFormatter:
    """Formats values following Brazilian conventions."""

    FILE_SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")

    @staticmethod
    def format_currency(value: int | float | Decimal | str | None, symbol: str = "R$") -> str:
        """
        Formats monetary values in the Brazilian standard.

        Args:
            value: The value to be formatted.
            symbol: The currency symbol (default: R$).

        Returns:
            str: e.g. "R$ 1.234,56"; None becomes "R$ 0,00".
        """
        if value is None:
            value = 0
        if isinstance(value, str):
            value = Decimal(value.replace(symbol, "").replace(".", "").replace(",", ".").strip() or "0")
        amount = Decimal(value).quantize(Decimal("0.01"))
        sign = "-" if amount < 0 else ""
        formatted = f"{abs(amount):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")
        return f"{sign}{symbol} {formatted}"

    @staticmethod
    def format_phone(phone: str | None) -> str:
        """
        Formats a phone number with area code.

        11 digits -> "(11) 98765-4321", 10 digits -> "(11) 9876-4321".
        A leading 55 country code is dropped. Anything else is returned as is.
        """
        digits = _digits(phone)
        if len(digits) in (12, 13) and digits.startswith("55"):
            digits = digits[2:]
        if len(digits) == 11:
            return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
        if len(digits) == 10:
            return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
        return phone or ""

    @staticmethod
    def format_cpf(cpf: str | None) -> str:
        digits = _digits(cpf)
        if len(digits) != 11:
            return cpf or ""
        return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"

    @staticmethod
    def format_cnpj(cnpj: str | None) -> str:
        digits = _digits(cnpj)
        if len(digits) != 14:
            return cnpj or ""
        return f"{digits[:2]}.{digits[2:5]}.{digits[5:8]}/{digits[8:12]}-{digits[12:]}"

    @staticmethod
    def format_cep(cep: str | None) -> str:
        digits = _digits(cep)
        if len(digits) != 8:
            return cep or ""
        return f"{digits[:5]}-{digits[5:]}"

    @staticmethod
    def format_date(value: date | datetime | None) -> str:
        """dd/mm/yyyy; empty string for None."""
        if value is None:
            return ""
        return value.strftime("%d/%m/%Y")

    @staticmethod
    def format_datetime(value: datetime | None) -> str:
        """dd/mm/yyyy HH:MM; empty string for None."""
        if value is None:
            return ""
        return value.strftime("%d/%m/%Y %H:%M")

    @staticmethod
    def format_duration(minutes: int) -> str:
        """
        Formats a duration given in minutes.

        45 -> "45min", 60 -> "1h", 90 -> "1h 30min".
        """
        hours, mins = divmod(max(int(minutes), 0), 60)
        if hours == 0:
            return f"{mins}min"
        if mins == 0:
            return f"{hours}h"
        return f"{hours}h {mins}min"

    @staticmethod
    def capitalize(text: str | None) -> str:
        if not text:
            return ""
        return text[0].upper() + text[1:].lower()

    @staticmethod
    def capitalize_words(text: str | None) -> str:
        if not text:
            return ""
        return " ".join(BrazilianFormatter.capitalize(word) for word in text.split(" "))

    @staticmethod
    def truncate(text: str | None, max_length: int, suffix: str = "...") -> str:
        if not text:
            return ""
        if len(text) <= max_length:
            return text
        return text[: max(max_length - len(suffix), 0)].rstrip() + suffix

    @staticmethod
    def slugify(text: str | None) -> str:
        """
        Lowercase, accent-free, hyphen-separated slug.

        "Salão Beleza & Cia" -> "salao-beleza-cia"
        """
        if not text:
            return ""
        normalized = unicodedata.normalize("NFKD", text)
        ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
        ascii_text = re.sub(r"[^a-z0-9\s-]", "", ascii_text)
        return re.sub(r"[\s_-]+", "-", ascii_text).strip("-")

    @staticmethod
    def format_percentage(value: float, decimals: int = 0) -> str:
        """0.456 -> "46%" (decimals=0) or "45,6%" (decimals=1)."""
        return f"{value * 100:.{decimals}f}%".replace(".", ",")

    @staticmethod
    def format_file_size(size_bytes: int) -> str:
        """1536 -> "1,5 KB"."""
        if size_bytes <= 0:
            return "0 Bytes"
        size = float(size_bytes)
        unit = 0
        while size >= 1024 and unit < len(BrazilianFormatter.FILE_SIZE_UNITS) - 1:
            size /= 1024
            unit += 1
        text = f"{size:.2f}".rstrip("0").rstrip(".").replace(".", ",")
        return f"{text} {BrazilianFormatter.FILE_SIZE_UNITS[unit]}"
