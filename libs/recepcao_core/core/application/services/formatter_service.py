import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

_NON_DIGITS = re.compile(r"\D")


class FormatterService:
    """
    Formatação de valores para a recepção no padrão brasileiro
    (R$ 1.234,56, (11) 98765-4321, DD/MM/YYYY).
    """

    MONTHS = {
        1: "Janeiro", 2: "Fevereiro", 3: "Março", 4: "Abril",
        5: "Maio", 6: "Junho", 7: "Julho", 8: "Agosto",
        9: "Setembro", 10: "Outubro", 11: "Novembro", 12: "Dezembro",
    }

    WEEK_DAYS = {
        0: "Segunda", 1: "Terça", 2: "Quarta", 3: "Quinta",
        4: "Sexta", 5: "Sábado", 6: "Domingo",
    }

    def __init__(self, currency_symbol: str = "R$"):
        self.currency_symbol = currency_symbol

    def format_currency(self, amount: Decimal | float | int) -> str:
        """
        Valor numérico como moeda BRL, ex.: R$ 1.234,56
        """
        amt = Decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        us_str = f"{amt:,.2f}"  # "1,234.56"
        integer_part, decimal_part = us_str.split(".")
        integer_brl = integer_part.replace(",", ".")
        return f"{self.currency_symbol} {integer_brl},{decimal_part}"

    def format_date(self, d: date | datetime) -> str:
        if isinstance(d, datetime):
            d = d.date()
        return d.strftime("%d/%m/%Y")

    def format_date_label(self, d: date | datetime) -> str:
        """Cabeçalho da agenda, ex.: "Segunda, 19 de Outubro"."""
        return f"{self.WEEK_DAYS[d.weekday()]}, {d.day} de {self.MONTHS[d.month]}"

    def format_appointment_short(self, moment: datetime | None) -> str:
        if moment is None:
            return "-"
        return f"{self.format_date(moment)} às {moment:%H:%M}"

    def format_phone(self, phone: str | None) -> str:
        """
        11 dígitos → (xx) xxxxx-xxxx; 10 dígitos → (xx) xxxx-xxxx.
        Qualquer outra coisa volta como veio.
        """
        if not phone:
            return "-"
        digits = _NON_DIGITS.sub("", phone)
        if len(digits) == 11:  # noqa: PLR2004
            return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"
        if len(digits) == 10:  # noqa: PLR2004
            return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
        return phone

    def format_time_ago(self, since: datetime | None, now: datetime) -> str:
        if since is None:
            return "Sem data"
        if (since.tzinfo is None) != (now.tzinfo is None):
            since, now = since.replace(tzinfo=None), now.replace(tzinfo=None)
        seconds = int((now - since).total_seconds())
        if seconds < 60:  # noqa: PLR2004
            return "Agora"
        if seconds < 3600:  # noqa: PLR2004
            return f"{seconds // 60}m"
        if seconds < 86400:  # noqa: PLR2004
            return f"{seconds // 3600}h"
        return f"{seconds // 86400}d"

    @staticmethod
    def initials(name: str | None) -> str:
        if not name or not name.strip():
            return "?"
        parts = name.split()
        if len(parts) == 1:
            return parts[0][0].upper()
        return (parts[0][0] + parts[-1][0]).upper()
