from datetime import date, datetime
from decimal import Decimal
from unittest import TestCase

from recepcao_core.core.application.services.formatter_service import FormatterService


class FormatterServiceTests(TestCase):
    def setUp(self):
        self.fmt = FormatterService()

    def test_currency(self):
        self.assertEqual(self.fmt.format_currency(Decimal("1234.56")), "R$ 1.234,56")
        self.assertEqual(self.fmt.format_currency(250), "R$ 250,00")
        self.assertEqual(self.fmt.format_currency(Decimal("1234567.005")), "R$ 1.234.567,01")
        self.assertEqual(FormatterService("US$").format_currency(10), "US$ 10,00")

    def test_phone(self):
        self.assertEqual(self.fmt.format_phone("11987654321"), "(11) 98765-4321")
        self.assertEqual(self.fmt.format_phone("(11) 3456-7890"), "(11) 3456-7890")
        self.assertEqual(self.fmt.format_phone("1134567890"), "(11) 3456-7890")
        self.assertEqual(self.fmt.format_phone("+55 11"), "+55 11")
        self.assertEqual(self.fmt.format_phone(None), "-")

    def test_time_ago(self):
        now = datetime(2026, 10, 19, 12, 0)
        self.assertEqual(self.fmt.format_time_ago(datetime(2026, 10, 19, 11, 59, 30), now), "Agora")
        self.assertEqual(self.fmt.format_time_ago(datetime(2026, 10, 19, 11, 15), now), "45m")
        self.assertEqual(self.fmt.format_time_ago(datetime(2026, 10, 19, 2, 0), now), "10h")
        self.assertEqual(self.fmt.format_time_ago(datetime(2026, 10, 16, 12, 0), now), "3d")
        self.assertEqual(self.fmt.format_time_ago(None, now), "Sem data")

    def test_initials(self):
        self.assertEqual(self.fmt.initials("joão da silva"), "JS")
        self.assertEqual(self.fmt.initials("Ana"), "A")
        self.assertEqual(self.fmt.initials("   "), "?")

    def test_dates(self):
        self.assertEqual(self.fmt.format_date_label(date(2026, 10, 19)), "Segunda, 19 de Outubro")
        self.assertEqual(self.fmt.format_date(datetime(2026, 3, 5, 8, 0)), "05/03/2026")
        self.assertEqual(self.fmt.format_appointment_short(datetime(2026, 3, 5, 8, 5)), "05/03/2026 às 08:05")
        self.assertEqual(self.fmt.format_appointment_short(None), "-")
