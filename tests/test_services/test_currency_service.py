from decimal import Decimal

import pytest

from application.services import CurrencyService
from domain.models.catalog import LISTED_CURRENCIES
from domain.models.currency import CurrencyInfo


@pytest.fixture
def service(rate_store):
    return CurrencyService(rate_store)


class TestSupportedCurrencies:
    def test_returns_one_entry_per_listed_currency_in_order(self, service):
        currencies = service.get_supported_currencies()

        assert len(currencies) == len(LISTED_CURRENCIES) == 15
        assert [c.code for c in currencies] == list(LISTED_CURRENCIES)
        assert all(isinstance(c, CurrencyInfo) for c in currencies)

    def test_rates_are_base_units_per_currency_unit(self, service, rate_store):
        for info in service.get_supported_currencies():
            stored = rate_store.get(info.code, 'YER')
            if stored is None:
                continue
            assert info.rate_to_base == stored.rate
            assert info.volatility == stored.volatility_index

    def test_usd_entry(self, service):
        usd = next(c for c in service.get_supported_currencies() if c.code == 'USD')

        assert usd.name == 'US Dollar'
        assert usd.symbol == '$'
        assert usd.region == 'Americas'
        assert usd.rate_to_base == Decimal('250')
        assert usd.volatility == Decimal('0.15')

    def test_base_currency_defaults_to_unit_rate(self, service):
        yer = service.get_supported_currencies()[0]

        assert yer.code == 'YER'
        assert yer.symbol == '﷼'
        assert yer.rate_to_base == 1
        assert yer.volatility == 0

    def test_listed_currency_without_descriptor_or_rate_falls_back(self, service):
        lbp = next(c for c in service.get_supported_currencies() if c.code == 'LBP')

        assert lbp.name == 'LBP'
        assert lbp.symbol == 'LBP'
        assert lbp.region == 'Global'
        assert lbp.rate_to_base == 1
        assert lbp.volatility == 0

    def test_rates_follow_store_updates(self, service, rate_store):
        from dataclasses import replace

        rate_store.put(replace(rate_store.get('EUR', 'YER'), rate=Decimal('275')))

        eur = next(c for c in service.get_supported_currencies() if c.code == 'EUR')
        assert eur.rate_to_base == Decimal('275')


class TestFormatCurrency:
    def test_usd_in_english_puts_symbol_first(self, service):
        assert service.format_currency(1234.5, 'USD', 'en-US') == '$1,234.50'

    def test_arabic_locale_puts_symbol_after_number(self, service):
        assert service.format_currency(1234.5, 'YER', 'ar-YE') == '1٬234٫50 ﷼'

    def test_arabic_locale_uses_its_own_separators(self, service):
        assert service.format_currency(Decimal('1000000'), 'SAR', 'ar-YE') == '1٬000٬000٫00 ر.س'

    def test_default_locale_is_arabic(self, service):
        assert service.format_currency(10, 'SAR').endswith(' ر.س')

    def test_locale_controls_separators(self, service):
        assert service.format_currency(Decimal('1234.5'), 'EUR', 'de-DE') == '€1.234,50'

    def test_three_decimal_currencies(self, service):
        assert service.format_currency(1234.5, 'KWD', 'en-US') == 'د.ك1,234.500'
        assert service.format_currency(2, 'OMR', 'en-US') == 'ر.ع.2.000'

    def test_rounds_half_up(self, service):
        assert service.format_currency(Decimal('0.125'), 'USD', 'en-US') == '$0.13'

    def test_unknown_currency_uses_code_as_symbol(self, service):
        assert service.format_currency(1234.5, 'XYZ', 'en-US') == 'XYZ1,234.50'

    def test_unknown_locale_falls_back_to_default_rules(self, service):
        assert service.format_currency(1234.5, 'USD', 'zz-ZZ') == '$1,234.50'

    def test_lowercase_currency_code(self, service):
        assert service.format_currency(5, 'usd', 'en-US') == '$5.00'
