from .conversion_service import ConversionService
from .currency_service import CurrencyService
from .history_service import HistoryService
from .rate_service import RateService

__all__ = ['ConversionService', 'CurrencyService', 'HistoryService', 'RateService']
