from .base import RateSource
from .openexchange import OpenExchangeRateSource
from .simulated import SimulatedRateSource

__all__ = ['RateSource', 'OpenExchangeRateSource', 'SimulatedRateSource']
