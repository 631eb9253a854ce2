from .fxratesapi import FxRatesAPIProvider

__all__ = ['FxRatesAPIProvider']
