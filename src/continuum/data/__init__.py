from continuum.data.prices import LiveQuote, PriceSource

__all__ = ["LiveQuote", "PriceSource"]
