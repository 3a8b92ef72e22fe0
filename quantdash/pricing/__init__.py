"""Option pricing and volatility surface"""

from .options import approx_norm_cdf, generate_volatility_surface, price_option

__all__ = ["approx_norm_cdf", "generate_volatility_surface", "price_option"]
