"""
Pricing oracle - rent quote plus safety margin.

The controller refunds anything paid above the actual rent, so the
reveal transaction carries the quote plus 10% to absorb price drift
between the quote and the mined transaction.
"""

import logging
from dataclasses import dataclass

from .ports import RegistrarController

logger = logging.getLogger(__name__)

MARGIN_NUMERATOR = 11
MARGIN_DENOMINATOR = 10


def with_margin(base_price: int) -> int:
    """floor(base_price * 11 / 10), integer arithmetic only."""
    return base_price * MARGIN_NUMERATOR // MARGIN_DENOMINATOR


@dataclass
class PriceOracle:
    controller: RegistrarController

    def quote(self, name: str, duration: int) -> int:
        """Return the wei value to attach to a registration of `name`."""
        base_price = int(self.controller.rent_price(name, duration))
        price = with_margin(base_price)
        logger.debug("Rent quote for %s (%ss): base=%s price=%s", name, duration, base_price, price)
        return price
