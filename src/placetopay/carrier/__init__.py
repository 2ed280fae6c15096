"""Carriers connecting services to PlacetoPay."""

from placetopay.carrier.base import Carrier
from placetopay.carrier.rest_carrier import RestCarrier

__all__ = ["Carrier", "RestCarrier"]
