from newsharvest.parsers.base import PageParser
from newsharvest.parsers.listing import ListingPageParser

__all__ = ["PageParser", "ListingPageParser"]
