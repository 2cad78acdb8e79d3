"""
Geocoding Providers
Turns a street address into coordinates behind a single interface.
"""
import httpx
import logging
from abc import ABC, abstractmethod

from places_api.core.config import settings
from places_api.core.errors import InternalError, ValidationError
from places_api.core.logger import logs
from places_api.models.place_model import Location


class BaseGeocoder(ABC):
    """Base class for all geocoding providers"""

    @abstractmethod
    async def get_coordinates(self, address: str) -> Location:
        """Resolve an address to a lat/lng pair"""
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        pass


class StaticGeocoder(BaseGeocoder):
    """Returns the same configured point for every address. No lookup is made."""

    def __init__(self, lat: float, lng: float):
        self.location = Location(lat=lat, lng=lng)

    async def get_coordinates(self, address: str) -> Location:
        return self.location.model_copy()

    def get_provider_name(self) -> str:
        return "static"


class NominatimGeocoder(BaseGeocoder):
    """OpenStreetMap Nominatim search API"""

    def __init__(self, base_url: str, client: httpx.AsyncClient | None = None):
        self.base_url = base_url
        self.client = client

    async def get_coordinates(self, address: str) -> Location:
        params = {"q": address, "format": "json", "limit": 1}
        headers = {"User-Agent": "places-api"}

        try:
            if self.client is not None:
                response = await self.client.get(self.base_url, params=params, headers=headers, timeout=10.0)
            else:
                async with httpx.AsyncClient() as client:
                    response = await client.get(self.base_url, params=params, headers=headers, timeout=10.0)
            response.raise_for_status()
            results = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logs.log(logging.ERROR, f"Nominatim request failed for '{address}': {str(e)}")
            raise InternalError("Could not reach the geocoding service.")

        if not results:
            raise ValidationError("Could not find location for the specified address.")

        try:
            first = results[0]
            return Location(lat=float(first["lat"]), lng=float(first["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            logs.log(logging.ERROR, f"Unexpected Nominatim payload for '{address}': {str(e)}")
            raise InternalError("Could not reach the geocoding service.")

    def get_provider_name(self) -> str:
        return "nominatim"


def get_geocoder() -> BaseGeocoder:
    """Initialize the selected geocoder based on settings"""
    provider = settings.GEOCODER.lower()

    if provider == "nominatim":
        return NominatimGeocoder(settings.NOMINATIM_URL)
    if provider != "static":
        logs.log(logging.WARNING, f"Unknown geocoder '{provider}', defaulting to static")
    return StaticGeocoder(settings.STATIC_LAT, settings.STATIC_LNG)
