"""
Localized Messages
English and French message bundles.

Bundles are immutable. Selecting a locale is a lookup, never a mutation,
and callers receive the bundle they render with.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from app.utils.location import miles_to_km

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"


@dataclass(frozen=True)
class MessageBundle:
    """All user-facing text for one locale"""
    locale: str
    uses_km: bool
    messages: Mapping[str, str]
    placeholders: Mapping[str, str]

    def text(self, key: str) -> str:
        return self.messages[key]

    def no_kiosks_found(self, radius_miles: float) -> str:
        """Nothing-nearby notice for the radius actually searched"""
        if self.uses_km:
            radius = f"{round(miles_to_km(radius_miles))}"
        else:
            radius = f"{radius_miles:g}"
        return self.messages["error_noKiosksFound"].format(radius=radius)

    def placeholder(self, country: str) -> str:
        return self.placeholders.get(country, self.messages["defaultPlaceholder"])

    @property
    def distance_unit(self) -> str:
        return self.messages["kmUnit"] if self.uses_km else self.messages["milesUnit"]

    def to_dict(self) -> dict:
        return {
            "locale": self.locale,
            "distance_unit": self.distance_unit,
            "messages": dict(self.messages),
            "placeholders": dict(self.placeholders),
        }


_ENGLISH = MessageBundle(
    locale="en",
    uses_km=False,
    messages=MappingProxyType({
        "title": "Station locator",
        "subtitle": "Find available chargers or return locations",
        "countryLabel": "Country",
        "postalCodeLabel": "Postal Code",
        "searchButton": "Search",
        "orSeparator": "or",
        "gpsButton": "Use My Current Location",
        "defaultPlaceholder": "Enter postal code",
        "milesUnit": "miles",
        "kmUnit": "km",
        "walkingDirections": "Walking Directions",
        "drivingDirections": "Driving Directions",
        "showDrivingToggleLabel": "Show driving directions",
        "availableChargers": "Available Chargers",
        "availableSlots": "Empty Slots",
        "loadingKiosks": "Loading available kiosks...",
        "findingLocation": "Finding locations near you...",
        "warning_connectivity": (
            "Warning: Limited connectivity. Charger and slot counts might not be accurate."
        ),
        "error_loadFailed": "Failed to load kiosk data. Please try again later.",
        "error_noKiosksFound": (
            "No kiosks found within {radius} miles of your location."
        ),
        "error_noQrKiosksFound": "Could not find the specified kiosks.",
        "error_gpsPermission": "GPS permission denied or location unavailable.",
        "error_geolocationNotSupported": "Geolocation is not supported by your browser.",
        "error_invalidPostalCode": (
            "The location service could not find this postal code. "
            "Please try a different code or use your GPS location."
        ),
        "error_postalCodeNotFound": "Could not find location data for this postal code.",
        "error_searchFailed": "Could not perform search.",
        "initialPrompt": "Please select a search method to find nearby kiosks.",
    }),
    placeholders=MappingProxyType({
        "us": "Enter Zip Code (e.g., 90210)",
        "fr": "Enter Postal Code (e.g., 75001)",
        "ca": "Enter Postal Code (e.g., A1A 1A1)",
    }),
)

_FRENCH = MessageBundle(
    locale="fr",
    uses_km=True,
    messages=MappingProxyType({
        "title": "Localisateur de Bornes",
        "subtitle": "Trouvez des batteries ou des points de restitution disponibles",
        "countryLabel": "Pays",
        "postalCodeLabel": "Code Postal",
        "searchButton": "Rechercher",
        "orSeparator": "ou",
        "gpsButton": "Utiliser ma position actuelle",
        "defaultPlaceholder": "Entrez le code postal",
        "milesUnit": "miles",
        "kmUnit": "km",
        "walkingDirections": "Itinéraire à pied",
        "drivingDirections": "Itinéraire en voiture",
        "showDrivingToggleLabel": "Afficher l’itinéraire en voiture",
        "availableChargers": "Chargeurs disponibles",
        "availableSlots": "Emplacements vides",
        "loadingKiosks": "Chargement des kiosques disponibles...",
        "findingLocation": "Recherche de votre position...",
        "warning_connectivity": (
            "Avertissement : connectivité limitée. Le nombre de chargeurs et "
            "d'emplacements peut ne pas être exact."
        ),
        "error_loadFailed": (
            "Échec du chargement des données des kiosques. Veuillez réessayer plus tard."
        ),
        "error_noKiosksFound": (
            "Aucun kiosque trouvé à moins de {radius} km de votre emplacement."
        ),
        "error_noQrKiosksFound": "Impossible de trouver les kiosques spécifiés.",
        "error_gpsPermission": "Permission GPS refusée ou emplacement non disponible.",
        "error_geolocationNotSupported": (
            "La géolocalisation n'est pas prise en charge par ce navigateur."
        ),
        "error_invalidPostalCode": (
            "Le service de localisation n'a pas pu trouver ce code postal. "
            "Veuillez essayer un autre code ou utiliser votre position GPS."
        ),
        "error_postalCodeNotFound": (
            "Impossible de trouver les données de localisation pour ce code postal."
        ),
        "error_searchFailed": "La recherche n'a pas pu être effectuée.",
        "initialPrompt": (
            "Veuillez sélectionner une méthode de recherche pour trouver "
            "les kiosques à proximité."
        ),
    }),
    placeholders=MappingProxyType({
        "us": "Entrez le code ZIP (ex: 90210)",
        "fr": "Entrez le code postal (ex: 75001)",
        "ca": "Entrez le code postal (ex: A1A 1A1)",
    }),
)

BUNDLES: Mapping[str, MessageBundle] = MappingProxyType({
    "en": _ENGLISH,
    "fr": _FRENCH,
})


def get_bundle(locale: str) -> MessageBundle:
    """
    Get the message bundle for a locale tag.

    Accepts region-qualified tags ("fr-CA") and falls back to English for
    anything unknown.
    """
    language = (locale or "").strip().lower().replace("_", "-").split("-")[0]
    bundle = BUNDLES.get(language)
    if bundle is None:
        logger.debug(f"Unknown locale {locale!r}, using {DEFAULT_LOCALE}")
        return BUNDLES[DEFAULT_LOCALE]
    return bundle


def supported_locales() -> list[str]:
    return list(BUNDLES)
