# regions.py
"""
Azure region catalog: the regions App Service can be deployed to,
per subscription.
"""

import pulumi
from typing import Callable, Dict, List, Optional, Sequence, TypeVar

from appconfig import AzureToolkitError

AZURE_LOCATION_ABBREVIATIONS = {
    "eastus": "eus",
    "eastus2": "eus2",
    "westus": "wus",
    "westus2": "wus2",
    "westus3": "wus3",
    "centralus": "cus",
    "northcentralus": "ncus",
    "southcentralus": "scus",
    "canadacentral": "ccc",
    "canadaeast": "cce",
    "brazilsouth": "brs",
    "brazilsoutheast": "brse",
    "northeurope": "ne",
    "westeurope": "we",
    "uksouth": "uks",
    "ukwest": "ukw",
    "francecentral": "frc",
    "francesouth": "frs",
    "germanywestcentral": "gwc",
    "germanynorth": "gn",
    "norwayeast": "nwe",
    "norwaywest": "nww",
    "swedencentral": "swc",
    "switzerlandnorth": "swn",
    "switzerlandwest": "sww",
    "uaenorth": "uaen",
    "uaecentral": "uaec",
    "australiaeast": "aue",
    "australiasoutheast": "ause",
    "australiacentral": "auc",
    "australiacentral2": "auc2",
    "japaneast": "jpe",
    "japanwest": "jpw",
    "koreacentral": "kc",
    "koreasouth": "ks",
    "southeastasia": "sea",
    "eastasia": "ea",
    "southindia": "si",
    "centralindia": "ci",
    "westindia": "wi",
    "southafricanorth": "san",
    "southafricawest": "saw",
    "qatarcentral": "qc",
    "polandcentral": "plc",
    "israelcentral": "ilc",
    "israelnorth": "iln",
}

T = TypeVar("T")


def get_abbreviation(location: str) -> str:
    # If the location is recognized, use abbreviation; else fallback to first 3 letters
    return AZURE_LOCATION_ABBREVIATIONS.get(location.lower(), location[:3].lower())


def normalize_region(name: str) -> str:
    """Turn display names such as "West Europe" into "westeurope"."""
    return name.replace(" ", "").lower()


def select_first_option_if_current_invalid(name: str, options: Sequence[T], value: Optional[T]) -> T:
    if not options:
        raise AzureToolkitError(f"No {name} is available")
    if value in options:
        return value
    return options[0]


class RegionCatalog:
    """Regions supported by App Service for each subscription.

    ``supported_regions`` maps a subscription id to its region names, in
    preference order. Subscriptions without an entry get the public region
    list. A ``lookup`` callable replaces the mapping entirely, e.g. to query
    the management API.
    """

    def __init__(
        self,
        supported_regions: Optional[Dict[str, List[str]]] = None,
        lookup: Optional[Callable[[str], Sequence[str]]] = None,
    ):
        self.supported_regions = {
            sub: [normalize_region(r) for r in regions]
            for sub, regions in (supported_regions or {}).items()
        }
        self.lookup = lookup

    @classmethod
    def from_config(cls, config_data: dict) -> "RegionCatalog":
        return cls(supported_regions=config_data.get("supported_regions"))

    def list_supported_regions(self, subscription_id: str) -> List[str]:
        if self.lookup is not None:
            return [normalize_region(r) for r in self.lookup(subscription_id)]
        regions = self.supported_regions.get(subscription_id)
        if regions is None:
            pulumi.log.debug(
                f"No supported regions configured for subscription '{subscription_id}', using public regions."
            )
            return list(AZURE_LOCATION_ABBREVIATIONS)
        return list(regions)
