"""Unit tests for the region catalog."""

import pytest

from appconfig import AzureToolkitError
from regions import (
    AZURE_LOCATION_ABBREVIATIONS,
    RegionCatalog,
    get_abbreviation,
    normalize_region,
    select_first_option_if_current_invalid,
)


def test_get_abbreviation():
    assert get_abbreviation("WestEurope") == "we"
    assert get_abbreviation("atlantis") == "atl"


def test_normalize_region():
    assert normalize_region("West Europe") == "westeurope"


class TestSelectFirstOptionIfCurrentInvalid:
    def test_keeps_valid_value(self):
        assert select_first_option_if_current_invalid("region", ["eastus", "westus"], "westus") == "westus"

    def test_replaces_invalid_value(self):
        assert select_first_option_if_current_invalid("region", ["eastus", "westus"], "westeurope") == "eastus"

    def test_no_options(self):
        with pytest.raises(AzureToolkitError, match="No region is available"):
            select_first_option_if_current_invalid("region", [], "westus")


class TestRegionCatalog:
    def test_configured_subscription(self):
        catalog = RegionCatalog.from_config({"supported_regions": {"sub": ["North Europe", "eastus"]}})
        assert catalog.list_supported_regions("sub") == ["northeurope", "eastus"]

    def test_unconfigured_subscription_gets_public_regions(self):
        catalog = RegionCatalog.from_config({})
        assert catalog.list_supported_regions("sub") == list(AZURE_LOCATION_ABBREVIATIONS)

    def test_lookup_overrides_mapping(self):
        catalog = RegionCatalog(supported_regions={"sub": ["eastus"]}, lookup=lambda sub: ["Japan East"])
        assert catalog.list_supported_regions("sub") == ["japaneast"]

    def test_lookup_failure_propagates(self):
        def lookup(subscription_id):
            raise RuntimeError("forbidden")

        with pytest.raises(RuntimeError, match="forbidden"):
            RegionCatalog(lookup=lookup).list_supported_regions("sub")
