# appconfig.py
"""
This module defines the data structures for App Service configuration.
The runtime portion is a tagged union: a web app either runs a custom
container image (DockerRuntime) or a native Java stack (NativeRuntime).
"""

import yaml
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional, Union

DEFAULT_REGION = "westeurope"
DEFAULT_PRICING_TIER_SIZE = "P1v2"

# Size prefix -> tier name, as reported by the app service plan sku
PRICING_TIERS = {
    "F": "Free",
    "D": "Shared",
    "B": "Basic",
    "S": "Standard",
    "P": "Premium",
    "I": "Isolated",
}


class AzureToolkitError(Exception):
    """Base error raised by the App Service configuration helpers."""


class ConfigMergeError(AzureToolkitError):
    pass


class OperatingSystem(str, Enum):
    LINUX = "Linux"
    WINDOWS = "Windows"
    DOCKER = "Docker"

    @classmethod
    def from_string(cls, value: str) -> "OperatingSystem":
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        raise ValueError(f"Unsupported operating system: {value}")


@dataclass(frozen=True)
class PricingTier:
    tier: str
    size: str

    @classmethod
    def from_string(cls, value: str) -> "PricingTier":
        """Parse "P1v2" or "PremiumV2/P1v2"."""
        if "/" in value:
            tier, size = value.split("/", 1)
            return cls(tier=tier, size=size)
        size = value.strip()
        tier = PRICING_TIERS.get(size[:1].upper(), size)
        if size.lower().endswith("v2") or size.lower().endswith("v3"):
            tier = f"{tier}{size[-2:].upper()}"
        return cls(tier=tier, size=size)

    def __str__(self) -> str:
        return f"{self.tier}/{self.size}"


@dataclass
class DockerRuntime:
    image: Optional[str] = None
    registry_url: Optional[str] = None

    @property
    def os(self) -> OperatingSystem:
        return OperatingSystem.DOCKER


@dataclass
class NativeRuntime:
    os: Optional[OperatingSystem] = None
    web_container: Optional[str] = None
    java_version: Optional[str] = None


RuntimeConfig = Union[DockerRuntime, NativeRuntime]


@dataclass
class AppServiceConfig:
    app_name: Optional[str] = None
    resource_group: Optional[str] = None
    subscription_id: Optional[str] = None
    region: Optional[str] = None
    pricing_tier: Optional[PricingTier] = None
    service_plan_name: Optional[str] = None
    service_plan_resource_group: Optional[str] = None
    runtime: Optional[RuntimeConfig] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppServiceConfig":
        """Build a config from a YAML mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in data.items() if k in known}
        if kwargs.get("pricing_tier") is not None:
            kwargs["pricing_tier"] = PricingTier.from_string(str(kwargs["pricing_tier"]))
        if kwargs.get("runtime") is not None:
            kwargs["runtime"] = runtime_from_dict(kwargs["runtime"])
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if f.name == "pricing_tier":
                value = str(value)
            elif f.name == "runtime":
                value = runtime_to_dict(value)
            result[f.name] = value
        return result


def runtime_from_dict(data: Dict[str, Any]) -> RuntimeConfig:
    os_value = data.get("os")
    os_kind = OperatingSystem.from_string(os_value) if os_value else None
    if os_kind is OperatingSystem.DOCKER:
        return DockerRuntime(image=data.get("image"), registry_url=data.get("registry_url"))
    java_version = data.get("java_version")
    return NativeRuntime(
        os=os_kind,
        web_container=data.get("web_container"),
        java_version=str(java_version) if java_version is not None else None,
    )


def runtime_to_dict(runtime: RuntimeConfig) -> Dict[str, Any]:
    result = {"os": runtime.os.value if runtime.os else None}
    for f in fields(runtime):
        value = getattr(runtime, f.name)
        if f.name != "os" and value is not None:
            result[f.name] = value
    return {k: v for k, v in result.items() if v is not None}


def build_default_web_app_config(
    resource_group: str, app_name: str, packaging: Optional[str], java_version: Optional[str]
) -> AppServiceConfig:
    packaging = (packaging or "").lower()
    if packaging == "war":
        web_container = "Tomcat 8.5"
    elif packaging == "ear":
        web_container = "JBoss 7.2"
    else:
        web_container = "Java SE"

    return AppServiceConfig(
        app_name=app_name,
        resource_group=resource_group,
        region=DEFAULT_REGION,
        pricing_tier=PricingTier.from_string(DEFAULT_PRICING_TIER_SIZE),
        runtime=NativeRuntime(
            os=OperatingSystem.LINUX,
            web_container=web_container,
            java_version=java_version,
        ),
    )


def load_config(file_path: str) -> Dict[str, Any]:
    """Load and validate YAML configuration from the given file path."""
    with open(file_path, "r") as file:
        config_data = yaml.safe_load(file)

    # Ensure required keys exist
    required_keys = ["subscription_id", "location", "apps"]
    for key in required_keys:
        if key not in config_data:
            raise ValueError(f"Missing required configuration key: {key}")

    for app in config_data["apps"]:
        for key in ("name", "resource_group"):
            if key not in app:
                raise ValueError(f"App entry is missing required key: {key}")

    return config_data
