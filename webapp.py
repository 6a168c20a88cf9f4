# webapp.py
"""
Read-only handles over live App Service resources, backed by the
pulumi_azure_native.web invokes.
"""

import pulumi
import pulumi_azure_native as azure_native
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from appconfig import OperatingSystem, PricingTier
from regions import normalize_region

SETTING_DOCKER_IMAGE = "DOCKER_CUSTOM_IMAGE_NAME"
SETTING_REGISTRY_SERVER = "DOCKER_REGISTRY_SERVER_URL"
DOCKER_FX_PREFIX = "DOCKER|"

# linux_fx_version stack / windows java_container -> web container name
WEB_CONTAINERS = {
    "JAVA": "Java SE",
    "TOMCAT": "Tomcat",
    "JBOSSEAP": "JBoss",
    "JETTY": "Jetty",
}


@dataclass
class RuntimeDescriptor:
    os: OperatingSystem
    web_container: Optional[str] = None
    java_version: Optional[str] = None


def parse_resource_id(resource_id: str) -> Dict[str, str]:
    """Split an ARM id into its key/value segments.

    "/subscriptions/s/resourceGroups/rg/providers/Microsoft.Web/serverfarms/plan"
    gives {"subscriptions": "s", "resourcegroups": "rg", "serverfarms": "plan", ...}.
    Keys are lower-cased.
    """
    parts = [p for p in (resource_id or "").split("/") if p]
    segments = {}
    for key, value in zip(parts[0::2], parts[1::2]):
        segments[key.lower()] = value
    return segments


def _web_container(stack: str, version: Optional[str]) -> str:
    name = WEB_CONTAINERS.get(stack.upper(), stack)
    if name == "Java SE" or not version:
        return name
    return f"{name} {version}"


def _split_linux_fx(fx_version: str) -> Tuple[str, Optional[str], Optional[str]]:
    # "TOMCAT|9.0-java11" -> ("TOMCAT", "9.0", "java11"), "JAVA|11-java11" -> ("JAVA", "11", "java11")
    stack, _, version = fx_version.partition("|")
    if "-" in version:
        container_version, java_version = version.split("-", 1)
    else:
        container_version, java_version = version or None, None
    if stack.upper() == "JAVA" and java_version is None:
        java_version = container_version
    return stack, container_version, java_version


class WebApp:
    """A live web app: its ARM properties, site config and app settings."""

    def __init__(self, result: Any, app_settings: Optional[Dict[str, str]] = None):
        self.result = result
        self._app_settings = dict(app_settings or {})

    @classmethod
    def get(cls, name: str, resource_group_name: str) -> "WebApp":
        result = azure_native.web.get_web_app(name=name, resource_group_name=resource_group_name)
        settings = azure_native.web.list_web_app_application_settings(
            name=name, resource_group_name=resource_group_name
        )
        pulumi.log.debug(f"Fetched web app '{name}' in resource group '{resource_group_name}'")
        return cls(result, settings.properties)

    @property
    def name(self) -> str:
        return self.result.name

    @property
    def id(self) -> str:
        return self.result.id

    @property
    def resource_group(self) -> str:
        resource_group = getattr(self.result, "resource_group", None)
        return resource_group or parse_resource_id(self.id).get("resourcegroups")

    @property
    def region(self) -> Optional[str]:
        location = self.result.location
        return normalize_region(location) if location else None

    @property
    def app_settings(self) -> Dict[str, str]:
        return self._app_settings

    @property
    def service_plan_id(self) -> Optional[str]:
        return self.result.server_farm_id

    @property
    def _site_config(self) -> Any:
        return self.result.site_config

    def _fx_version(self) -> str:
        site_config = self._site_config
        if site_config is None:
            return ""
        return site_config.linux_fx_version or site_config.windows_fx_version or ""

    def is_docker(self) -> bool:
        if self._fx_version().upper().startswith(DOCKER_FX_PREFIX):
            return True
        image_setting = self.app_settings.get(SETTING_DOCKER_IMAGE)
        return bool(image_setting and image_setting.strip())

    @property
    def docker_image_name(self) -> Optional[str]:
        fx_version = self._fx_version()
        if not fx_version.upper().startswith(DOCKER_FX_PREFIX):
            return None
        return fx_version[len(DOCKER_FX_PREFIX):] or None

    @property
    def is_linux(self) -> bool:
        kind = (self.result.kind or "").lower()
        return "linux" in kind.split(",")

    @property
    def runtime(self) -> RuntimeDescriptor:
        site_config = self._site_config
        if self.is_linux:
            fx_version = site_config.linux_fx_version if site_config else None
            if not fx_version:
                return RuntimeDescriptor(os=OperatingSystem.LINUX)
            stack, container_version, java_version = _split_linux_fx(fx_version)
            return RuntimeDescriptor(
                os=OperatingSystem.LINUX,
                web_container=_web_container(stack, container_version),
                java_version=java_version,
            )

        if site_config is None or not site_config.java_container:
            return RuntimeDescriptor(
                os=OperatingSystem.WINDOWS,
                java_version=site_config.java_version if site_config else None,
            )
        return RuntimeDescriptor(
            os=OperatingSystem.WINDOWS,
            web_container=_web_container(site_config.java_container, site_config.java_container_version),
            java_version=site_config.java_version,
        )


class AppServicePlan:
    """A live app service plan. ``entity`` is None when the lookup found nothing."""

    def __init__(self, result: Any):
        self.entity = result

    @classmethod
    def get(cls, name: str, resource_group_name: str) -> "AppServicePlan":
        result = azure_native.web.get_app_service_plan(name=name, resource_group_name=resource_group_name)
        return cls(result)

    @classmethod
    def for_web_app(cls, webapp: WebApp) -> Optional["AppServicePlan"]:
        segments = parse_resource_id(webapp.service_plan_id)
        if "serverfarms" not in segments or "resourcegroups" not in segments:
            pulumi.log.warn(f"Web app '{webapp.name}' has no resolvable app service plan")
            return None
        return cls.get(segments["serverfarms"], segments["resourcegroups"])

    @property
    def name(self) -> str:
        return self.entity.name

    @property
    def resource_group(self) -> Optional[str]:
        resource_group = getattr(self.entity, "resource_group", None)
        return resource_group or parse_resource_id(self.entity.id).get("resourcegroups")

    @property
    def pricing_tier(self) -> Optional[PricingTier]:
        sku = self.entity.sku
        if sku is None:
            return None
        size = sku.size or sku.name
        if sku.tier and size:
            return PricingTier(tier=sku.tier, size=size)
        return PricingTier.from_string(size) if size else None
