# appservice.py
"""
Reconcile App Service configurations: read a live web app into an
AppServiceConfig, build defaults, and fill blanks of one config from another.
"""

import pulumi
from dataclasses import fields, replace
from typing import Any, Optional

from appconfig import (
    AppServiceConfig,
    ConfigMergeError,
    DockerRuntime,
    NativeRuntime,
    build_default_web_app_config,
)
from regions import RegionCatalog, normalize_region, select_first_option_if_current_invalid
from webapp import SETTING_DOCKER_IMAGE, SETTING_REGISTRY_SERVER, AppServicePlan, WebApp, parse_resource_id


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def get_subscription_id(resource_id: str) -> Optional[str]:
    return parse_resource_id(resource_id).get("subscriptions")


def from_app_service(webapp: WebApp, service_plan: Optional[AppServicePlan]) -> AppServiceConfig:
    config = AppServiceConfig(
        app_name=webapp.name,
        resource_group=webapp.resource_group,
        subscription_id=get_subscription_id(webapp.id),
        region=webapp.region,
    )

    if webapp.is_docker():
        settings = webapp.app_settings
        image_setting = settings.get(SETTING_DOCKER_IMAGE)
        runtime = DockerRuntime(
            image=image_setting if not is_blank(image_setting) else webapp.docker_image_name
        )
        registry_server_setting = settings.get(SETTING_REGISTRY_SERVER)
        if not is_blank(registry_server_setting):
            runtime.registry_url = registry_server_setting
        pulumi.log.debug(f"Web app '{webapp.name}' runs container image '{runtime.image}'")
    else:
        descriptor = webapp.runtime
        runtime = NativeRuntime(
            os=descriptor.os,
            web_container=descriptor.web_container,
            java_version=descriptor.java_version,
        )
        pulumi.log.debug(f"Web app '{webapp.name}' runs {descriptor.os.value} / {descriptor.web_container}")
    config.runtime = runtime

    if service_plan is not None and service_plan.entity is not None:
        config.pricing_tier = service_plan.pricing_tier
        config.service_plan_name = service_plan.name
        config.service_plan_resource_group = service_plan.resource_group
    return config


def build_default_config(
    subscription_id: str,
    resource_group: str,
    app_name: str,
    packaging: Optional[str],
    java_version: Optional[str],
    region_catalog: RegionCatalog,
) -> AppServiceConfig:
    config = build_default_web_app_config(resource_group, app_name, packaging, java_version)
    config.subscription_id = subscription_id
    regions = region_catalog.list_supported_regions(subscription_id)
    # replace with first region when the default region is not present
    region = select_first_option_if_current_invalid("region", regions, normalize_region(config.region))
    if region != config.region:
        pulumi.log.info(
            f"Region '{config.region}' is not supported in subscription '{subscription_id}', using '{region}'"
        )
    config.region = region
    return config


def merge_app_service_config(to: AppServiceConfig, from_: AppServiceConfig) -> None:
    """Fill unset (None or "") fields of ``to`` with the values of ``from_``.

    Top-level fields are filled first, then the runtime one level deeper
    when both configs hold distinct runtimes of the same shape.
    """
    had_runtime = to.runtime is not None
    _merge_objects(to, from_)

    if not had_runtime and to.runtime is not None:
        # own copy, later merges into ``to`` must not reach ``from_``
        to.runtime = replace(to.runtime)
    elif to.runtime is not from_.runtime:
        merge_runtime(to.runtime, from_.runtime)


def merge_runtime(to, from_) -> None:
    if to is None or from_ is None:
        return
    if type(to) is not type(from_):
        pulumi.log.debug(
            f"Keeping {type(to).__name__}, not merging from {type(from_).__name__}"
        )
        return
    _merge_objects(to, from_)


def _merge_objects(to, from_) -> None:
    if type(to) is not type(from_):
        raise ConfigMergeError(
            f"Cannot copy object for class {type(to).__name__} from {type(from_).__name__}."
        )
    for field in fields(to):
        if getattr(to, field.name) in (None, ""):
            value = getattr(from_, field.name)
            if value is not None:
                setattr(to, field.name, value)
