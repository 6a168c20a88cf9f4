"""Shared fixtures: fake pulumi_azure_native.web invoke results."""

from types import SimpleNamespace

import pytest

SUBSCRIPTION_ID = "11111111-2222-3333-4444-555555555555"


def make_site_config(**kwargs):
    values = {
        "linux_fx_version": None,
        "windows_fx_version": None,
        "java_version": None,
        "java_container": None,
        "java_container_version": None,
    }
    values.update(kwargs)
    return SimpleNamespace(**values)


def make_web_app_result(name="orders-api", resource_group="rg-orders", kind="app,linux", site_config=None, **kwargs):
    values = {
        "id": f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/{resource_group}/providers/Microsoft.Web/sites/{name}",
        "name": name,
        "resource_group": resource_group,
        "location": "West Europe",
        "kind": kind,
        "site_config": site_config if site_config is not None else make_site_config(),
        "server_farm_id": (
            f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/rg-plans/providers/Microsoft.Web/serverfarms/plan-orders"
        ),
    }
    values.update(kwargs)
    return SimpleNamespace(**values)


def make_plan_result(name="plan-orders", resource_group="rg-plans", tier="PremiumV2", size="P1v2"):
    return SimpleNamespace(
        id=f"/subscriptions/{SUBSCRIPTION_ID}/resourceGroups/{resource_group}/providers/Microsoft.Web/serverfarms/{name}",
        name=name,
        resource_group=resource_group,
        sku=SimpleNamespace(name=size, tier=tier, size=size),
    )


@pytest.fixture
def subscription_id():
    return SUBSCRIPTION_ID


@pytest.fixture
def docker_web_app_result():
    return make_web_app_result(
        kind="app,linux,container",
        site_config=make_site_config(linux_fx_version="DOCKER|bar:2"),
    )


@pytest.fixture
def linux_web_app_result():
    return make_web_app_result(site_config=make_site_config(linux_fx_version="TOMCAT|9.0-java11"))


@pytest.fixture
def windows_web_app_result():
    return make_web_app_result(
        kind="app",
        site_config=make_site_config(java_version="11", java_container="TOMCAT", java_container_version="9.0"),
    )


@pytest.fixture
def plan_result():
    return make_plan_result()
