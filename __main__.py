# __main__.py
import pulumi
from appconfig import AppServiceConfig, load_config
from appservice import build_default_config, from_app_service, merge_app_service_config
from regions import RegionCatalog, get_abbreviation, normalize_region, select_first_option_if_current_invalid
from webapp import AppServicePlan, WebApp


def reconcile_app(app_cfg: dict, config_data: dict, region_catalog: RegionCatalog) -> AppServiceConfig:
    """Declared config, filled from the live app (if existing), then from defaults.

    The top-level location only applies when neither the app entry nor the
    live app sets a region, and is checked against the supported regions.
    """
    name = app_cfg["name"]
    resource_group = app_cfg["resource_group"]
    subscription_id = app_cfg.get("subscription_id", config_data["subscription_id"])

    declared = AppServiceConfig.from_dict({"app_name": name, **app_cfg})
    declared.subscription_id = subscription_id

    if app_cfg.get("existing", False):
        webapp = WebApp.get(name, resource_group)
        plan_cfg = app_cfg.get("plan")
        if plan_cfg:
            service_plan = AppServicePlan.get(plan_cfg["name"], plan_cfg.get("resource_group", resource_group))
        else:
            service_plan = AppServicePlan.for_web_app(webapp)
        merge_app_service_config(declared, from_app_service(webapp, service_plan))
        pulumi.log.info(f"Merged live configuration of web app '{name}'")

    location = config_data.get("location")
    if declared.region is None and location:
        regions = region_catalog.list_supported_regions(subscription_id)
        declared.region = select_first_option_if_current_invalid("region", regions, normalize_region(location))

    default = build_default_config(
        subscription_id,
        resource_group,
        name,
        app_cfg.get("packaging"),
        app_cfg.get("java_version"),
        region_catalog,
    )
    merge_app_service_config(declared, default)
    return declared


def main():
    # Load YAML configuration
    config_data = load_config("config.yaml")
    region_catalog = RegionCatalog.from_config(config_data)

    for app_cfg in config_data["apps"]:
        try:
            reconciled = reconcile_app(app_cfg, config_data, region_catalog)
        except Exception as e:
            pulumi.log.error(f"Failed to reconcile web app '{app_cfg['name']}': {e}")
            raise

        export_name = f"{app_cfg['name']}-{get_abbreviation(reconciled.region)}".lower()
        pulumi.export(export_name, reconciled.to_dict())


if __name__ == "__main__":
    main()
