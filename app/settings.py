from constants import *
import copy
import yaml
import os

import logging

# Retrieve main logger
logger = logging.getLogger("main")

# Environment variables that take precedence over the YAML file
ENV_OVERRIDES = {
    "SUPABASE_URL": ("storage", "supabase_url"),
    "SUPABASE_SERVICE_KEY": ("storage", "service_key"),
    "NEXIPLAY_STORAGE_BACKEND": ("storage", "backend"),
    "NEXIPLAY_ADMIN_TOKEN": ("admin", "api_token"),
}

# Cache variable
_cached_settings = None


def _apply_env_overrides(settings):
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_name, "").strip()
        if value:
            settings.setdefault(section, {})[key] = value
    return settings


def _write_settings(settings):
    os.makedirs(os.path.dirname(CONFIG_FILE), exist_ok=True)
    with open(CONFIG_FILE, "w") as yaml_file:
        yaml.dump(settings, yaml_file)


def load_settings(force=False):
    global _cached_settings

    if _cached_settings and not force:
        return _cached_settings

    if os.path.exists(CONFIG_FILE):
        logger.debug(f"Reading configuration file: {CONFIG_FILE}")
        with open(CONFIG_FILE, "r") as yaml_file:
            settings = yaml.safe_load(yaml_file) or {}

        # Deep merge with defaults so new keys are always present
        merged_settings = copy.deepcopy(DEFAULT_SETTINGS)
        for section, values in settings.items():
            if isinstance(values, dict) and isinstance(merged_settings.get(section), dict):
                merged_settings[section].update(values)
            else:
                merged_settings[section] = values
        settings = merged_settings
    else:
        settings = copy.deepcopy(DEFAULT_SETTINGS)
        _write_settings(settings)

    _cached_settings = _apply_env_overrides(settings)
    return _cached_settings


def verify_settings(section, data):
    success = True
    errors = []
    if section == "storage":
        backend = data.get("backend")
        if backend not in ("supabase", "local"):
            success = False
            errors.append({"path": "storage/backend", "error": f"Unknown storage backend {backend}."})
        elif backend == "supabase":
            if not data.get("supabase_url"):
                success = False
                errors.append({"path": "storage/supabase_url", "error": "Supabase URL is required."})
            if not data.get("service_key"):
                success = False
                errors.append({"path": "storage/service_key", "error": "Service key is required."})
        elif backend == "local" and not data.get("public_base_url"):
            success = False
            errors.append({"path": "storage/public_base_url", "error": "Public base URL is required."})
    return success, errors


def set_storage_settings(data):
    settings = load_settings()
    storage = dict(settings["storage"])
    storage.update(data)
    success, errors = verify_settings("storage", storage)
    if not success:
        return success, errors

    settings["storage"] = storage
    _write_settings(settings)
    reload_conf()
    return success, errors


def reload_conf():
    """Reload application settings cache"""
    global _cached_settings
    _cached_settings = None
    return load_settings(force=True)
