from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace

from pydantic import BaseModel

from blog_api.runtime.config.config_data import ConfigData
from blog_api.runtime.config.config_template import load_templated_yaml
from blog_api.runtime.config.settings import EnvironmentVariables


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


def load_default_config() -> ConfigData:
    """Load config.yaml from the location named by the environment."""
    env = EnvironmentVariables()
    return load_templated_yaml(env.app_config_file, env_mode=env.app_environment)


# Global configuration instance
_default_context = AppContext(config=load_default_config())


# Context variable for application context
_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    """Get the current application context.

    Returns:
        AppContext: The current application context containing configuration.
    """
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context.

    Args:
        context: AppContext instance to set as current.
    """
    return _app_context.set(context)


def _dump_explicitly_set(model: BaseModel) -> dict:
    """Dump only the fields that were explicitly set, recursing into nested models."""
    result = {}
    for field_name in model.__class__.model_fields:
        value = getattr(model, field_name)
        if isinstance(value, BaseModel):
            nested = _dump_explicitly_set(value)
            if nested:
                result[field_name] = nested
            elif field_name in model.model_fields_set:
                result[field_name] = value.model_dump()
        elif field_name in model.model_fields_set:
            result[field_name] = value
    return result


def _recursive_dict_merge(base_dict: dict, override_dict: dict) -> dict:
    """Recursively merge two dictionaries; values from ``override_dict`` win."""
    result = base_dict.copy()

    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _recursive_dict_merge(result[key], value)
        else:
            result[key] = value

    return result


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Merge the explicitly set fields of ``override_config`` over ``base_config``."""
    base_dict = base_config.model_dump(exclude={"database": {"connection_string"}})
    override_dict = _dump_explicitly_set(override_config)
    merged_dict = _recursive_dict_merge(base_dict, override_dict)
    return ConfigData.model_validate(merged_dict)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily override the application configuration.

    Only fields explicitly set on ``config_override`` (at any nesting level)
    replace the current values; everything else is inherited.

    Example:
        override = ConfigData(database=DatabaseConfig(url="sqlite://"))
        with with_context(override):
            assert get_config().database.url == "sqlite://"
            # logging, app and other database fields are inherited
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = _merge_configs(get_context().config, config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the entire current configuration."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    """Convenience function to get the current configuration."""
    return get_context().config
