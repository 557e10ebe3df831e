"""
Resolver settings read from the environment or a .env file.
"""
import os
from typing import Dict, Mapping, Optional
from dotenv import dotenv_values
from pydantic import BaseModel

ENV_PREFIX = "C2I_"


class ResolverSettings(BaseModel):
    """
    Settings consumed while resolving images.

    :param shell_image: Image of the shell used by cluster tooling, always
        part of Linux resolutions.
    :param system_default_registry: Private registry image names are
        prefixed with on export, empty for none.
    """
    shell_image: str = "rancher/shell:v0.1.6"
    system_default_registry: str = ""


def load_settings(env_file: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> ResolverSettings:
    """
    Builds the settings from ``C2I_*`` variables.

    Values of the process environment override those of the .env file.

    :param env_file: Optional path to a .env file.
    :param environ: Environment to read, defaults to ``os.environ``.
    """
    values: Dict[str, Optional[str]] = {}
    if env_file:
        values.update(dotenv_values(env_file))
    values.update(os.environ if environ is None else environ)

    fields = {}
    for name in ResolverSettings.model_fields:
        value = values.get(ENV_PREFIX + name.upper())
        if value is not None:
            fields[name] = value
    return ResolverSettings(**fields)
