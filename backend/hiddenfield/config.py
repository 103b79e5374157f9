"""
Options of the hidden-field check.

Options are validated once, before any tree is checked: an ignoreFormat that
does not compile, a non-boolean flag or an unknown option name is a
ConfigurationError.
"""
from __future__ import annotations
import logging
import os
import re
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError

log = logging.getLogger(__name__)

ENV_PREFIX = "HIDEFIELD_"

# Option name -> environment variable suffix
_ENV_OPTIONS = {
    "ignoreFormat": "IGNORE_FORMAT",
    "ignoreSetter": "IGNORE_SETTER",
    "setterCanReturnItsClass": "SETTER_CAN_RETURN_ITS_CLASS",
    "ignoreConstructorParameter": "IGNORE_CONSTRUCTOR_PARAMETER",
    "ignoreAbstractMethods": "IGNORE_ABSTRACT_METHODS",
}


class HiddenFieldConfig(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    ignore_format: Optional[re.Pattern] = Field(default=None, alias="ignoreFormat")
    ignore_setter: bool = Field(default=False, alias="ignoreSetter")
    # Only consulted when ignore_setter is on.
    setter_can_return_its_class: bool = Field(default=False, alias="setterCanReturnItsClass")
    ignore_constructor_parameter: bool = Field(default=False, alias="ignoreConstructorParameter")
    ignore_abstract_methods: bool = Field(default=False, alias="ignoreAbstractMethods")

    def to_options(self) -> dict[str, Any]:
        """Camel-cased option mapping, with the pattern as its source string."""
        return {
            "ignoreFormat": self.ignore_format.pattern if self.ignore_format is not None else None,
            "ignoreSetter": self.ignore_setter,
            "setterCanReturnItsClass": self.setter_can_return_its_class,
            "ignoreConstructorParameter": self.ignore_constructor_parameter,
            "ignoreAbstractMethods": self.ignore_abstract_methods,
        }


def load_config(options: Optional[Mapping[str, Any]] = None) -> HiddenFieldConfig:
    """Validate rule options given by camelCase or snake_case name."""
    try:
        return HiddenFieldConfig.model_validate(dict(options or {}))
    except ValidationError as e:
        raise ConfigurationError(f"invalid hidden-field options: {e}") from e


def config_from_env(dotenv_path: Optional[str] = None) -> HiddenFieldConfig:
    """Read options from HIDEFIELD_* environment variables (a .env file is loaded first)."""
    load_dotenv(dotenv_path)
    options: dict[str, Any] = {}
    for option, suffix in _ENV_OPTIONS.items():
        value = os.getenv(ENV_PREFIX + suffix)
        if value is not None and value != "":
            options[option] = value
    if options:
        log.info("Hidden-field options from environment: %s", sorted(options))
    return load_config(options)
