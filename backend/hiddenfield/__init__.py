# Hidden-field check package
from .config import HiddenFieldConfig, config_from_env, load_config
from .diagnostic import RULE_CODE, Diagnostic, Violation
from .errors import ConfigurationError, HiddenFieldError, MalformedTreeError, ScopeStackError
from .hidden_field_checker import ShadowEvaluator, check_hidden_fields, check_tree

__all__ = [
    'HiddenFieldConfig',
    'config_from_env',
    'load_config',
    'RULE_CODE',
    'Diagnostic',
    'Violation',
    'ConfigurationError',
    'HiddenFieldError',
    'MalformedTreeError',
    'ScopeStackError',
    'ShadowEvaluator',
    'check_hidden_fields',
    'check_tree',
]
