# ============================================================================
# STARTUP ENVIRONMENT CHECKS
# ============================================================================
# STATUS: Configuration - regex checks run when the function host loads
# PURPOSE: Report bad or missing settings by name before the first timer tick
# ============================================================================
"""
Environment Variable Checks.

Each setting the app reads has an EnvVarRule (regex plus a hint). The
checks never raise: function_app.py logs the issues at startup and the
health endpoint reports them, while WatchConfig.from_environment() remains
the place where a bad setting becomes a ConfigurationError.

Usage:
    from config.env_validation import validate_environment

    for issue in validate_environment():
        print(issue.var_name, issue.message)

Exports:
    ENV_VAR_RULES: Rule per environment variable
    EnvVarRule: Rule definition
    EnvVarIssue: One problem (error) or notice (warning)
    check_var: Check one variable
    validate_environment: Check every rule plus storage credentials
    get_validation_summary: Dict for the health endpoint
    log_validation_results: Log issues at startup
"""

import os
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Pattern

from .defaults import SourceDefaults, WatchDefaults

_SECRET_MARKERS = ("connection", "key", "secret", "password", "token")


@dataclass
class EnvVarIssue:
    """A setting that failed its rule (error) or fell back to a default (warning)."""
    var_name: str
    message: str
    hint: str
    value: Optional[str] = None
    severity: str = "error"

    @property
    def is_error(self) -> bool:
        return self.severity == "error"

    def to_dict(self) -> Dict[str, Any]:
        """JSON-safe form; secrets masked, long values shortened."""
        value = self.value
        if value is not None:
            if any(marker in self.var_name.lower() for marker in _SECRET_MARKERS):
                value = "***MASKED***"
            elif len(value) > 40:
                value = value[:37] + "..."
        return {
            "var_name": self.var_name,
            "message": self.message,
            "hint": self.hint,
            "value": value,
            "severity": self.severity,
        }


@dataclass
class EnvVarRule:
    """
    Format rule for one environment variable.

    Attributes:
        pattern: Regex the value must match (anchored at the start unless search)
        description: Expected format, for messages
        example: A valid value
        hint: How to fix a bad value
        required: Missing or blank value is an error
        default: Value used when unset; reported as a warning when set
        search: Match anywhere in the value (connection strings)
    """
    pattern: Pattern
    description: str
    example: str
    hint: str
    required: bool = False
    default: Optional[str] = None
    search: bool = False


_STORAGE_ACCOUNT = re.compile(r"^[a-z0-9]{3,24}$")
_CONTAINER_NAME = re.compile(r"^[a-z0-9](?!.*--)[a-z0-9-]{1,61}[a-z0-9]$")
_BLOB_NAME = re.compile(r"^[^\s].{0,1023}$")
_CONNECTION_STRING = re.compile(r"(AccountName=[^;]+|UseDevelopmentStorage=true)", re.IGNORECASE)
_HTTP_URL = re.compile(r"^https?://[a-z0-9][a-z0-9.-]+(:[0-9]+)?(/.*)?$", re.IGNORECASE)
_IDENTIFIER = re.compile(r"^[A-Za-z0-9_-]{1,64}$")
_POSITIVE_NUMBER = re.compile(r"^(?=.*[1-9])[0-9]+(\.[0-9]+)?$")
_TIMEZONE = re.compile(r"^(UTC|[A-Za-z_]+(/[A-Za-z0-9_+-]+){1,2})$")
_NCRONTAB = re.compile(r"^\S+( \S+){5}$")
_TRUE_FALSE = re.compile(r"^(true|false)$", re.IGNORECASE)


ENV_VAR_RULES: Dict[str, EnvVarRule] = {
    # Known-dates blob
    "KNOWN_DATES_CONTAINER": EnvVarRule(
        pattern=_CONTAINER_NAME,
        description="Azure container name (3-63 lowercase letters, digits, single hyphens)",
        example="date-watch",
        hint="Set the container holding the known-dates document",
        required=True,
    ),
    "KNOWN_DATES_BLOB": EnvVarRule(
        pattern=_BLOB_NAME,
        description="Blob name (1-1024 chars, not starting with whitespace)",
        example="known-dates.json",
        hint="Set the blob name of the known-dates document",
        required=True,
    ),
    "KNOWN_DATES_STORAGE_CONNECTION": EnvVarRule(
        pattern=_CONNECTION_STRING,
        description="Azure Storage connection string containing AccountName=",
        example="DefaultEndpointsProtocol=https;AccountName=mystore;AccountKey=...",
        hint="Copy it from the storage account Access keys blade, "
             "or set KNOWN_DATES_STORAGE_ACCOUNT instead",
        default="AzureWebJobsStorage",
        search=True,
    ),
    "KNOWN_DATES_STORAGE_ACCOUNT": EnvVarRule(
        pattern=_STORAGE_ACCOUNT,
        description="Lowercase alphanumeric storage account name (3-24 chars)",
        example="mystore",
        hint="Use the bare account name, not the URL",
    ),

    # Remote source
    "AVAILABLE_DATES_URL": EnvVarRule(
        pattern=_HTTP_URL,
        description="HTTP(S) URL of the available-dates endpoint",
        example=SourceDefaults.URL,
        hint="Use a full URL including scheme",
        default=SourceDefaults.URL,
    ),
    "AVAILABLE_DATES_BUSINESS_ID": EnvVarRule(
        pattern=_IDENTIFIER,
        description="Business identifier (letters, digits, underscore, hyphen)",
        example=SourceDefaults.BUSINESS_ID,
        hint="Set the businessID sent to the remote source",
        default=SourceDefaults.BUSINESS_ID,
    ),
    "AVAILABLE_DATES_SP_ID": EnvVarRule(
        pattern=_IDENTIFIER,
        description="Service provider identifier (leave unset for any provider)",
        example="12345",
        hint="Set the spID sent to the remote source",
    ),
    "AVAILABLE_DATES_TIMEOUT_SECONDS": EnvVarRule(
        pattern=_POSITIVE_NUMBER,
        description="Positive number of seconds",
        example="30",
        hint="Use a value like 30",
        default=str(SourceDefaults.TIMEOUT_SECONDS),
    ),

    # Watch settings
    "WATCH_SCHEDULE": EnvVarRule(
        pattern=_NCRONTAB,
        description="Six-field NCRONTAB expression (seconds first)",
        example=WatchDefaults.SCHEDULE,
        hint="Use e.g. '0 0 * * * *' for hourly",
        default=WatchDefaults.SCHEDULE,
    ),
    "WATCH_TIMEZONE": EnvVarRule(
        pattern=_TIMEZONE,
        description="'UTC' or an IANA zone name like America/Chicago",
        example="America/Chicago",
        hint="Use the zone of the watched business",
        default=WatchDefaults.TIMEZONE,
    ),
    "DEBUG_LOGGING": EnvVarRule(
        pattern=_TRUE_FALSE,
        description="true or false",
        example="false",
        hint="Anything but 'true' leaves DEBUG logging off",
    ),
}


def check_var(var_name: str, rule: EnvVarRule, include_warnings: bool = True) -> Optional[EnvVarIssue]:
    """
    Check one variable against its rule.

    Returns:
        An error, a default-value warning, or None when the value is fine
    """
    value = os.environ.get(var_name)

    if value is None or not value.strip():
        if rule.required:
            return EnvVarIssue(
                var_name, "Required environment variable not set",
                hint=f"{rule.hint}. Example: {rule.example}", value=value,
            )
        if include_warnings and rule.default is not None:
            return EnvVarIssue(
                var_name, f"Not set, using default: {rule.default}",
                hint=rule.hint, severity="warning",
            )
        return None

    match = rule.pattern.search(value) if rule.search else rule.pattern.match(value)
    if match is None:
        return EnvVarIssue(
            var_name, f"Invalid format, expected {rule.description}",
            hint=f"{rule.hint}. Example: {rule.example}", value=value,
        )
    return None


def _storage_credentials_issue() -> Optional[EnvVarIssue]:
    """Blob access needs a connection string or an account name."""
    for var_name in ("KNOWN_DATES_STORAGE_CONNECTION", "KNOWN_DATES_STORAGE_ACCOUNT", "AzureWebJobsStorage"):
        if os.environ.get(var_name):
            return None
    return EnvVarIssue(
        "KNOWN_DATES_STORAGE_CONNECTION", "No storage credentials configured",
        hint="Set KNOWN_DATES_STORAGE_CONNECTION, or KNOWN_DATES_STORAGE_ACCOUNT "
             "for managed identity auth",
    )


def validate_environment(
    rules: Optional[Dict[str, EnvVarRule]] = None,
    include_warnings: bool = True
) -> List[EnvVarIssue]:
    """
    Check every rule.

    The storage credentials check runs only with the built-in rule set.
    """
    issues = [
        issue for issue in (
            check_var(name, rule, include_warnings)
            for name, rule in (rules or ENV_VAR_RULES).items()
        ) if issue is not None
    ]
    if rules is None:
        credentials = _storage_credentials_issue()
        if credentials is not None:
            issues.append(credentials)
    return issues


def get_validation_summary(include_warnings: bool = True) -> Dict[str, Any]:
    """Health endpoint view of validate_environment()."""
    issues = validate_environment(include_warnings=include_warnings)
    errors = [i for i in issues if i.is_error]
    warnings = [i for i in issues if not i.is_error]
    missing = [
        name for name, rule in ENV_VAR_RULES.items()
        if rule.required and not (os.environ.get(name) or "").strip()
    ]
    return {
        "valid": not errors,
        "error_count": len(errors),
        "warning_count": len(warnings),
        "missing_required": missing,
        "errors": [i.to_dict() for i in errors],
        "warnings": [i.to_dict() for i in warnings],
    }


def log_validation_results(logger=None) -> bool:
    """
    Log every issue; errors at ERROR, defaults at WARNING.

    Returns:
        True when there are no errors
    """
    if logger is None:
        from util_logger import LoggerFactory, ComponentType
        logger = LoggerFactory.create_logger(ComponentType.VALIDATOR, "env_validation")

    issues = validate_environment(include_warnings=True)
    errors = [i for i in issues if i.is_error]

    for issue in issues:
        if issue.is_error:
            logger.error(f"ENV {issue.var_name}: {issue.message} ({issue.hint})")
        else:
            logger.warning(f"ENV {issue.var_name}: {issue.message}")

    if errors:
        logger.error(f"❌ {len(errors)} environment variable errors; watch runs will fail until fixed")
        return False
    logger.info(f"✅ Environment OK ({len(issues)} settings on defaults)")
    return True


__all__ = [
    "ENV_VAR_RULES",
    "EnvVarRule",
    "EnvVarIssue",
    "check_var",
    "validate_environment",
    "get_validation_summary",
    "log_validation_results",
]
