"""
Health Check HTTP Trigger.

System health endpoint for GET /api/health.

Components Monitored:
    - Environment variable validation
    - Configuration load (sanitized)
    - Known-dates blob reachability (only with ?deep=true)

Exports:
    HealthCheckTrigger: Health check trigger class
    health_check_trigger: Trigger instance
"""

import sys
from typing import Dict, Any, List

import azure.functions as func

from config import get_config
from config.env_validation import get_validation_summary
from exceptions import BusinessLogicError, ConfigurationError
from infrastructure import RepositoryFactory
from .http_base import BaseHttpTrigger


class HealthCheckTrigger(BaseHttpTrigger):
    """Health check HTTP trigger implementation."""

    def __init__(self):
        super().__init__("health_check")

    def get_allowed_methods(self) -> List[str]:
        return ["GET"]

    def process_request(self, req: func.HttpRequest) -> Dict[str, Any]:
        """
        Report environment, configuration and (optionally) storage health.

        Always answers 200; the 'status' field carries the verdict.
        """
        health_data = {
            "status": "healthy",
            "components": {},
            "environment": {
                "python_version": sys.version.split()[0],
                "function_runtime": "python",
            },
            "errors": [],
        }

        env_summary = get_validation_summary(include_warnings=True)
        health_data["components"]["environment_variables"] = {
            "status": "healthy" if env_summary["valid"] else "unhealthy",
            "details": env_summary,
        }
        if not env_summary["valid"]:
            health_data["status"] = "unhealthy"
            health_data["errors"].append(
                f"{env_summary['error_count']} environment variable errors"
            )

        try:
            config = get_config()
        except ConfigurationError as e:
            health_data["status"] = "unhealthy"
            health_data["components"]["configuration"] = {"status": "unhealthy", "error": str(e)}
            health_data["errors"].append(str(e))
            return health_data

        health_data["components"]["configuration"] = {
            "status": "healthy",
            "details": config.debug_dict(),
        }

        if req.params.get("deep", "").lower() == "true":
            health_data["components"]["known_dates_blob"] = self._check_known_dates_blob(config)
            if health_data["components"]["known_dates_blob"]["status"] != "healthy":
                health_data["status"] = "unhealthy"
                health_data["errors"].append("Known-dates blob check failed")

        return health_data

    def _check_known_dates_blob(self, config) -> Dict[str, Any]:
        """Existence check only; the document is not parsed."""
        try:
            repo = RepositoryFactory.create_known_dates_repository(config.storage)
            return {"status": "healthy", "exists": repo.exists(), "location": repo.location}
        except (BusinessLogicError, ValueError) as e:
            self.logger.warning(f"Known-dates blob health check failed: {e}")
            return {"status": "unhealthy", "error": str(e)}


health_check_trigger = HealthCheckTrigger()

__all__ = ['HealthCheckTrigger', 'health_check_trigger']
