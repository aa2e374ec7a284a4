"""PostHog configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import first_env_var, optional_env_var, require_env_vars
from .errors import MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

POSTHOG_BASE_URL = "https://app.posthog.com"
POSTHOG_BATCH_URL = "https://us.i.posthog.com/batch/"
POSTHOG_TIMEOUT_SECONDS = 120.0
PROJECT_ID_VARS = ("POSTHOG_API_ID", "POSTHOG_PROJECT_ID")


@dataclass(frozen=True)
class PostHogConfig:
    """Holds PostHog API configuration values."""

    api_key: str
    project_id: str
    project_key: str
    batch_url: str
    resilience: ResilienceConfig

    @property
    def query_path(self) -> str:
        return f"/api/projects/{self.project_id}/query/"


def get_posthog_config(*, resilience: ResilienceConfig | None = None) -> PostHogConfig:
    values = require_env_vars(("POSTHOG_API_KEY", "POSTHOG_PROJECT_KEY"))
    project_id = first_env_var(PROJECT_ID_VARS)
    if project_id is None:
        raise MissingConfigurationError(
            f"Missing configuration for: {' or '.join(PROJECT_ID_VARS)}"
        )
    return PostHogConfig(
        api_key=values["POSTHOG_API_KEY"],
        project_id=project_id,
        project_key=values["POSTHOG_PROJECT_KEY"],
        batch_url=optional_env_var("POSTHOG_BATCH_URL") or POSTHOG_BATCH_URL,
        resilience=resilience
        or ResilienceConfig(
            name="posthog",
            base_url=optional_env_var("POSTHOG_BASE_URL") or POSTHOG_BASE_URL,
            timeout_seconds=POSTHOG_TIMEOUT_SECONDS,
            retry=None,
            ratelimit=RateLimit(max_calls=4, per_seconds=1.0),
        ),
    )
