"""Construction of the source pair from configuration."""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from app.config.environment import EnvironmentConfig
from app.config.models import AppConfig
from app.domain.models import SourceKind

from .base import BaseSource
from .direct_applications import DirectApplicationSource
from .exceptions import AdapterConfigurationError, UnknownSourceKindError
from .internships import InternshipSource

logger = logging.getLogger(__name__)


@dataclass
class SourceRegistry:
    """The two sources, addressable by ownership tag.

    Attributes:
        applications: Direct-application source (also serves the recruiter view)
        internships: Internship-entity source
    """

    applications: DirectApplicationSource
    internships: InternshipSource

    def for_kind(self, source_kind: SourceKind) -> BaseSource:
        """Return the source that owns records tagged ``source_kind``.

        Raises:
            UnknownSourceKindError: If the tag is not recognised
        """
        if source_kind == SourceKind.DIRECT_APPLICATION:
            return self.applications
        if source_kind == SourceKind.INTERNSHIP_ENTITY:
            return self.internships
        raise UnknownSourceKindError(f"No source registered for kind: {source_kind!r}")

    def close(self) -> None:
        self.applications.close()
        self.internships.close()


def build_sources(
    app_config: AppConfig,
    env_config: Optional[EnvironmentConfig] = None,
    session: Optional[requests.Session] = None,
) -> SourceRegistry:
    """Instantiate both sources from configuration.

    Args:
        app_config: Application configuration (backend URL, timeout, user-agent)
        env_config: Environment configuration (bearer token)
        session: Optional shared requests session

    Returns:
        SourceRegistry with both sources

    Raises:
        AdapterConfigurationError: If a source rejects the configuration

    Example:
        >>> registry = build_sources(app_config, env_config)
        >>> records = registry.applications.fetch_records()
    """
    backend = app_config.backend
    api_token = env_config.api_token if env_config else None

    logger.debug(
        "Creating sources",
        extra={"base_url": backend.base_url, "timeout": backend.http_request_timeout},
    )

    try:
        kwargs = dict(
            base_url=backend.base_url,
            timeout=backend.http_request_timeout,
            user_agent=backend.user_agent,
            api_token=api_token,
            session=session,
        )
        return SourceRegistry(
            applications=DirectApplicationSource(**kwargs),
            internships=InternshipSource(**kwargs),
        )
    except AdapterConfigurationError:
        raise
    except Exception as e:
        raise AdapterConfigurationError(f"Failed to create sources: {e}") from e
