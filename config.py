"""
Stack configuration loaded from pulumi.Config().

Provides a typed, immutable view of stack settings. All settings are read from
Pulumi config (e.g. Pulumi.<stack>.yaml or pulumi config set). Every key is
required except ``tags``. Used by __main__.main() to name resources, locate
the SSM deployment parameters, and choose the optional parts of the topology.

The site domain, zone id and certificate ARN themselves are not config: config
only names the SSM parameters that hold them (see components.parameters).
"""

from dataclasses import dataclass, field
from typing import Any, Callable

import pulumi

from components.dns import WWW_TARGETS
from components.errors import ConfigurationError
from components.parameters import ParameterNames


def _require_bool(config: pulumi.Config, key: str) -> bool:
    raw = config.require(key)
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in ("1", "true", "yes")


def _require_str(config: pulumi.Config, key: str) -> str:
    return config.require(key)


def _require_www_target(config: pulumi.Config, key: str) -> str:
    value = config.require(key).strip().lower()
    if value not in WWW_TARGETS:
        raise ConfigurationError(
            f"config {key!r} must be one of {', '.join(WWW_TARGETS)}, got {value!r}"
        )
    return value


def _get_tags(config: pulumi.Config, key: str) -> dict[str, str]:
    raw = config.get_object(key) or {}
    if not isinstance(raw, dict):
        raise ConfigurationError(f"config {key!r} must be a mapping of tag names to values")
    return {str(name): str(value) for name, value in raw.items()}


# (key, parser); parser receives (config, key) and returns value.
_CONFIG_SPEC: list[tuple[str, Callable[[pulumi.Config, str], Any]]] = [
    ("project_name", _require_str),
    ("environment", _require_str),
    ("domain_parameter", _require_str),
    ("hosted_zone_id_parameter", _require_str),
    ("certificate_arn_parameter", _require_str),
    ("enable_access_logging", _require_bool),
    ("viewer_request_function", _require_bool),
    ("security_headers_function", _require_bool),
    ("www_record_target", _require_www_target),
    ("protect_origin_bucket", _require_bool),
    ("tags", _get_tags),
]


@dataclass(frozen=True)
class StackConfig:
    """
    Stack configuration from Pulumi config.

    Attributes:
        project_name: Project name used in resource naming (required).
        environment: Environment label used in resource naming (required).
        domain_parameter: SSM parameter holding the site domain (required).
        hosted_zone_id_parameter: SSM parameter holding the Route 53 zone id
            (required).
        certificate_arn_parameter: SSM parameter holding the us-east-1 ACM
            certificate ARN (required).
        enable_access_logging: Whether to create the log bucket and enable
            CloudFront standard logging (required).
        viewer_request_function: Whether to attach the path-normalising
            function on viewer-request (required).
        security_headers_function: Whether to attach the security-header
            function on viewer-response (required).
        www_record_target: "distribution" or "apex"; CNAME target of the www
            record (required).
        protect_origin_bucket: Whether to protect the site bucket against
            replacement and deletion (required).
        tags: Tags applied to every taggable resource (optional).
    """

    project_name: str
    environment: str
    domain_parameter: str
    hosted_zone_id_parameter: str
    certificate_arn_parameter: str
    enable_access_logging: bool
    viewer_request_function: bool
    security_headers_function: bool
    www_record_target: str
    protect_origin_bucket: bool
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def parameter_names(self) -> ParameterNames:
        return ParameterNames(
            domain=self.domain_parameter,
            hosted_zone_id=self.hosted_zone_id_parameter,
            certificate_arn=self.certificate_arn_parameter,
        )

    @classmethod
    def from_pulumi_config(cls, config: pulumi.Config) -> "StackConfig":
        """
        Build StackConfig from pulumi.Config(). All keys in _CONFIG_SPEC but
        tags are required.
        """
        kwargs = {key: parser(config, key) for key, parser in _CONFIG_SPEC}
        return cls(**kwargs)
