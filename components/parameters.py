"""
Deployment parameters read from the AWS SSM Parameter Store.

The site domain, Route 53 zone id and ACM certificate ARN are not part of the
program: they live in SSM under names given by stack config and are looked
up on every deployment, so changing a parameter takes effect on the next
``pulumi up`` without a code change. Lookups are deferred (``Output``), and a
missing parameter fails the lookup, which aborts the deployment.

Each value is validated inside its ``apply`` before any resource sees it; a
malformed value raises ``ConfigurationError``.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from components._helpers import (
    validate_certificate_arn,
    validate_hosted_zone_id,
    validate_site_domain,
)


@dataclass(frozen=True)
class ParameterNames:
    """SSM parameter names holding the deployment parameters."""

    domain: str
    hosted_zone_id: str
    certificate_arn: str


@dataclass(frozen=True)
class DeploymentParameters:
    """
    Resolved deployment parameters.

    Attributes:
        site_domain: Apex domain of the site, lowercase, no trailing dot.
            Also the origin bucket name.
        dns_zone_id: Route 53 hosted zone id whose zone is site_domain.
        certificate_arn: us-east-1 ACM certificate covering site_domain and
            its www variant.
    """

    site_domain: pulumi.Output[str]
    dns_zone_id: pulumi.Output[str]
    certificate_arn: pulumi.Output[str]


def _lookup(name: str) -> pulumi.Output[str]:
    return aws.ssm.get_parameter_output(name=name).value


def resolve_parameters(names: ParameterNames) -> DeploymentParameters:
    """Look up and validate the three deployment parameters."""
    return DeploymentParameters(
        site_domain=_lookup(names.domain).apply(validate_site_domain),
        dns_zone_id=_lookup(names.hosted_zone_id).apply(validate_hosted_zone_id),
        certificate_arn=_lookup(names.certificate_arn).apply(validate_certificate_arn),
    )
