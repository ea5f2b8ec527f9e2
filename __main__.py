"""
Static edge site - AWS IaC entrypoint.

Declares the delivery topology for a static website from Pulumi config and
three SSM parameters:

- **Parameters**: site domain, Route 53 zone id and ACM certificate ARN are
  looked up in SSM at deployment time (names come from config).
- **Origin**: S3 bucket named after the domain, optional log bucket.
- **Edge**: CloudFront distribution with Origin Access Control patched onto
  its origin, optional viewer-request and viewer-response functions.
- **Access & DNS**: bucket policy scoped to the distribution ARN, apex alias
  and www CNAME records.

Stack exports: bucket_name, distribution_id, distribution_domain, site_url.
"""

import pulumi

from components import (
    SECURITY_HEADERS_FUNCTION,
    VIEWER_REQUEST_FUNCTION,
    StaticSite,
    resolve_parameters,
)
from components.tagging import tag_transformation
from config import StackConfig


def _component_name(project_name: str, environment: str, prefix: str) -> str:
    return f"{prefix}-{project_name}-{environment}"


def main():
    """
    Build the static site and export stack outputs.

    Reads config, registers the stack-wide tag transformation when tags are
    configured, resolves the deployment parameters, declares the site and
    exports the main identifiers.
    """
    config = StackConfig.from_pulumi_config(pulumi.Config())

    # Registered before any resource so every taggable resource is covered.
    if config.tags:
        pulumi.runtime.register_stack_transformation(tag_transformation(config.tags))

    functions = []
    if config.viewer_request_function:
        functions.append(VIEWER_REQUEST_FUNCTION)
    if config.security_headers_function:
        functions.append(SECURITY_HEADERS_FUNCTION)

    site = StaticSite(
        name=_component_name(config.project_name, config.environment, "site"),
        params=resolve_parameters(config.parameter_names),
        functions=functions,
        enable_access_logging=config.enable_access_logging,
        protect_origin_bucket=config.protect_origin_bucket,
        www_target=config.www_record_target,
    )

    for output_name, value in [
        ("bucket_name", site.origin.bucket_name),
        ("distribution_id", site.edge.distribution_id),
        ("distribution_domain", site.edge.domain_name),
        ("site_url", site.edge.url),
    ]:
        pulumi.export(output_name, value)


if __name__ == "__main__":
    main()
