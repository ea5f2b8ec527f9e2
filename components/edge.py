"""
AWS edge topology: CloudFront Functions + Origin Access Control + Distribution.

This component declares the CloudFront distribution in front of the origin
bucket. The distribution serves the apex domain and its www variant with an
ACM certificate (SNI, TLS 1.2 minimum), redirects HTTP to HTTPS, allows only
GET/HEAD and uses the cheapest price class.

The distribution arguments are built as a plain attribute tree by
``components._distribution``; the origin access control is bound to the
origin by patching that tree before the resource is declared, and the patched
tree is checked so an origin never carries both OAC and a legacy origin
access identity.

Edge functions are optional and independent: the path-normalising function
runs on viewer-request, the security-header function on viewer-response.
"""

from dataclasses import dataclass
from pathlib import Path

import pulumi
import pulumi_aws as aws

from components._distribution import (
    VIEWER_REQUEST,
    VIEWER_RESPONSE,
    attach_origin_access_control,
    build_distribution_config,
    check_origin_access,
    prune_unset,
)
from components._helpers import sanitize_function_name, www_domain

ID: str = "staticsite:aws:EdgeDistribution"

FUNCTIONS_DIR = Path(__file__).parent / "functions"
FUNCTION_RUNTIME = "cloudfront-js-2.0"


@dataclass(frozen=True)
class EdgeFunction:
    """A CloudFront Function shipped with the project."""

    key: str
    event_type: str
    source: str
    comment: str

    def code(self) -> str:
        return (FUNCTIONS_DIR / self.source).read_text(encoding="utf-8")


VIEWER_REQUEST_FUNCTION = EdgeFunction(
    key="viewer-request",
    event_type=VIEWER_REQUEST,
    source="viewer_request.js",
    comment="Rewrite directory URIs to index.html",
)
SECURITY_HEADERS_FUNCTION = EdgeFunction(
    key="security-headers",
    event_type=VIEWER_RESPONSE,
    source="security_headers.js",
    comment="Add HTTP security headers",
)


class EdgeDistribution(pulumi.ComponentResource):
    """
    CloudFront distribution (OAC, HTTPS, custom domain) + optional functions.

    Resources: OriginAccessControl, zero to two Functions, Distribution.
    """

    def __init__(
        self,
        name: str,
        site_domain: pulumi.Input[str],
        certificate_arn: pulumi.Input[str],
        origin_domain_name: pulumi.Input[str],
        functions: list[EdgeFunction] | None = None,
        logging_bucket_domain_name: pulumi.Input[str] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create the OAC, the edge functions and the distribution.

        Args:
            name: Pulumi resource name prefix; also the prefix of the OAC and
                function names in AWS.
            site_domain: Apex domain; the distribution aliases are the apex
                and "www.<site_domain>".
            certificate_arn: us-east-1 ACM certificate covering both aliases.
            origin_domain_name: Regional domain name of the site bucket.
            functions: Edge functions to attach, at most one per event type.
            logging_bucket_domain_name: Log bucket domain; None disables
                standard logging.

        Outputs (set on self, registered for the component):
            distribution_id: Distribution id (scopes the bucket policy).
            distribution_arn: Distribution ARN.
            domain_name: Distribution FQDN (alias / CNAME target).
            hosted_zone_id: CloudFront's Route 53 zone id for alias records.
            url: HTTPS URL of the site.
            origin_access_control_id: Id of the OAC bound to the origin.
        """
        super().__init__(ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        # retain_on_delete=True avoids AWS 409 OriginAccessControlInUse on
        # destroy: AWS may still reference the OAC briefly after the
        # distribution is gone.
        oac = aws.cloudfront.OriginAccessControl(
            resource_name=f"{name}-oac",
            name=f"{name}-oac",
            description=pulumi.Output.concat("Origin access control for ", site_domain),
            origin_access_control_origin_type="s3",
            signing_behavior="always",
            signing_protocol="sigv4",
            opts=pulumi.ResourceOptions(parent=self, retain_on_delete=True),
        )

        associations = []
        for function in functions or []:
            cf_function = aws.cloudfront.Function(
                resource_name=f"{name}-{function.key}",
                name=sanitize_function_name(name, function.key),
                runtime=FUNCTION_RUNTIME,
                comment=function.comment,
                code=function.code(),
                publish=True,
                opts=child_opts,
            )
            associations.append((function.event_type, cf_function.arn))

        site_domain = pulumi.Output.from_input(site_domain)
        tree = build_distribution_config(
            origin_id=f"{name}-s3-origin",
            origin_domain_name=origin_domain_name,
            aliases=[site_domain, site_domain.apply(www_domain)],
            certificate_arn=certificate_arn,
            function_associations=associations,
            logging_bucket_domain_name=logging_bucket_domain_name,
            comment=f"Static site {name}",
        )
        attach_origin_access_control(tree, oac.id)
        check_origin_access(tree)

        # Explicit depends_on so destroy order is correct: distribution is
        # deleted before the OAC.
        self.distribution = aws.cloudfront.Distribution(
            resource_name=f"{name}-cdn",
            opts=pulumi.ResourceOptions(parent=self, depends_on=[oac]),
            **prune_unset(tree),
        )
        pulumi.log.info(
            f"distribution declared with {len(associations)} edge function(s)",
            resource=self,
        )

        self.distribution_id: pulumi.Output[str] = self.distribution.id
        self.distribution_arn: pulumi.Output[str] = self.distribution.arn
        self.domain_name: pulumi.Output[str] = self.distribution.domain_name
        self.hosted_zone_id: pulumi.Output[str] = self.distribution.hosted_zone_id
        self.url: pulumi.Output[str] = pulumi.Output.concat("https://", site_domain)
        self.origin_access_control_id: pulumi.Output[str] = oac.id
        self.register_outputs(
            {
                "distribution_id": self.distribution_id,
                "distribution_arn": self.distribution_arn,
                "domain_name": self.domain_name,
                "hosted_zone_id": self.hosted_zone_id,
                "url": self.url,
                "origin_access_control_id": self.origin_access_control_id,
            }
        )
