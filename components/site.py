"""
Static site: the whole edge topology for one domain.

Composes the four parts in dependency order and passes only deferred values
between them, so the engine can order the API calls:

1. ``OriginStorage``: site bucket named after the domain (+ log bucket).
2. ``EdgeDistribution``: OAC, edge functions, distribution bound to the bucket.
3. ``OriginAccessPolicy``: bucket policy scoped to the distribution's ARN.
4. ``SiteDns``: apex alias and www CNAME to the distribution.
"""

import pulumi

from components.access import OriginAccessPolicy
from components.dns import WWW_TARGET_DISTRIBUTION, SiteDns
from components.edge import EdgeDistribution, EdgeFunction
from components.origin import OriginStorage
from components.parameters import DeploymentParameters

ID = "staticsite:aws:StaticSite"


class StaticSite(pulumi.ComponentResource):
    """Origin bucket, CloudFront distribution, bucket policy and DNS records."""

    def __init__(
        self,
        name: str,
        params: DeploymentParameters,
        functions: list[EdgeFunction] | None = None,
        enable_access_logging: bool = True,
        protect_origin_bucket: bool = True,
        www_target: str = WWW_TARGET_DISTRIBUTION,
        opts: pulumi.ResourceOptions | None = None,
    ):
        super().__init__(ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.origin = OriginStorage(
            name=f"{name}-origin",
            bucket_name=params.site_domain,
            enable_access_logging=enable_access_logging,
            protect_bucket=protect_origin_bucket,
            opts=child_opts,
        )

        self.edge = EdgeDistribution(
            name=f"{name}-edge",
            site_domain=params.site_domain,
            certificate_arn=params.certificate_arn,
            origin_domain_name=self.origin.bucket_regional_domain_name,
            functions=functions,
            logging_bucket_domain_name=self.origin.logging_bucket_domain_name,
            opts=child_opts,
        )

        self.access = OriginAccessPolicy(
            name=f"{name}-access",
            bucket_name=self.origin.bucket_name,
            bucket_arn=self.origin.bucket_arn,
            distribution_id=self.edge.distribution_id,
            opts=child_opts,
        )

        self.dns = SiteDns(
            name=f"{name}-dns",
            zone_id=params.dns_zone_id,
            site_domain=params.site_domain,
            distribution_domain_name=self.edge.domain_name,
            distribution_hosted_zone_id=self.edge.hosted_zone_id,
            www_target=www_target,
            opts=child_opts,
        )

        self.register_outputs(
            {
                "bucket_name": self.origin.bucket_name,
                "distribution_id": self.edge.distribution_id,
                "distribution_domain": self.edge.domain_name,
                "url": self.edge.url,
            }
        )
