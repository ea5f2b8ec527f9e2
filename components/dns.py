"""
Route 53 records for the site: apex alias and www CNAME.

This component looks up the existing hosted zone by id, checks that it is the
zone of the site domain, and creates two records:

- ``<domain>`` A record aliased to the CloudFront distribution. An alias, not
  a CNAME, because a zone apex cannot hold a CNAME.
- ``www.<domain>`` CNAME. Its target is configurable with ``www_target``:
  ``distribution`` points it at the distribution domain name directly,
  ``apex`` points it at the apex hostname, which resolves to the distribution
  through the alias record at the cost of one extra resolution hop.
"""

import pulumi
import pulumi_aws as aws

from components._helpers import strip_trailing_dot, www_domain
from components.errors import ConfigurationError

ID = "staticsite:aws:SiteDns"

WWW_TARGET_DISTRIBUTION = "distribution"
WWW_TARGET_APEX = "apex"
WWW_TARGETS = (WWW_TARGET_DISTRIBUTION, WWW_TARGET_APEX)


def _check_zone_name(args: list[str]) -> str:
    zone_name, site_domain = args
    if strip_trailing_dot(zone_name).lower() != site_domain:
        raise ConfigurationError(
            f"hosted zone {zone_name!r} is not the zone of site domain {site_domain!r}"
        )
    return site_domain


class SiteDns(pulumi.ComponentResource):
    """
    Apex A alias + www CNAME in an existing hosted zone.

    Apex record: ``<site_domain>`` -> distribution (alias).
    www record: ``www.<site_domain>`` -> distribution or apex (TTL 300).
    """

    def __init__(
        self,
        name: str,
        zone_id: pulumi.Input[str],
        site_domain: pulumi.Input[str],
        distribution_domain_name: pulumi.Input[str],
        distribution_hosted_zone_id: pulumi.Input[str],
        www_target: str = WWW_TARGET_DISTRIBUTION,
        www_ttl: int = 300,
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Look up the zone and create the two records.

        Args:
            name: Pulumi resource name prefix for the records.
            zone_id: Existing hosted zone id; its zone must be site_domain.
            site_domain: Apex domain of the site.
            distribution_domain_name: CloudFront domain (alias/CNAME target).
            distribution_hosted_zone_id: CloudFront's zone id for the alias.
            www_target: "distribution" or "apex"; CNAME target for www.
            www_ttl: TTL in seconds for the www CNAME record.

        Outputs (set on self, registered for the component):
            apex_fqdn: Name of the apex alias record.
            www_fqdn: Name of the www CNAME record.
        """
        super().__init__(ID, name, None, opts)

        if www_target not in WWW_TARGETS:
            raise ConfigurationError(
                f"www_target must be one of {', '.join(WWW_TARGETS)}, got {www_target!r}"
            )

        child_opts = pulumi.ResourceOptions(parent=self)

        zone = aws.route53.get_zone_output(zone_id=zone_id)
        # Records are only declared against a zone that matches the domain.
        record_domain = pulumi.Output.all(zone.name, site_domain).apply(_check_zone_name)

        self.apex_record = aws.route53.Record(
            resource_name=f"{name}-apex",
            zone_id=zone.zone_id,
            name=record_domain,
            type="A",
            aliases=[
                aws.route53.RecordAliasArgs(
                    name=distribution_domain_name,
                    zone_id=distribution_hosted_zone_id,
                    evaluate_target_health=False,
                )
            ],
            opts=child_opts,
        )

        if www_target == WWW_TARGET_APEX:
            target = record_domain
        else:
            target = pulumi.Output.from_input(distribution_domain_name)
        self.www_record = aws.route53.Record(
            resource_name=f"{name}-www",
            zone_id=zone.zone_id,
            name=record_domain.apply(www_domain),
            type="CNAME",
            ttl=www_ttl,
            records=[target],
            opts=child_opts,
        )
        pulumi.log.info(f"www record targets the {www_target}", resource=self)

        self.apex_fqdn: pulumi.Output[str] = self.apex_record.name
        self.www_fqdn: pulumi.Output[str] = self.www_record.name
        self.register_outputs({"apex_fqdn": self.apex_fqdn, "www_fqdn": self.www_fqdn})
