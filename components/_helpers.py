"""
Pure helpers for naming, validation, DNS and policy documents. Testable
without Pulumi runtime.

Used by the parameter resolver (validate_*), the edge component
(sanitize_function_name), the access-policy component
(distribution_source_arn, bucket_read_policy) and the DNS component
(www_domain, strip_trailing_dot). No Pulumi types; all functions accept and
return plain Python types so they can be unit-tested without a Pulumi stack.
"""

import re

from components.errors import ConfigurationError

CLOUDFRONT_SERVICE_PRINCIPAL = "cloudfront.amazonaws.com"

_LABEL = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)$")
_ZONE_ID = re.compile(r"^[A-Z0-9]{1,32}$")
# CloudFront only accepts ACM certificates issued in us-east-1.
_CERTIFICATE_ARN = re.compile(
    r"^arn:aws[a-z-]*:acm:us-east-1:\d{12}:certificate/[0-9a-f-]+$"
)
_FUNCTION_NAME_INVALID = re.compile(r"[^A-Za-z0-9_-]")


def strip_trailing_dot(
    domain: str,
) -> str:
    """Return domain without a trailing dot. Idempotent."""
    return domain[:-1] if domain.endswith(".") else domain


def www_domain(
    domain: str,
) -> str:
    """
    Build the "www" hostname for a site domain.

    Route 53 record names are accepted without a trailing dot, so the result
    has none (e.g. "example.com" -> "www.example.com").
    """
    return f"www.{strip_trailing_dot(domain)}"


def validate_site_domain(
    domain: str,
) -> str:
    """
    Normalize and validate a fully-qualified site domain.

    Lowercases, strips a trailing dot and checks every label against RFC 1035
    shape. At least two labels are required: the site is served from a zone
    apex, never from a bare TLD.

    Raises:
        ConfigurationError: if the domain is empty or malformed.
    """
    normalized = strip_trailing_dot(domain.strip().lower())
    labels = normalized.split(".")
    if len(labels) < 2 or not all(_LABEL.match(label) for label in labels):
        raise ConfigurationError(f"site domain {domain!r} is not a fully-qualified name")
    if len(normalized) > 253:
        raise ConfigurationError(f"site domain {domain!r} is longer than 253 characters")
    return normalized


def validate_hosted_zone_id(
    zone_id: str,
) -> str:
    """
    Normalize and validate a Route 53 hosted zone id.

    Accepts the "/hostedzone/<id>" form returned by some APIs and strips it.
    """
    normalized = zone_id.strip().removeprefix("/hostedzone/")
    if not _ZONE_ID.match(normalized):
        raise ConfigurationError(f"hosted zone id {zone_id!r} is malformed")
    return normalized


def validate_certificate_arn(
    arn: str,
) -> str:
    """Check that arn names an ACM certificate usable by CloudFront."""
    normalized = arn.strip()
    if not _CERTIFICATE_ARN.match(normalized):
        raise ConfigurationError(
            f"certificate {arn!r} is not an ACM certificate ARN in us-east-1"
        )
    return normalized


def sanitize_function_name(
    prefix: str,
    suffix: str,
    max_len: int = 64,
) -> str:
    """
    Produce a CloudFront Function name from a prefix and a role suffix.

    CloudFront Function names are unique per account, 1-64 characters from
    [A-Za-z0-9_-]. Disallowed characters become hyphens and the prefix is
    truncated so the suffix always survives.

    Args:
        prefix: Base name (e.g. from Pulumi resource name).
        suffix: Role of the function (e.g. "viewer-request").
        max_len: Maximum length (default 64 per CloudFront).

    Returns:
        Sanitized name (e.g. "site-blog-prod-viewer-request").
    """
    cleaned_suffix = _FUNCTION_NAME_INVALID.sub("-", suffix)
    # Reserve room for "-<suffix>".
    room = max_len - len(cleaned_suffix) - 1
    cleaned_prefix = _FUNCTION_NAME_INVALID.sub("-", prefix)[:room].rstrip("-")
    return f"{cleaned_prefix}-{cleaned_suffix}"


def distribution_source_arn(
    partition: str,
    account_id: str,
    distribution_id: str,
) -> str:
    """
    Build the ARN CloudFront presents as AWS:SourceArn for one distribution.

    CloudFront is a global service: the ARN carries no region.
    """
    if not distribution_id or "*" in distribution_id:
        raise ConfigurationError(
            f"distribution id {distribution_id!r} cannot scope a source ARN"
        )
    return f"arn:{partition}:cloudfront::{account_id}:distribution/{distribution_id}"


def bucket_read_policy(
    bucket_arn: str,
    source_arn: str,
) -> dict:
    """
    Return an S3 bucket policy letting one CloudFront distribution read objects.

    The condition is StringEquals on AWS:SourceArn, so only the distribution
    named by source_arn passes; any other distribution signing with the same
    service principal is denied.
    """
    return {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Sid": "AllowCloudFrontServicePrincipalReadOnly",
                "Effect": "Allow",
                "Principal": {"Service": CLOUDFRONT_SERVICE_PRINCIPAL},
                "Action": "s3:GetObject",
                "Resource": f"{bucket_arn}/*",
                "Condition": {"StringEquals": {"AWS:SourceArn": source_arn}},
            }
        ],
    }
