"""
CloudFront distribution attribute tree and the override pass applied to it.

``build_distribution_config`` turns high-level site settings into the nested
dict that ``aws.cloudfront.Distribution`` accepts as keyword arguments. Like
the classic S3 origin form, the builder only knows the per-origin identity
scheme (``s3_origin_config.origin_access_identity``); the origin access
control id is left as an unset slot. ``attach_origin_access_control`` then
patches the built tree so origin reads go through the signed OAC binding and
the legacy identity is cleared.

Values inside the tree may be ``pulumi.Output`` objects; nothing here looks
inside them, so the module stays free of Pulumi imports and runs in plain
unit tests.
"""

from typing import Any

from components.errors import PropertyPathError, TopologyError

# Fixed for every deployment: only North America and Europe edge locations,
# no TLS downgrade below 1.2.
PRICE_CLASS = "PriceClass_100"
MINIMUM_PROTOCOL_VERSION = "TLSv1.2_2021"

# AWS managed "CachingOptimized" cache policy.
CACHING_OPTIMIZED_POLICY_ID = "658327ea-f89d-4fab-a63d-7e88639e58f6"

DEFAULT_ROOT_OBJECT = "index.html"
READ_ONLY_METHODS = ["GET", "HEAD"]

VIEWER_REQUEST = "viewer-request"
VIEWER_RESPONSE = "viewer-response"
EVENT_TYPES = (VIEWER_REQUEST, VIEWER_RESPONSE)


def build_distribution_config(
    *,
    origin_id: str,
    origin_domain_name: Any,
    aliases: list,
    certificate_arn: Any,
    function_associations: list[tuple[str, Any]] | None = None,
    logging_bucket_domain_name: Any = None,
    comment: str | None = None,
) -> dict:
    """
    Build the distribution attribute tree.

    Args:
        origin_id: Identifier of the single S3 origin inside the distribution.
        origin_domain_name: Regional domain name of the origin bucket.
        aliases: Hostnames served by the distribution (apex and www).
        certificate_arn: ACM certificate covering every alias.
        function_associations: (event_type, function_arn) pairs for the
            default behavior. At most one per event type.
        logging_bucket_domain_name: Bucket domain receiving standard access
            logs; logging is disabled when None.
        comment: Free-text distribution comment.

    Returns:
        Nested dict of Distribution arguments. Unset attributes are None and
        must be removed with ``prune_unset`` before emission.

    Raises:
        TopologyError: on an unknown event type or two functions on one.
    """
    associations = []
    seen: set[str] = set()
    for event_type, function_arn in function_associations or []:
        if event_type not in EVENT_TYPES:
            raise TopologyError(f"unsupported function event type {event_type!r}")
        if event_type in seen:
            raise TopologyError(f"more than one function bound to {event_type}")
        seen.add(event_type)
        associations.append({"event_type": event_type, "function_arn": function_arn})

    logging_config = None
    if logging_bucket_domain_name is not None:
        logging_config = {
            "bucket": logging_bucket_domain_name,
            "include_cookies": False,
        }

    return {
        "enabled": True,
        "comment": comment,
        "is_ipv6_enabled": True,
        "http_version": "http2",
        "default_root_object": DEFAULT_ROOT_OBJECT,
        "aliases": list(aliases),
        "price_class": PRICE_CLASS,
        "origins": [
            {
                "origin_id": origin_id,
                "domain_name": origin_domain_name,
                "origin_access_control_id": None,
                "s3_origin_config": {"origin_access_identity": None},
            }
        ],
        "default_cache_behavior": {
            "target_origin_id": origin_id,
            "viewer_protocol_policy": "redirect-to-https",
            "allowed_methods": list(READ_ONLY_METHODS),
            "cached_methods": list(READ_ONLY_METHODS),
            "compress": True,
            "cache_policy_id": CACHING_OPTIMIZED_POLICY_ID,
            "function_associations": associations or None,
        },
        "restrictions": {"geo_restriction": {"restriction_type": "none"}},
        "viewer_certificate": {
            "acm_certificate_arn": certificate_arn,
            "ssl_support_method": "sni-only",
            "minimum_protocol_version": MINIMUM_PROTOCOL_VERSION,
        },
        "logging_config": logging_config,
    }


def patch_property(
    tree: dict,
    path: str,
    value: Any,
) -> None:
    """
    Set the attribute at a dotted path inside tree, in place.

    Numeric segments index lists ("origins.0.origin_access_control_id").
    Every segment, the last included, must already exist: patching a path the
    tree does not have is an error rather than a silent insertion.

    Raises:
        PropertyPathError: naming the first segment that does not resolve.
    """
    segments = path.split(".")
    node: Any = tree
    for segment in segments[:-1]:
        node = _step(node, segment, path)
    last = segments[-1]
    if isinstance(node, list):
        index = _index(node, last, path)
        node[index] = value
    elif isinstance(node, dict) and last in node:
        node[last] = value
    else:
        raise PropertyPathError(path, last)


def _step(node: Any, segment: str, path: str) -> Any:
    if isinstance(node, list):
        return node[_index(node, segment, path)]
    if isinstance(node, dict) and segment in node and node[segment] is not None:
        return node[segment]
    raise PropertyPathError(path, segment)


def _index(node: list, segment: str, path: str) -> int:
    if not segment.isdigit() or int(segment) >= len(node):
        raise PropertyPathError(path, segment)
    return int(segment)


def attach_origin_access_control(
    tree: dict,
    origin_access_control_id: Any,
    origin_index: int = 0,
) -> dict:
    """
    Bind an origin access control to one origin of a built tree.

    Sets the OAC id on the origin and clears its legacy origin access
    identity to "", which is what CloudFront expects for an S3 REST origin
    signed with OAC. Returns the same tree.
    """
    origin = f"origins.{origin_index}"
    patch_property(tree, f"{origin}.origin_access_control_id", origin_access_control_id)
    patch_property(tree, f"{origin}.s3_origin_config.origin_access_identity", "")
    return tree


def check_origin_access(
    tree: dict,
) -> None:
    """
    Reject origins that carry both an OAC id and a legacy identity.

    Raises:
        TopologyError: if any origin mixes the two mechanisms.
    """
    for position, origin in enumerate(tree.get("origins") or []):
        if origin.get("origin_access_control_id") is None:
            continue
        legacy = (origin.get("s3_origin_config") or {}).get("origin_access_identity")
        if legacy:
            raise TopologyError(
                f"origin {position} has both an origin access control "
                "and a legacy origin access identity"
            )


def prune_unset(
    tree: Any,
) -> Any:
    """
    Return a copy of tree with every None-valued dict entry removed.

    Containers are rebuilt; leaves (strings, Outputs) are shared.
    """
    if isinstance(tree, dict):
        return {key: prune_unset(value) for key, value in tree.items() if value is not None}
    if isinstance(tree, list):
        return [prune_unset(item) for item in tree]
    return tree
