"""
Stack-wide tags applied as a resource transformation.

Tags are not ambient state: the entrypoint registers ``tag_transformation``
only when the stack config has tags, and the transformation then merges them
into every taggable resource declared afterwards. Tags set on a resource
itself take precedence.
"""

from typing import Any, Callable

import pulumi

# Resource types in this stack that accept a ``tags`` input.
TAGGABLE_TYPES: frozenset[str] = frozenset(
    {
        "aws:s3/bucket:Bucket",
        "aws:s3/bucketV2:BucketV2",
        "aws:cloudfront/distribution:Distribution",
    }
)


def merge_tags(
    props: dict[str, Any],
    tags: dict[str, str],
) -> dict[str, Any]:
    """
    Return props with tags merged under any tags already present.

    A resource may pass its own tags as an Output; the merge then happens
    once they resolve.
    """
    own = props.get("tags")
    if isinstance(own, pulumi.Output):
        merged = own.apply(lambda resolved: {**tags, **(resolved or {})})
    else:
        merged = {**tags, **(own or {})}
    return {**props, "tags": merged}


def tag_transformation(
    tags: dict[str, str],
) -> Callable[[pulumi.ResourceTransformationArgs], pulumi.ResourceTransformationResult | None]:
    """Build a stack transformation adding tags to taggable resources."""

    def transform(
        args: pulumi.ResourceTransformationArgs,
    ) -> pulumi.ResourceTransformationResult | None:
        if args.type_ not in TAGGABLE_TYPES:
            return None
        return pulumi.ResourceTransformationResult(
            props=merge_tags(args.props, tags),
            opts=args.opts,
        )

    return transform
