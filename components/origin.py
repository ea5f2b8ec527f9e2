"""
Origin storage: the site bucket and the optional access-log bucket.

The site bucket is named after the site domain, which ties the store's
identity to the domain with no separate naming step. S3 bucket names are
global, so the domain must not already be taken as a bucket name anywhere; a
collision is reported by AWS at apply time. Block Public Access is always on:
objects are read only through CloudFront with Origin Access Control.

Renaming the bucket (a new site domain) forces replacement, which deletes
the store. With ``protect=True`` the engine refuses that plan and the operator
has to unprotect explicitly.

The log bucket uses ObjectWriter ownership: CloudFront standard logging
writes objects through ACLs from the log-delivery account, which bucket-owner
enforced ownership would reject.
"""

import pulumi
import pulumi_aws as aws

ID: str = "staticsite:aws:OriginStorage"

# Applied to both buckets. Used by tests and callers to assert on secure
# defaults.
S3_BLOCK_PUBLIC_ACCESS: dict[str, bool] = {
    "block_public_acls": True,
    "block_public_policy": True,
    "ignore_public_acls": True,
    "restrict_public_buckets": True,
}


class OriginStorage(pulumi.ComponentResource):
    """
    Private S3 site bucket + optional ObjectWriter log bucket.

    Resources: Bucket, BucketPublicAccessBlock, and optionally a log Bucket
    with BucketOwnershipControls and BucketPublicAccessBlock.
    """

    def __init__(
        self,
        name: str,
        bucket_name: pulumi.Input[str],
        enable_access_logging: bool = True,
        protect_bucket: bool = True,
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create the site bucket and, if enabled, the log bucket.

        Args:
            name: Pulumi resource name prefix for the buckets.
            bucket_name: Site bucket name; the resolved site domain.
            enable_access_logging: If True, declare the log bucket.
            protect_bucket: If True, mark the site bucket protected so a
                replacement (e.g. a domain change) fails instead of deleting it.

        Outputs (set on self, registered for the component):
            bucket_name, bucket_arn, bucket_regional_domain_name:
                Site bucket attributes for the distribution and policy.
            logging_bucket_domain_name: Log bucket domain name for the
                distribution's logging config, or None when disabled.
        """
        super().__init__(ID, name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.bucket = aws.s3.Bucket(
            resource_name=f"{name}-site",
            bucket=bucket_name,
            opts=pulumi.ResourceOptions(parent=self, protect=protect_bucket),
        )
        if not protect_bucket:
            pulumi.log.warn(
                "site bucket is not protected: a site domain change will "
                "replace it and delete its contents",
                resource=self,
            )

        aws.s3.BucketPublicAccessBlock(
            resource_name=f"{name}-site-block-public",
            bucket=self.bucket.id,
            opts=child_opts,
            **S3_BLOCK_PUBLIC_ACCESS,
        )

        self.logging_bucket: aws.s3.Bucket | None = None
        self.logging_bucket_domain_name: pulumi.Output[str] | None = None
        if enable_access_logging:
            # Log contents are disposable; the bucket should not block destroy.
            self.logging_bucket = aws.s3.Bucket(
                resource_name=f"{name}-logs",
                force_destroy=True,
                opts=child_opts,
            )
            aws.s3.BucketOwnershipControls(
                resource_name=f"{name}-logs-ownership",
                bucket=self.logging_bucket.id,
                rule=aws.s3.BucketOwnershipControlsRuleArgs(
                    object_ownership="ObjectWriter",
                ),
                opts=child_opts,
            )
            aws.s3.BucketPublicAccessBlock(
                resource_name=f"{name}-logs-block-public",
                bucket=self.logging_bucket.id,
                opts=child_opts,
                **S3_BLOCK_PUBLIC_ACCESS,
            )
            self.logging_bucket_domain_name = self.logging_bucket.bucket_domain_name

        pulumi.log.info(
            f"origin storage declared (access logging: {enable_access_logging})",
            resource=self,
        )

        self.bucket_name: pulumi.Output[str] = self.bucket.bucket
        self.bucket_arn: pulumi.Output[str] = self.bucket.arn
        self.bucket_regional_domain_name: pulumi.Output[str] = (
            self.bucket.bucket_regional_domain_name
        )
        self.register_outputs(
            {
                "bucket_name": self.bucket_name,
                "bucket_arn": self.bucket_arn,
                "bucket_regional_domain_name": self.bucket_regional_domain_name,
                "logging_bucket_domain_name": self.logging_bucket_domain_name,
            }
        )
