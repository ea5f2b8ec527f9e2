"""
Bucket policy letting one CloudFront distribution read the origin bucket.

Grants ``s3:GetObject`` on every object to the CloudFront service principal,
conditioned on ``AWS:SourceArn`` being exactly this distribution's ARN. The
ARN is assembled from the partition, the deploying account and the
distribution id once all three are known, so the policy is declared after the
distribution in the engine's dependency graph.
"""

import json

import pulumi
import pulumi_aws as aws

from components._helpers import bucket_read_policy, distribution_source_arn

ID: str = "staticsite:aws:OriginAccessPolicy"


class OriginAccessPolicy(pulumi.ComponentResource):
    """S3 bucket policy scoped to one distribution. Resources: BucketPolicy."""

    def __init__(
        self,
        name: str,
        bucket_name: pulumi.Input[str],
        bucket_arn: pulumi.Input[str],
        distribution_id: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ):
        """
        Create the bucket policy once the distribution id is known.

        Args:
            name: Pulumi resource name prefix for the policy.
            bucket_name: Site bucket the policy is attached to.
            bucket_arn: Site bucket ARN; the policy covers ``<arn>/*``.
            distribution_id: Id of the only distribution allowed to read.

        Outputs (set on self, registered for the component):
            source_arn: ARN the policy requires as AWS:SourceArn.
        """
        super().__init__(ID, name, None, opts)

        partition = aws.get_partition_output().partition
        account_id = aws.get_caller_identity_output().account_id

        self.source_arn: pulumi.Output[str] = pulumi.Output.all(
            partition, account_id, distribution_id
        ).apply(lambda args: distribution_source_arn(*args))

        self.policy_document: pulumi.Output[str] = pulumi.Output.all(
            bucket_arn, self.source_arn
        ).apply(lambda args: json.dumps(bucket_read_policy(*args)))

        self.bucket_policy = aws.s3.BucketPolicy(
            resource_name=f"{name}-policy",
            bucket=bucket_name,
            policy=self.policy_document,
            opts=pulumi.ResourceOptions(parent=self),
        )
        self.register_outputs({"source_arn": self.source_arn})
