"""Tests for pure helpers"""

import pytest

from components import _helpers
from components.errors import ConfigurationError


class TestWwwDomain:
    def test_builds_www_hostname(self):
        assert _helpers.www_domain("example.com") == "www.example.com"

    def test_domain_with_trailing_dot(self):
        assert _helpers.www_domain("example.com.") == "www.example.com"


class TestValidateSiteDomain:
    def test_lowercases_and_strips_dot(self):
        assert _helpers.validate_site_domain("Example.COM.") == "example.com"

    def test_accepts_subdomain(self):
        assert _helpers.validate_site_domain("blog.example.co.uk") == "blog.example.co.uk"

    @pytest.mark.parametrize("domain", ["", "localhost", "-bad.example.com", "exa mple.com", "a..com"])
    def test_rejects_malformed(self, domain):
        with pytest.raises(ConfigurationError):
            _helpers.validate_site_domain(domain)


class TestValidateHostedZoneId:
    def test_strips_hostedzone_prefix(self):
        assert _helpers.validate_hosted_zone_id("/hostedzone/Z0123ABC") == "Z0123ABC"

    def test_rejects_lowercase(self):
        with pytest.raises(ConfigurationError):
            _helpers.validate_hosted_zone_id("z0123abc")


class TestValidateCertificateArn:
    ARN = "arn:aws:acm:us-east-1:123456789012:certificate/0a1b2c3d-0000-1111-2222-333344445555"

    def test_accepts_us_east_1(self):
        assert _helpers.validate_certificate_arn(f" {self.ARN} ") == self.ARN

    def test_rejects_other_region(self):
        with pytest.raises(ConfigurationError):
            _helpers.validate_certificate_arn(self.ARN.replace("us-east-1", "eu-west-1"))

    def test_rejects_non_acm_arn(self):
        with pytest.raises(ConfigurationError):
            _helpers.validate_certificate_arn("arn:aws:iam::123456789012:server-certificate/site")


class TestSanitizeFunctionName:
    def test_joins_prefix_and_suffix(self):
        assert (
            _helpers.sanitize_function_name("site-blog-prod-edge", "viewer-request")
            == "site-blog-prod-edge-viewer-request"
        )

    def test_replaces_disallowed_chars(self):
        assert _helpers.sanitize_function_name("site.blog:prod", "headers") == "site-blog-prod-headers"

    def test_respects_max_len_and_keeps_suffix(self):
        result = _helpers.sanitize_function_name("a" * 80, "security-headers")
        assert len(result) == 64
        assert result.endswith("-security-headers")


class TestDistributionSourceArn:
    def test_exact_arn_for_distribution(self):
        assert (
            _helpers.distribution_source_arn("aws", "123456789012", "E123")
            == "arn:aws:cloudfront::123456789012:distribution/E123"
        )

    def test_other_partition(self):
        assert _helpers.distribution_source_arn("aws-cn", "1", "E9").startswith("arn:aws-cn:")

    @pytest.mark.parametrize("distribution_id", ["", "*", "E*"])
    def test_rejects_wildcards(self, distribution_id):
        with pytest.raises(ConfigurationError):
            _helpers.distribution_source_arn("aws", "123456789012", distribution_id)


class TestBucketReadPolicy:
    def test_single_read_only_statement(self):
        policy = _helpers.bucket_read_policy(
            "arn:aws:s3:::example.com",
            "arn:aws:cloudfront::123456789012:distribution/E123",
        )
        (statement,) = policy["Statement"]
        assert statement["Effect"] == "Allow"
        assert statement["Action"] == "s3:GetObject"
        assert statement["Principal"] == {"Service": "cloudfront.amazonaws.com"}
        assert statement["Resource"] == "arn:aws:s3:::example.com/*"

    def test_condition_is_string_equals(self):
        source_arn = "arn:aws:cloudfront::123456789012:distribution/E123"
        policy = _helpers.bucket_read_policy("arn:aws:s3:::example.com", source_arn)
        assert policy["Statement"][0]["Condition"] == {
            "StringEquals": {"AWS:SourceArn": source_arn}
        }
