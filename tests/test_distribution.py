"""Tests for the distribution attribute tree and its override pass"""

import pytest

from components import _distribution
from components.errors import PropertyPathError, TopologyError

CERT = "arn:aws:acm:us-east-1:123456789012:certificate/abc"


def build(**overrides):
    kwargs = {
        "origin_id": "site-s3-origin",
        "origin_domain_name": "example.com.s3.eu-west-1.amazonaws.com",
        "aliases": ["example.com", "www.example.com"],
        "certificate_arn": CERT,
    }
    kwargs.update(overrides)
    return _distribution.build_distribution_config(**kwargs)


class TestBuildDistributionConfig:
    def test_aliases_are_apex_and_www(self):
        assert set(build()["aliases"]) == {"example.com", "www.example.com"}

    def test_single_origin_behind_default_behavior(self):
        tree = build()
        assert len(tree["origins"]) == 1
        assert tree["default_cache_behavior"]["target_origin_id"] == tree["origins"][0]["origin_id"]

    def test_read_only_https_behavior(self):
        behavior = build()["default_cache_behavior"]
        assert behavior["allowed_methods"] == ["GET", "HEAD"]
        assert behavior["viewer_protocol_policy"] == "redirect-to-https"
        assert behavior["compress"] is True

    def test_builder_leaves_oac_slot_unset(self):
        origin = build()["origins"][0]
        assert origin["origin_access_control_id"] is None
        assert "origin_access_identity" in origin["s3_origin_config"]

    @pytest.mark.parametrize(
        "overrides",
        [
            {},
            {"aliases": ["other.org", "www.other.org"]},
            {"certificate_arn": "arn:aws:acm:us-east-1:999999999999:certificate/x"},
            {"logging_bucket_domain_name": "logs.s3.amazonaws.com"},
        ],
    )
    def test_price_class_and_tls_are_fixed(self, overrides):
        tree = build(**overrides)
        assert tree["price_class"] == "PriceClass_100"
        assert tree["viewer_certificate"]["minimum_protocol_version"] == "TLSv1.2_2021"

    def test_certificate_uses_sni(self):
        certificate = build()["viewer_certificate"]
        assert certificate["acm_certificate_arn"] == CERT
        assert certificate["ssl_support_method"] == "sni-only"

    def test_logging_disabled_by_default(self):
        assert build()["logging_config"] is None

    def test_logging_to_bucket(self):
        tree = build(logging_bucket_domain_name="logs.s3.amazonaws.com")
        assert tree["logging_config"] == {"bucket": "logs.s3.amazonaws.com", "include_cookies": False}

    def test_both_function_event_types(self):
        tree = build(
            function_associations=[
                ("viewer-request", "arn:fn:request"),
                ("viewer-response", "arn:fn:headers"),
            ]
        )
        assert tree["default_cache_behavior"]["function_associations"] == [
            {"event_type": "viewer-request", "function_arn": "arn:fn:request"},
            {"event_type": "viewer-response", "function_arn": "arn:fn:headers"},
        ]

    def test_rejects_two_functions_on_one_event(self):
        with pytest.raises(TopologyError):
            build(function_associations=[("viewer-request", "a"), ("viewer-request", "b")])

    def test_rejects_unknown_event_type(self):
        with pytest.raises(TopologyError):
            build(function_associations=[("origin-request", "a")])

    def test_same_inputs_give_equal_trees(self):
        assert build() == build()


class TestPatchProperty:
    def test_sets_nested_list_path(self):
        tree = build()
        _distribution.patch_property(tree, "origins.0.origin_access_control_id", "oac-1")
        assert tree["origins"][0]["origin_access_control_id"] == "oac-1"

    def test_unknown_key_fails(self):
        tree = build()
        with pytest.raises(PropertyPathError) as excinfo:
            _distribution.patch_property(tree, "origins.0.originAccessControlId", "oac-1")
        assert excinfo.value.segment == "originAccessControlId"

    def test_out_of_range_index_fails(self):
        with pytest.raises(PropertyPathError):
            _distribution.patch_property(build(), "origins.1.origin_access_control_id", "oac-1")

    def test_descending_into_unset_node_fails(self):
        with pytest.raises(PropertyPathError):
            _distribution.patch_property(build(), "logging_config.bucket", "logs")

    def test_failed_patch_leaves_tree_untouched(self):
        tree = build()
        with pytest.raises(PropertyPathError):
            _distribution.patch_property(tree, "origins.0.missing", "x")
        assert tree == build()


class TestAttachOriginAccessControl:
    def test_sets_oac_and_clears_legacy_identity(self):
        tree = _distribution.attach_origin_access_control(build(), "oac-1")
        origin = tree["origins"][0]
        assert origin["origin_access_control_id"] == "oac-1"
        assert origin["s3_origin_config"]["origin_access_identity"] == ""

    def test_patched_tree_passes_check(self):
        tree = _distribution.attach_origin_access_control(build(), "oac-1")
        _distribution.check_origin_access(tree)

    def test_check_rejects_both_mechanisms(self):
        tree = build()
        tree["origins"][0]["origin_access_control_id"] = "oac-1"
        tree["origins"][0]["s3_origin_config"]["origin_access_identity"] = (
            "origin-access-identity/cloudfront/E2LEGACY"
        )
        with pytest.raises(TopologyError):
            _distribution.check_origin_access(tree)


class TestPruneUnset:
    def test_drops_none_entries(self):
        tree = _distribution.prune_unset(build())
        assert "logging_config" not in tree
        assert "comment" not in tree
        assert "function_associations" not in tree["default_cache_behavior"]

    def test_keeps_empty_string_identity(self):
        tree = _distribution.prune_unset(
            _distribution.attach_origin_access_control(build(), "oac-1")
        )
        assert tree["origins"][0]["s3_origin_config"] == {"origin_access_identity": ""}

    def test_does_not_mutate_input(self):
        tree = build()
        _distribution.prune_unset(tree)
        assert tree["logging_config"] is None
