"""
Static-site edge components.

Each part of the topology is its own ComponentResource for clear ownership,
testability, and reuse. ``StaticSite`` composes them with output chaining:

- **OriginStorage**: S3 site bucket named after the domain + optional log
  bucket; exposes bucket attributes.
- **EdgeDistribution**: CloudFront distribution with OAC patched onto its
  origin and optional CloudFront Functions; exposes id, domain and zone id.
- **OriginAccessPolicy**: bucket policy readable only by that distribution.
- **SiteDns**: Route 53 apex alias + www CNAME to the distribution.
"""

from components.access import OriginAccessPolicy
from components.dns import SiteDns
from components.edge import (
    SECURITY_HEADERS_FUNCTION,
    VIEWER_REQUEST_FUNCTION,
    EdgeDistribution,
    EdgeFunction,
)
from components.origin import OriginStorage
from components.parameters import DeploymentParameters, ParameterNames, resolve_parameters
from components.site import StaticSite

__all__ = [
    "SECURITY_HEADERS_FUNCTION",
    "VIEWER_REQUEST_FUNCTION",
    "DeploymentParameters",
    "EdgeDistribution",
    "EdgeFunction",
    "OriginAccessPolicy",
    "OriginStorage",
    "ParameterNames",
    "SiteDns",
    "StaticSite",
    "resolve_parameters",
]
