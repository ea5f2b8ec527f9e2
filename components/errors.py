"""
Errors raised while declaring the site topology.

All of them propagate to the Pulumi engine, which aborts the deployment and
reports the message to the operator. Nothing here is retried.
"""


class TopologyError(Exception):
    """Base class for declaration-time failures."""


class ConfigurationError(TopologyError):
    """A required parameter is missing, malformed or inconsistent."""


class PropertyPathError(TopologyError):
    """An override targets an attribute path absent from the resource tree."""

    def __init__(self, path: str, segment: str):
        self.path = path
        self.segment = segment
        super().__init__(f"no attribute {segment!r} on override path {path!r}")
