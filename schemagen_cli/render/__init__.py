"""Artifact renderers for the canonical schema model."""

from .base import Renderer
from .json_manifest import JsonManifestRenderer
from .graphql import GraphQLRenderer
from .resolvers import ResolverRenderer
from .typescript import TypeScriptRenderer
from .generator import ArtifactGenerator, RunResult, resolve_targets, run, run_async

__all__ = [
    "Renderer",
    "JsonManifestRenderer",
    "GraphQLRenderer",
    "ResolverRenderer",
    "TypeScriptRenderer",
    "ArtifactGenerator",
    "RunResult",
    "resolve_targets",
    "run",
    "run_async",
]
