"""Runs the renderers over the canonical model and drives a full generation run."""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Union

from ..database.assembler import SchemaAssembler
from ..database.base import SchemaSource
from ..database.models import TableSchema
from ..errors import OutputError, RenderError, SchemaGenError, SchemaSourceError
from ..options import AssemblyOptions, RenderOptions
from ..writer import OutputWriter
from .graphql import GraphQLRenderer
from .json_manifest import JsonManifestRenderer
from .resolvers import ResolverRenderer
from .typescript import TypeScriptRenderer

logger = logging.getLogger(__name__)

RENDERERS = {
    "json": JsonManifestRenderer,
    "graphql": GraphQLRenderer,
    "resolvers": ResolverRenderer,
    "typescript": TypeScriptRenderer,
}

# Targets selected by "all"; TypeScript is switched on through RenderOptions
DEFAULT_TARGETS = ("json", "graphql", "resolvers")


def resolve_targets(targets: Optional[Sequence[str]] = None, typescript: bool = False) -> List[str]:
    """Expand ``all`` and validate target names, keeping the given order."""
    names: List[str] = []
    for target in targets or ["all"]:
        expanded = DEFAULT_TARGETS if target == "all" else (target,)
        for name in expanded:
            if name not in RENDERERS:
                raise RenderError(
                    f"Unknown target: {name}",
                    details={"target": name, "available": ["all"] + list(RENDERERS)},
                )
            if name not in names:
                names.append(name)
    if typescript and "typescript" not in names:
        names.append("typescript")
    return names


@dataclass
class RunResult:
    """Outcome of a generation run.

    ``artifacts`` maps target name to ``{file name: text}``. A run that lost
    some tables still carries the artifacts of the tables that succeeded.
    """
    success: bool = True
    error: Optional[SchemaGenError] = None
    artifacts: Dict[str, Dict[str, str]] = field(default_factory=dict)
    written: List[Path] = field(default_factory=list)
    tables: List[str] = field(default_factory=list)

    @property
    def files(self) -> Dict[str, str]:
        """All artifacts as one ``{file name: text}`` mapping."""
        merged: Dict[str, str] = {}
        for target, files in self.artifacts.items():
            for name, text in files.items():
                if name in merged:
                    raise RenderError(f"Output file {name} produced twice", details={"target": target})
                merged[name] = text
        return merged

    def fail(self, error: SchemaGenError) -> "RunResult":
        """Record an error; only the first one is kept."""
        self.success = False
        if self.error is None:
            self.error = error
        return self


class ArtifactGenerator:
    """Renders every table for each selected target."""

    def __init__(self, options: Optional[RenderOptions] = None, targets: Optional[Sequence[str]] = None):
        self.options = options or RenderOptions()
        self.targets = resolve_targets(targets, self.options.typescript)
        self.renderers = [RENDERERS[t](self.options) for t in self.targets]

    def render(self, tables: Mapping[str, TableSchema]) -> Dict[str, Dict[str, str]]:
        """Synchronous entry point; must not be called from a running event loop."""
        return asyncio.run(self.render_async(tables))

    async def render_async(self, tables: Mapping[str, TableSchema]) -> Dict[str, Dict[str, str]]:
        """Build every (target, table) node concurrently, then serialize in table order."""
        loop = asyncio.get_running_loop()
        ordered = list(tables.values())
        jobs = [(renderer, table) for renderer in self.renderers for table in ordered]
        nodes = await asyncio.gather(
            *(loop.run_in_executor(None, renderer.build_table, table) for renderer, table in jobs)
        )

        artifacts: Dict[str, Dict[str, str]] = {}
        for index, renderer in enumerate(self.renderers):
            start = index * len(ordered)
            artifacts[renderer.target] = renderer.files(ordered, nodes[start:start + len(ordered)])
            logger.debug("Rendered %d files for target %s", len(artifacts[renderer.target]), renderer.target)
        return artifacts


async def run_async(
    source: SchemaSource,
    assembly_options: Optional[AssemblyOptions] = None,
    render_options: Optional[RenderOptions] = None,
    targets: Optional[Sequence[str]] = None,
    output_dir: Optional[Union[str, Path]] = None,
    tables_filter: Optional[Sequence[str]] = None,
) -> RunResult:
    """Introspect ``source``, render the selected targets and optionally write them.

    Tables that failed to describe are left out; their first error is reported
    on the result while the remaining tables are still rendered and written.
    """
    generator = ArtifactGenerator(render_options, targets)
    result = RunResult()

    try:
        assembly = await SchemaAssembler(source, assembly_options).assemble_async(tables_filter)
    except SchemaSourceError as e:
        logger.error("Cannot introspect %s: %s", source.database_name, e.message)
        return result.fail(e)

    if assembly.error:
        result.fail(assembly.error)

    result.tables = list(assembly.tables)
    try:
        result.artifacts = await generator.render_async(assembly.tables)
        files = result.files
    except RenderError as e:
        logger.error("Rendering failed: %s", e.message)
        result.artifacts = {}
        return result.fail(e)

    if output_dir is not None:
        try:
            result.written = OutputWriter(output_dir).write(files)
        except (OutputError, RenderError) as e:
            logger.error("Writing artifacts failed: %s", e.message)
            result.fail(e)

    return result


def run(
    source: SchemaSource,
    assembly_options: Optional[AssemblyOptions] = None,
    render_options: Optional[RenderOptions] = None,
    targets: Optional[Sequence[str]] = None,
    output_dir: Optional[Union[str, Path]] = None,
    tables_filter: Optional[Sequence[str]] = None,
) -> RunResult:
    """Synchronous wrapper around ``run_async``."""
    return asyncio.run(run_async(source, assembly_options, render_options, targets, output_dir, tables_filter))
