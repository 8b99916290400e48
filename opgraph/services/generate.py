from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from opgraph.core.config import Config
from opgraph.core.result import Err, Ok, Result
from opgraph.catalog.assembler import compile_catalog
from opgraph.catalog.channels import ChannelNaming
from opgraph.catalog.errors import CatalogError
from opgraph.catalog.exceptions import ExceptionTable
from opgraph.catalog.icon import load_icon
from opgraph.catalog.loader import read_bundle_list
from opgraph.catalog.model import CatalogTemplate, VersionCatalog
from opgraph.catalog.render import render_catalog, write_catalog
from opgraph.output.console import ConsoleProtocol, Style


@dataclass(frozen=True, slots=True)
class InputSummary:
    versions: int
    minor_lines: int
    broken: int
    unsupported: int
    oldest_supported: str
    newest: str | None


@dataclass(frozen=True, slots=True)
class GenerateReport:
    template: CatalogTemplate
    output: Path | None
    text: str
    changed: bool = False


class CatalogService:
    """Runs the bundle list -> catalog template pipeline for one config.

    Every step returns a Result; the first error stops the run before anything
    is written.
    """

    def __init__(
        self,
        *,
        config: Config,
        console: ConsoleProtocol,
        input_path: Path | None = None,
        output_path: Path | None = None,
        icon_path: Path | None = None,
    ) -> None:
        self._config = config
        self._console = console
        self._input = input_path or config.resolve(config.paths.input)
        self._output = output_path or config.resolve(config.paths.output)
        self._icon = icon_path or config.resolve(config.package.icon)

    @property
    def naming(self) -> ChannelNaming:
        return ChannelNaming(
            package=self._config.package.name,
            family=self._config.package.channel_family,
        )

    def exceptions(self) -> Result[ExceptionTable, CatalogError]:
        return ExceptionTable.from_dict(self._config.exceptions)

    def load(self) -> Result[VersionCatalog, CatalogError]:
        self._console.print(f"input: {self._input}", Style.DIM)
        return read_bundle_list(self._input)

    def summarize(self) -> Result[InputSummary, CatalogError]:
        loaded = self.load()
        if isinstance(loaded, Err):
            return loaded
        catalog = loaded.value
        versions = catalog.versions
        return Ok(
            InputSummary(
                versions=len(versions),
                minor_lines=len({v.minor_line for v in versions}),
                broken=len(catalog.broken_versions),
                unsupported=sum(1 for v in versions if v < catalog.oldest_supported_version),
                oldest_supported=str(catalog.oldest_supported_version),
                newest=str(versions[-1]) if versions else None,
            )
        )

    def compile(self) -> Result[CatalogTemplate, CatalogError]:
        table = self.exceptions()
        if isinstance(table, Err):
            return table
        loaded = self.load()
        if isinstance(loaded, Err):
            return loaded
        icon = load_icon(self._icon, self._config.package.icon_media_type)
        if isinstance(icon, Err):
            return icon
        return compile_catalog(
            loaded.value, naming=self.naming, icon=icon.value, exceptions=table.value
        )

    def generate(self, *, dry_run: bool = False) -> Result[GenerateReport, CatalogError]:
        compiled = self.compile()
        if isinstance(compiled, Err):
            return compiled
        template = compiled.value

        if dry_run:
            return Ok(GenerateReport(template=template, output=None, text=render_catalog(template)))

        written = write_catalog(template, self._output)
        if isinstance(written, Err):
            return written
        if written.value:
            self._console.success(f"{self._output} generated")
        else:
            self._console.info(f"{self._output} is up to date")
        return Ok(
            GenerateReport(
                template=template,
                output=self._output,
                text=render_catalog(template),
                changed=written.value,
            )
        )
