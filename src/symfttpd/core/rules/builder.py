"""Turn a web root scan into rendered lighttpd configuration.

The builder is idempotent: an unchanged tree with unchanged options renders
byte-identical text, which is what lets the supervisor compare snapshots to
decide whether lighttpd must restart.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from symfttpd.core.project.scanner import ScanOptions, ScanResult, scan
from symfttpd.core.templating import TemplateRenderer

from .models import ConfigSnapshot, RuleSet, ServerOptions

if TYPE_CHECKING:
    from symfttpd.core.config.settings import SymfttpdConfig
    from symfttpd.core.project.layout import ProjectLayout

logger = logging.getLogger(__name__)

RULES_TEMPLATE = "rules.conf.j2"
CONFIG_TEMPLATE = "lighttpd.conf.j2"


def _normalize_nophp(paths: tuple[str, ...]) -> list[str]:
    return [p.strip().strip("/") for p in paths if p and p.strip().strip("/")]


class RuleSnapshotBuilder:
    """Scan the web root, build a RuleSet and render it.

    Args:
        renderer: Template renderer used for both templates
        web_root: Directory scanned on every build
        options: Default entry, allow/deny lists and restrict mode
        server_options: Static options of the main configuration
    """

    def __init__(
        self,
        renderer: TemplateRenderer,
        *,
        web_root: Path,
        options: ScanOptions,
        server_options: ServerOptions,
    ) -> None:
        self.renderer = renderer
        self.web_root = Path(web_root)
        self.options = options
        self.server_options = server_options

    @classmethod
    def for_project(
        cls,
        config: "SymfttpdConfig",
        layout: "ProjectLayout",
        *,
        renderer: TemplateRenderer | None = None,
        php_cgi_cmd: str | None = None,
    ) -> RuleSnapshotBuilder:
        """Builder for a project layout, with server options taken from ``config``.

        Raises:
            ExecutableNotFoundError: If php-cgi is neither given nor found
        """
        server_options = ServerOptions(
            document_root=layout.web_dir,
            port=config.port,
            bind=config.bind,
            error_log=layout.error_log,
            access_log=layout.access_log,
            pidfile=layout.pid_file,
            rules_file=layout.rules_file,
            php_cgi_cmd=php_cgi_cmd or config.resolve_php_cgi(),
        )
        return cls(
            renderer or TemplateRenderer(),
            web_root=layout.web_dir,
            options=config.scan_options(),
            server_options=server_options,
        )

    def build(self, scan_result: ScanResult, options: ScanOptions | None = None) -> RuleSet:
        opts = options or self.options
        return RuleSet(
            default_entry_point=opts.default_script,
            denied_php_paths=tuple(_normalize_nophp(opts.deny)),
            allowed_scripts=scan_result.scripts,
            readable_dirs=scan_result.dirs,
            readable_files=scan_result.files,
        )

    def build_current(self) -> RuleSet:
        """Scan the web root now and build its RuleSet."""
        return self.build(scan(self.web_root, self.options))

    def render_rules(self, rule_set: RuleSet) -> str:
        return self.renderer.render(RULES_TEMPLATE, rule_set.template_parameters())

    def render_config(self, server_options: ServerOptions | None = None) -> str:
        opts = server_options or self.server_options
        return self.renderer.render(CONFIG_TEMPLATE, opts.template_parameters())

    def render(self, rule_set: RuleSet, server_options: ServerOptions | None = None) -> ConfigSnapshot:
        return ConfigSnapshot(
            config_text=self.render_config(server_options),
            rules_text=self.render_rules(rule_set),
        )

    def snapshot(self) -> ConfigSnapshot:
        """Fresh scan + build + render; what the watcher compares every interval."""
        rule_set = self.build_current()
        logger.debug(
            "built rules: %d dirs, %d files, %d scripts",
            len(rule_set.readable_dirs),
            len(rule_set.readable_files),
            len(rule_set.allowed_scripts),
        )
        return self.render(rule_set)


__all__ = ["CONFIG_TEMPLATE", "RULES_TEMPLATE", "RuleSnapshotBuilder"]
