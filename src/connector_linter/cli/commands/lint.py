"""lint command: validate connector files and print diagnostics."""

from argparse import Namespace
from pathlib import Path

import orjson

from connector_linter.cli.commands.base import BaseCommandHandler
from connector_linter.config import SettingsContext
from connector_linter.constants import HOST_KEY_EXTENDED_VALIDATION
from connector_linter.core.diagnostics import Diagnostic
from connector_linter.core.fetcher import refresh_schema_cache
from connector_linter.core.lifecycle import (
    CollectingPublisher,
    DocumentLifecycleController,
    DocumentOpened,
)
from connector_linter.core.orchestrator import ValidationOrchestrator
from connector_linter.logger import get_logger
from connector_linter.schemas import lookup_identity

logger = get_logger(__name__)


class LintHandler(BaseCommandHandler):
    """Validate files through the same lifecycle path an editor uses."""

    async def execute(self, args: Namespace) -> int:
        if args.refresh:
            await refresh_schema_cache(self.cache_store(args))

        settings_context = SettingsContext.from_global_config(
            self.global_config
        )
        if args.extended is not None:
            settings_context.reload({HOST_KEY_EXTENDED_VALIDATION: args.extended})

        orchestrator = ValidationOrchestrator.create_default(
            self.cache_dir(args), settings_context
        )
        publisher = CollectingPublisher()
        controller = DocumentLifecycleController(
            orchestrator, publisher, settings_context
        )

        uris: dict[str, Path] = {}
        failed = False
        for path in args.files:
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.error("Cannot read %s: %s", path, e)
                failed = True
                continue
            uri = path.resolve().as_uri()
            uris[uri] = path
            controller.submit(DocumentOpened(uri, text))

        controller.stop()
        await controller.run()

        results = {
            uri: publisher.latest.get(uri) for uri in uris
        }
        # a mapped file with no result hit a schema load or compile error
        not_validated = {
            uri
            for uri, diagnostics in results.items()
            if diagnostics is None
            and lookup_identity(uris[uri].name) is not None
        }
        if args.format == "json":
            self._print_json(uris, results)
        else:
            self._print_text(uris, results, not_validated)

        has_problems = any(results.values()) or bool(not_validated)
        return 1 if failed or has_problems else 0

    @staticmethod
    def _print_text(
        uris: dict[str, Path],
        results: dict[str, list[Diagnostic] | None],
        not_validated: set[str],
    ) -> None:
        for uri, diagnostics in results.items():
            path = uris[uri]
            if uri in not_validated:
                print(f"{path}: not validated (schema error, see log)")
            elif diagnostics is None:
                print(f"{path}: skipped (no schema for this file name)")
            elif not diagnostics:
                print(f"{path}: ok")
            else:
                for diagnostic in diagnostics:
                    severity = diagnostic.severity.name.lower()
                    print(
                        f"{path}: {severity}: {diagnostic.message.strip()} "
                        f"[{diagnostic.source}]"
                    )

    @staticmethod
    def _print_json(
        uris: dict[str, Path], results: dict[str, list[Diagnostic] | None]
    ) -> None:
        payload = {
            str(uris[uri]): (
                None
                if diagnostics is None
                else [diagnostic.to_dict() for diagnostic in diagnostics]
            )
            for uri, diagnostics in results.items()
        }
        print(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode())
