import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from zcf.cli.parser import parse_arguments
from zcf.config import ZcfConfigStore
from zcf.constants import ZcfPaths
from zcf.output_styles import apply_output_style_selection
from zcf.services.logging.logging_service import setup_logging
from zcf.utils.color_support import color_support

logger = logging.getLogger(__name__)


def _preference_updates(args) -> Dict[str, Any]:
    updates: Dict[str, Any] = {}
    if args.lang:
        updates["preferredLang"] = args.lang
    if args.template_lang:
        updates["templateLang"] = args.template_lang
    if args.ai_output_lang:
        updates["aiOutputLang"] = args.ai_output_lang
    if args.code_type:
        updates["codeToolType"] = args.code_type
    return updates


def build_store(config_dir: Optional[str]) -> ZcfConfigStore:
    paths = ZcfPaths.default()
    if config_dir:
        paths = paths.with_config_dir(Path(config_dir))
    return ZcfConfigStore(paths)


def run(argv: Optional[List[str]] = None) -> int:
    args = parse_arguments(argv)
    setup_logging(verbose=args.verbose, log_file=args.log_file, force_color=args.force_color)

    store = build_store(args.config_dir)
    logger.debug("Using configuration file %s", store.config_path)
    acted = False

    if args.migrate:
        acted = True
        result = store.migrate_legacy_locations()
        if result.migrated:
            logger.info(color_support.success(f"Migrated {result.source} -> {result.target}"))
        else:
            logger.info("No legacy configuration to migrate")
        for removed in result.removed:
            logger.info("Removed %s", removed)

    updates = _preference_updates(args)
    if updates:
        acted = True
        store.update(updates)
        logger.info(color_support.success("Preferences saved"))

    if args.output_styles is not None or args.default_output_style:
        acted = True
        apply_output_style_selection(
            args.output_styles or [],
            args.default_output_style,
            templates_dir=Path(args.templates_dir) if args.templates_dir else None,
            store=store,
        )

    if args.show or not acted:
        print(json.dumps(store.get(), indent=2, ensure_ascii=False))
    return 0
