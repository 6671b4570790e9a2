from __future__ import annotations

import logging
from typing import Any, Dict

from ..crawler import Crawler
from ..filters import FilterRules
from ..pipeline import RunCtx
from ..state_store import record_packages

logger = logging.getLogger(__name__)


class CrawlPackagesStep:
    step_id = "20_crawl_packages"

    def run(self, ctx: RunCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        rules = FilterRules.from_config(
            ctx.cfg.file_rules,
            default_include=ctx.cfg.default_include,
            default_exclude=ctx.cfg.default_exclude,
        )
        root = ctx.cfg.registry_prefix or ctx.registry.prefix()
        logger.info("Installation root: %s", root)

        crawler = Crawler(ctx.registry, rules, ctx.artifacts, root=root)
        ctx.packages = crawler.crawl(ctx.selection)

        record_packages(state, ctx.packages)
        state["edges"] = len(ctx.artifacts.edges)
        return state
