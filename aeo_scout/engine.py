"""aeo_scout.engine: Orchestration layer: fetch, extract, scan and build the report."""

from __future__ import annotations

import asyncio
from typing import Any, Iterable, Mapping, Optional

from aeo_scout.aggregator import run_clarity_scan, scan_to_score_input
from aeo_scout.config import AuditConfig, load_config
from aeo_scout.crawler.fetcher import Fetcher
from aeo_scout.crawler.link_checker import LinkChecker
from aeo_scout.fixes import transform_to_report
from aeo_scout.logger import audit_logger, logger
from aeo_scout.models import AuditInput, AuditReport, ExtractionBundle, Fix
from aeo_scout.parser.extractor import run_extraction
from aeo_scout.rubric import rubric_fixes

__all__ = ["Engine"]


class Engine:
    """Фасад для CLI и тестов: загрузка конфига, аудит одной страницы и сборка отчёта."""

    @staticmethod
    def load_config(path: Optional[str]) -> AuditConfig:
        """Загружает конфиг из YAML/JSON или использует значения по умолчанию."""
        return load_config(path)

    def __init__(self, config: Optional[AuditConfig] = None) -> None:
        self.config = config or AuditConfig()

    async def fetch(self, fetcher: Fetcher, url: str) -> AuditInput:
        """HTML is mandatory (FetchError propagates); robots.txt is best effort."""
        page = await fetcher.fetch_page(url)
        robots = await fetcher.fetch_robots(page.url)
        return AuditInput(url=page.url, raw_html=page.content, robots_text=robots)

    def extract_input(self, audit_input: AuditInput) -> ExtractionBundle:
        return run_extraction(
            audit_input.raw_html,
            audit_input.url,
            audit_input.robots_text,
            max_words=self.config.max_words,
            schema_cap=self.config.schema_cap,
        )

    async def audit(
        self,
        url: str,
        external_fixes: Iterable[Fix] = (),
        rubric: Optional[Mapping[str, Any]] = None,
    ) -> AuditReport:
        """Run the whole pipeline for *url* and return the finished report.

        *rubric* is an AI audit answer; its recommendations and per-category
        playbook fixes join *external_fixes*.
        """
        log = audit_logger(url)
        log.info("Audit started")
        external = list(external_fixes)
        if rubric is not None:
            external.extend(rubric_fixes(url, rubric))
            log.info("%d external fixes after merging the AI rubric", len(external))
        async with Fetcher(self.config) as fetcher:
            audit_input = await self.fetch(fetcher, url)
            extraction = self.extract_input(audit_input)
            checker = None
            if self.config.check_links:
                checker = LinkChecker(
                    fetcher.session,
                    limit=self.config.link_check_limit,
                    concurrency=self.config.link_check_concurrency,
                ).check
            scan = await run_clarity_scan(audit_input.raw_html, audit_input.url, checker)

        report = transform_to_report(
            scan_to_score_input(scan, external), extraction=extraction, scan=scan
        )
        log.info("Audit finished: score %d/100, %d fixes", report.score, len(report.prioritized.fixes))
        return report

    async def extract(self, url: str) -> ExtractionBundle:
        async with Fetcher(self.config) as fetcher:
            audit_input = await self.fetch(fetcher, url)
        return self.extract_input(audit_input)

    def start_audit(self, url: str, rubric: Optional[Mapping[str, Any]] = None) -> AuditReport:
        """Синхронная обёртка над :meth:`audit` для CLI."""
        try:
            return asyncio.run(self.audit(url, rubric=rubric))
        except Exception as exc:
            logger.error("Audit failed: %s", exc)
            raise
