"""Scan orchestration: resolve, fetch, extract, normalize, enrich, persist."""

import time
from typing import List, Optional
from uuid import uuid4

from internscan.config.models import AppConfig
from internscan.domain.models import NormalizedJob, Target
from internscan.enrichment import AcceptanceRateEnricher
from internscan.extraction import PostingExtractor
from internscan.fetching import PageFetcher
from internscan.logging import get_logger
from internscan.logging.context import log_context
from internscan.normalization import JobNormalizer
from internscan.persistence import JobPersister
from internscan.resolver import TargetResolver
from internscan.utils.html import ParsedPage
from internscan.utils.timestamps import utc_now

from .models import ScanResult, TargetRunStats

logger = get_logger(__name__, component="pipeline")

NOTHING_TO_SCAN = "No companies or career pages found"


class ScanPipeline:
    """
    Runs one scan over the resolved targets.

    Targets are processed one after another. A target that cannot be fetched
    or yields nothing is logged and counted; it never stops the scan.
    Collaborators default to instances built from the application config and
    can be injected for testing.
    """

    def __init__(
        self,
        app_config: AppConfig,
        resolver: Optional[TargetResolver] = None,
        fetcher: Optional[PageFetcher] = None,
        extractor: Optional[PostingExtractor] = None,
        enricher: Optional[AcceptanceRateEnricher] = None,
        persister: Optional[JobPersister] = None,
    ):
        self.app_config = app_config
        self.resolver = resolver or TargetResolver()
        self.fetcher = fetcher or PageFetcher(app_config.fetch)
        self.extractor = extractor or PostingExtractor(app_config.extraction)
        self.enricher = enricher or AcceptanceRateEnricher.from_config(app_config.enrichment, self.fetcher)
        self.persister = persister or JobPersister()

    def run_scan(
        self,
        company_ids: Optional[List[str]] = None,
        geographies: Optional[List[str]] = None,
    ) -> ScanResult:
        """
        Scan the requested companies and store new internship postings.

        Args:
            company_ids: Companies to scan; None or empty scans the whole
                directory
            geographies: Location defaults for postings that publish none;
                falls back to the configured geographies

        Returns:
            ScanResult with total_inserted (rows actually stored) and
            companies_processed (targets scanned)

        Raises:
            PersistenceError: If the company directory cannot be read
        """
        run_started_at = utc_now()
        run_id = uuid4().hex
        geographies = list(geographies or self.app_config.geographies)

        with log_context(run_id=run_id):
            logger.info(
                "Scan started",
                extra={
                    "event": "scan.run.started",
                    "requested_companies": len(company_ids or []),
                    "geographies": geographies,
                },
            )

            targets = self.resolver.resolve(company_ids)
            if not targets:
                logger.info(
                    NOTHING_TO_SCAN,
                    extra={"event": "scan.run.empty", "requested_companies": len(company_ids or [])},
                )
                return ScanResult(
                    run_started_at=run_started_at,
                    run_finished_at=utc_now(),
                    message=NOTHING_TO_SCAN,
                )

            normalizer = JobNormalizer(
                scan_date=run_started_at.date(),
                geographies=geographies,
                config=self.app_config.extraction,
            )
            target_stats = [self._process_target(target, normalizer, run_id) for target in targets]

            result = ScanResult(
                run_started_at=run_started_at,
                run_finished_at=utc_now(),
                target_stats=target_stats,
            )

            logger.info(
                "Scan completed",
                extra={
                    "event": "scan.run.completed",
                    "duration_ms": int(result.total_duration_seconds * 1000),
                    "companies_processed": result.companies_processed,
                    "total_extracted": result.total_extracted,
                    "total_inserted": result.total_inserted,
                    "total_skipped": result.total_skipped,
                    "had_errors": result.had_errors,
                },
            )
            return result

    def _process_target(self, target: Target, normalizer: JobNormalizer, run_id: str) -> TargetRunStats:
        """Fetch, extract, normalize, enrich and persist one target."""
        target_start = time.time()
        stats = TargetRunStats(company_id=target.company_id, url=target.url)

        with log_context(
            run_id=run_id,
            company_id=target.company_id,
            company_name=target.company_name,
            target_url=target.url,
        ):
            logger.info(
                f"Processing {target.company_name}: {target.url}",
                extra={"event": "target.run.started"},
            )

            try:
                fetched = self.fetcher.fetch(target.url)
                if not fetched.ok:
                    stats.error_message = fetched.reason
                    logger.warning(
                        f"No page fetched for {target.company_name}",
                        extra={"event": "target.fetch.failed", "reason": fetched.reason},
                    )
                    return stats

                page = ParsedPage(url=fetched.value.url, html=fetched.value.html)
                stats.fetched_url = page.url

                extraction = self.extractor.extract(page)
                stats.extraction_method = extraction.method
                stats.extracted_count = len(extraction.postings)
                if not extraction.postings:
                    logger.info(
                        f"No internship postings found for {target.company_name}",
                        extra={"event": "target.extract.empty", "fetched_url": page.url},
                    )
                    return stats

                jobs = normalizer.normalize_all(extraction.postings, page)
                stats.normalized_count = len(jobs)

                jobs = [self._enrich(job, stats) for job in jobs]

                persisted = self.persister.persist(target.company_id, jobs)
                stats.inserted_count = persisted.inserted
                stats.skipped_count = persisted.skipped
                stats.failed_count = persisted.failed

            except Exception as e:
                stats.error_message = str(e)
                logger.error(
                    f"Unexpected error processing {target.company_name}: {e}",
                    extra={"event": "target.run.failed", "error_type": type(e).__name__},
                    exc_info=True,
                )

            finally:
                stats.duration_seconds = time.time() - target_start
                logger.info(
                    f"Finished {target.company_name}: {stats.inserted_count} inserted",
                    extra={
                        "event": "target.run.completed",
                        "extraction_method": stats.extraction_method,
                        "extracted": stats.extracted_count,
                        "normalized": stats.normalized_count,
                        "enriched": stats.enriched_count,
                        "inserted": stats.inserted_count,
                        "skipped": stats.skipped_count,
                        "failed": stats.failed_count,
                        "duration_seconds": round(stats.duration_seconds, 3),
                    },
                )

        return stats

    def _enrich(self, job: NormalizedJob, stats: TargetRunStats) -> NormalizedJob:
        if job.acceptance_rate is not None:
            return job
        outcome = self.enricher.lookup(job.description, job.url)
        if not outcome.ok:
            return job
        stats.enriched_count += 1
        return job.with_acceptance_rate(outcome.value)
