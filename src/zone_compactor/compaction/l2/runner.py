"""Compaction runner: manifest -> blob -> index -> version, published together."""

from __future__ import annotations

import json
import logging
import os
import shutil
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Optional

from zone_compactor.core.config import CompactorSettings
from zone_compactor.core.errors import CompactorError, err
from zone_compactor.core.hashing import sha256_file
from zone_compactor.core.logging import emit_event
from zone_compactor.core.time import rfc3339_micro, utc_now

from ..l0.tzif import raw_offset_seconds
from ..l1.blob import OffsetReader, compact_zones
from ..l1.index import build_index_entries, write_index
from ..l1.manifest import read_manifest
from ..l1.version import write_version

logger = logging.getLogger(__name__)

STAGING_PREFIX = ".tmp.zoneinfo."


@dataclass(frozen=True)
class CompactionInputs:
    """User supplied configuration for one compaction run."""

    manifest_path: Path
    data_dir: Path
    output_dir: Path
    version: str
    settings: CompactorSettings = field(default_factory=CompactorSettings)
    run_report_path: Optional[Path] = None


@dataclass(frozen=True)
class CompactionResult:
    """Outcome of a compaction run."""

    data_path: Path
    index_path: Path
    version_path: Path
    zone_count: int
    alias_count: int
    record_count: int
    blob_bytes: int
    warnings: tuple[str, ...]
    run_report_path: Optional[Path] = None


@dataclass
class CompactionStats:
    zone_count: int = 0
    alias_count: int = 0
    ignored_link_count: int = 0
    record_count: int = 0
    blob_bytes: int = 0


class _StepTimer:
    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger
        self._start = time.monotonic()
        self._last = self._start

    def info(self, message: str) -> None:
        now = time.monotonic()
        elapsed = now - self._start
        delta = now - self._last
        self._last = now
        self._logger.info("%s (elapsed=%.2fs, delta=%.2fs)", message, elapsed, delta)


class CompactionRunner:
    """Builds ``zoneinfo.dat``, ``zoneinfo.idx`` and ``zoneinfo.version``.

    All three artifacts are written into a staging directory inside the
    output directory and moved over any previous artifacts only once every
    stage has succeeded. A failed run leaves earlier outputs untouched.
    """

    def __init__(self, offset_reader: OffsetReader = raw_offset_seconds) -> None:
        self._offset_reader = offset_reader

    def run(self, inputs: CompactionInputs) -> CompactionResult:
        output_dir = inputs.output_dir.expanduser()
        logger.info(
            "Zone compaction starting (manifest=%s, data=%s, output=%s, version=%s)",
            inputs.manifest_path,
            inputs.data_dir,
            output_dir,
            inputs.version,
        )
        stats = CompactionStats()
        warnings: list[str] = []
        errors: list[dict[str, object]] = []
        output_files: list[dict[str, object]] = []
        status = "fail"
        started_at = utc_now()
        try:
            result = self._execute(inputs, output_dir, stats, warnings)
            output_files = [
                sha256_file(path).as_dict()
                for path in (result.data_path, result.index_path, result.version_path)
            ]
            status = "pass"
        except CompactorError as exc:
            errors.append({"code": exc.code, "message": exc.detail})
            logger.error("Zone compaction failed (%s): %s", exc.code, exc.detail)
            emit_event(
                logger,
                "VALIDATION",
                {"result": "fail", "error_code": exc.code, "detail": exc.detail},
                severity="ERROR",
            )
            raise
        except Exception as exc:  # pragma: no cover - defensive
            errors.append({"code": "ZC-X-080", "message": str(exc)})
            logger.exception("Zone compaction encountered an unexpected error")
            raise
        finally:
            if inputs.run_report_path is not None:
                self._write_run_report(
                    path=inputs.run_report_path,
                    inputs=inputs,
                    stats=stats,
                    warnings=warnings,
                    errors=errors,
                    status=status,
                    started_at=started_at,
                    finished_at=utc_now(),
                    output_files=output_files,
                )

        logger.info(
            "Zone compaction completed (zones=%s, aliases=%s, records=%s, blob_bytes=%s)",
            stats.zone_count,
            stats.alias_count,
            stats.record_count,
            stats.blob_bytes,
        )
        return CompactionResult(
            data_path=result.data_path,
            index_path=result.index_path,
            version_path=result.version_path,
            zone_count=result.zone_count,
            alias_count=result.alias_count,
            record_count=result.record_count,
            blob_bytes=result.blob_bytes,
            warnings=tuple(warnings),
            run_report_path=inputs.run_report_path,
        )

    def _execute(
        self,
        inputs: CompactionInputs,
        output_dir: Path,
        stats: CompactionStats,
        warnings: list[str],
    ) -> CompactionResult:
        settings = inputs.settings
        timer = _StepTimer(logger)
        manifest = read_manifest(inputs.manifest_path, blank_lines=settings.blank_lines)
        warnings.extend(manifest.warnings)
        stats.zone_count = len(manifest.zones)
        stats.alias_count = len(manifest.aliases)
        stats.ignored_link_count = len(manifest.ignored_links)
        timer.info("Setup manifest loaded")

        staging = self._create_staging_dir(output_dir)
        try:
            data_tmp = staging / settings.data_filename
            index_tmp = staging / settings.index_filename
            version_tmp = staging / settings.version_filename

            try:
                blob = data_tmp.open("wb")
            except OSError as exc:
                raise err("E_OUTPUT_IO", f"cannot create blob '{data_tmp}': {exc}") from exc
            with blob:
                records = compact_zones(
                    manifest.zones, inputs.data_dir, blob, offset_reader=self._offset_reader
                )
            stats.blob_bytes = sum(record.length for record in records.values())
            emit_event(
                logger,
                "COMPACT",
                {"zone_count": len(records), "blob_bytes": stats.blob_bytes},
            )
            timer.info("Zone files compacted")

            entries = build_index_entries(records, manifest.aliases)
            stats.record_count = write_index(
                index_tmp,
                entries,
                settings.name_width,
                long_names=settings.long_names,
                warnings_out=warnings,
            )
            emit_event(
                logger,
                "INDEX",
                {
                    "record_count": stats.record_count,
                    "alias_count": len(manifest.aliases),
                    "name_width": settings.name_width,
                },
                severity="WARN" if warnings else "INFO",
            )
            timer.info("Index written")

            write_version(version_tmp, inputs.version)
            published = self._publish(staging, output_dir, settings.output_filenames)
            emit_event(
                logger,
                "PUBLISH",
                {"output_dir": str(output_dir), "files": list(settings.output_filenames)},
            )
            timer.info("Artifacts published")
        finally:
            if staging.exists():
                shutil.rmtree(staging, ignore_errors=True)

        data_path, index_path, version_path = published
        return CompactionResult(
            data_path=data_path,
            index_path=index_path,
            version_path=version_path,
            zone_count=stats.zone_count,
            alias_count=stats.alias_count,
            record_count=stats.record_count,
            blob_bytes=stats.blob_bytes,
            warnings=tuple(warnings),
        )

    @staticmethod
    def _create_staging_dir(output_dir: Path) -> Path:
        staging = output_dir / f"{STAGING_PREFIX}{uuid.uuid4().hex}"
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            staging.mkdir()
        except OSError as exc:
            raise err("E_OUTPUT_IO", f"cannot prepare output directory '{output_dir}': {exc}") from exc
        return staging

    @staticmethod
    def _publish(staging: Path, output_dir: Path, names: tuple[str, ...]) -> tuple[Path, ...]:
        published: list[Path] = []
        for name in names:
            target = output_dir / name
            if target.is_dir():
                raise err("E_OUTPUT_IO", f"output path '{target}' is a directory")
            try:
                os.replace(staging / name, target)
            except OSError as exc:
                raise err("E_OUTPUT_IO", f"cannot publish '{target}': {exc}") from exc
            published.append(target)
        return tuple(published)

    @staticmethod
    def _write_run_report(
        *,
        path: Path,
        inputs: CompactionInputs,
        stats: CompactionStats,
        warnings: list[str],
        errors: list[dict[str, object]],
        status: str,
        started_at: datetime,
        finished_at: datetime,
        output_files: list[dict[str, object]],
    ) -> None:
        payload = {
            "status": status,
            "started_utc": rfc3339_micro(started_at),
            "finished_utc": rfc3339_micro(finished_at),
            "durations": {"wall_ms": max(0, int((finished_at - started_at).total_seconds() * 1000))},
            "inputs": {
                "manifest_path": str(inputs.manifest_path),
                "data_dir": str(inputs.data_dir),
                "output_dir": str(inputs.output_dir),
                "version": inputs.version,
                "settings": inputs.settings.model_dump(),
            },
            "counts": {
                "zones": stats.zone_count,
                "aliases": stats.alias_count,
                "ignored_links": stats.ignored_link_count,
                "index_records": stats.record_count,
            },
            "blob_bytes": stats.blob_bytes,
            "output": {"files": output_files},
            "warnings": warnings,
            "errors": errors,
        }
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
        except OSError:
            logger.exception("Failed writing run report to %s", path)
