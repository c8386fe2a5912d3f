"""
Environment Bootloader.

Single place for environment validation. It is used by:
1. Application Startup (main.py) -> mode="critical"
2. CI Pipelines -> mode="dry-run"
3. Smoke Tests (manual) -> mode="full" (CLI)
"""

import asyncio
import sys
import time
from dataclasses import dataclass
from enum import Enum

import httpx
from sqlalchemy import text

from lifeboard.config import settings
from lifeboard.database import build_engine
from lifeboard.logger import get_logger
from lifeboard.services.periods import server_timezone

logger = get_logger(__name__)

DEFAULT_SECRET_KEY = "dev_secret_key_change_in_prod"


class BootMode(str, Enum):
    CRITICAL = "critical"  # Static config + DB (fast fail for startup)
    FULL = "full"  # DB + AI provider (smoke tests)
    DRY_RUN = "dry-run"  # Static config check only (CI lint)


@dataclass
class ServiceStatus:
    service: str
    status: str  # 'ok', 'warning', 'error', 'skipped'
    message: str
    duration_ms: float = 0.0


class Bootloader:
    """Handles environment validation and service connectivity checks."""

    @staticmethod
    async def validate(mode: BootMode = BootMode.CRITICAL) -> bool:
        """Run validation checks. Returns True if passed, False if failed.

        If mode is CRITICAL, this calls sys.exit(1) on failure.
        """
        logger.info("Bootloader starting validation", mode=mode.value)

        problems = Bootloader.static_config_problems()
        if problems:
            for problem in problems:
                logger.error("Configuration problem", problem=problem)
            if mode == BootMode.CRITICAL:
                logger.critical("Static configuration check failed. Refusing to start.")
                sys.exit(1)
            return False

        if mode == BootMode.DRY_RUN:
            logger.info("Dry-run configuration check passed")
            return True

        results = [await Bootloader._check_database()]
        if mode == BootMode.FULL:
            results.append(await Bootloader._check_ai())

        passed = True
        for res in results:
            if res.status == "error":
                passed = False
                logger.error(
                    "Service check failed",
                    service=res.service,
                    error=res.message,
                    duration_ms=res.duration_ms,
                )
            elif res.status == "warning":
                logger.warning(
                    "Service check warning",
                    service=res.service,
                    message=res.message,
                    duration_ms=res.duration_ms,
                )
            else:
                logger.info(
                    "Service check passed",
                    service=res.service,
                    status=res.status,
                    duration_ms=res.duration_ms,
                )

        if not passed:
            if mode == BootMode.CRITICAL:
                logger.critical("Critical service checks failed. Application cannot start.")
                sys.exit(1)
            return False

        logger.info("Bootloader validation successful")
        return True

    @staticmethod
    def static_config_problems() -> list[str]:
        """Configuration errors detectable without touching the network."""
        problems: list[str] = []
        try:
            server_timezone()
        except RuntimeError as exc:
            problems.append(str(exc))

        if settings.environment == "production" and settings.secret_key == DEFAULT_SECRET_KEY:
            problems.append("SECRET_KEY must be set in production")

        if not settings.database_url.startswith(("postgresql+asyncpg", "sqlite+aiosqlite")):
            problems.append("DATABASE_URL must use the postgresql+asyncpg or sqlite+aiosqlite driver")

        if not settings.ai_enabled:
            logger.warning("AI_API_KEY not set; habit insights will use fallback responses")
        return problems

    @staticmethod
    async def _check_database() -> ServiceStatus:
        """Verify database connectivity (SELECT 1)."""
        start = time.perf_counter()
        engine = None
        try:
            engine = build_engine(settings.database_url, echo=False)
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

            duration_ms = (time.perf_counter() - start) * 1000
            return ServiceStatus("database", "ok", "Connection successful", duration_ms)

        except Exception as e:
            duration_ms = (time.perf_counter() - start) * 1000
            return ServiceStatus("database", "error", str(e), duration_ms)
        finally:
            if engine:
                await engine.dispose()

    @staticmethod
    async def _check_ai() -> ServiceStatus:
        """Validate the AI API key against the provider's model listing."""
        if not settings.ai_enabled:
            return ServiceStatus("ai", "skipped", "Not configured")

        start = time.perf_counter()
        try:
            async with httpx.AsyncClient(timeout=5.0) as client:
                resp = await client.get(
                    f"{settings.ai_base_url.rstrip('/')}/models",
                    headers={"Authorization": f"Bearer {settings.ai_api_key}"},
                )
            duration_ms = (time.perf_counter() - start) * 1000
            if resp.status_code == 200:
                return ServiceStatus("ai", "ok", "API Key valid", duration_ms)
            # Insights degrade to fallbacks, so a bad key is not fatal
            return ServiceStatus("ai", "warning", f"HTTP {resp.status_code}", duration_ms)
        except httpx.HTTPError as e:
            duration_ms = (time.perf_counter() - start) * 1000
            return ServiceStatus("ai", "warning", str(e), duration_ms)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser()
    parser.add_argument("--mode", type=str, default="full", choices=[m.value for m in BootMode])
    args = parser.parse_args()

    try:
        success = asyncio.run(Bootloader.validate(BootMode(args.mode)))
    except KeyboardInterrupt:
        sys.exit(130)

    sys.exit(0 if success else 1)
