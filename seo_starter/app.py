"""Application object wiring configuration, content store, and SEO modules."""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from seo_starter.modules.content import (
    ContentAccessor,
    ContentStore,
    DatabaseContentStore,
    FileContentStore,
)
from seo_starter.modules.content.accessor import DEFAULT_FETCH_TIMEOUT
from seo_starter.modules.schema import DEFAULT_SCHEMA_CONFIG, generate_page_schema
from seo_starter.modules.seo import SEOMerger
from seo_starter.modules.seo.merger import GLOBAL_KEY
from seo_starter.modules.validation import (
    ContentQualityRules,
    generate_validation_report,
    validate_page,
)

logger = logging.getLogger(__name__)

CONTENT_BACKENDS = ("files", "database")


class SEOStarterKit:
    """Central application class for page builds and audits.

    Usage::

        kit = SEOStarterKit()
        kit.initialize()
        seo = await kit.merge_seo_data("contact")
        schemas = kit.generate_page_schema({"type": "contact", ...})
        report = kit.validate_page({"seo": seo["metadata"], "schemas": schemas})
    """

    def __init__(
        self,
        config_path: str = "config/settings.yaml",
        env_path: str = ".env",
    ):
        self._config_path = config_path
        self._env_path = env_path
        self.config: dict[str, Any] = {}
        self._initialized = False
        self._store: Optional[ContentStore] = None
        self._accessor: Optional[ContentAccessor] = None
        self._merger: Optional[SEOMerger] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Load environment and configuration, and prepare the content backend."""
        if self._initialized:
            return

        env_file = Path(self._env_path)
        if env_file.exists():
            load_dotenv(env_file)
            logger.info("Loaded environment from %s", self._env_path)

        self.config = self._load_config()
        self._apply_env_overrides()

        backend = self.content_backend
        if backend not in CONTENT_BACKENDS:
            raise ValueError(
                f"Unknown content backend: {backend!r} (expected one of {CONTENT_BACKENDS})"
            )
        if backend == "database":
            from seo_starter.database import init_db
            db_cfg = self.config_section("database")
            init_db(database_url=db_cfg.get("url"), echo=db_cfg.get("echo", False))

        self._initialized = True
        logger.info("SEOStarterKit initialised (content backend: %s).", backend)

    def _load_config(self) -> dict[str, Any]:
        """Load the YAML configuration file."""
        config_file = Path(self._config_path)
        if not config_file.exists():
            logger.warning("Config file not found: %s — using defaults.", self._config_path)
            return {}
        with open(config_file, "r", encoding="utf-8") as fh:
            config = yaml.safe_load(fh) or {}
        logger.info("Configuration loaded from %s", self._config_path)
        return config

    def _apply_env_overrides(self) -> None:
        """Environment variables win over settings.yaml values."""
        overrides = (
            ("SEO_CONTENT_DIR", "app", "content_dir", str),
            ("SEO_CONTENT_BACKEND", "content", "backend", str),
            ("SEO_FETCH_TIMEOUT", "seo", "fetch_timeout", float),
            ("DATABASE_URL", "database", "url", str),
        )
        for env_var, section, key, cast in overrides:
            value = os.getenv(env_var)
            if not value:
                continue
            try:
                self.config[section] = {**self.config_section(section), key: cast(value)}
            except ValueError:
                logger.warning("Ignoring invalid %s=%r", env_var, value)
                continue
            logger.debug("Config %s.%s overridden by %s", section, key, env_var)

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("Call initialize() before using the application.")

    # ------------------------------------------------------------------
    # Settings accessors
    # ------------------------------------------------------------------

    def config_section(self, name: str) -> dict[str, Any]:
        """One top-level settings section; a bare ``name:`` line reads as empty."""
        return self.config.get(name) or {}

    @property
    def content_backend(self) -> str:
        return self.config_section("content").get("backend", "files")

    @property
    def content_dir(self) -> str:
        return self.config_section("app").get("content_dir", "content")

    def get_site_config(self) -> dict[str, Any]:
        site = self.config_section("site")
        return {
            "organization": site.get("organization") or {},
            "website": site.get("website") or {},
            "defaultAuthor": site.get("default_author"),
        }

    def get_schema_config(self) -> dict[str, Any]:
        return {**DEFAULT_SCHEMA_CONFIG, **self.config_section("schema")}

    def get_quality_rules(self) -> ContentQualityRules:
        return ContentQualityRules.from_config(self.config_section("validation"))

    # ------------------------------------------------------------------
    # Lazy components
    # ------------------------------------------------------------------

    def get_store(self) -> ContentStore:
        self._ensure_initialized()
        if self._store is None:
            if self.content_backend == "database":
                self._store = DatabaseContentStore()
            else:
                self._store = FileContentStore(self.content_dir)
            logger.debug("Content store created: %s", type(self._store).__name__)
        return self._store

    def get_accessor(self) -> ContentAccessor:
        if self._accessor is None:
            timeout = self.config_section("seo").get("fetch_timeout", DEFAULT_FETCH_TIMEOUT)
            self._accessor = ContentAccessor(self.get_store(), timeout=float(timeout))
        return self._accessor

    def get_merger(self) -> SEOMerger:
        if self._merger is None:
            global_key = self.config_section("seo").get("global_key", GLOBAL_KEY)
            self._merger = SEOMerger(self.get_accessor(), global_key=global_key)
        return self._merger

    # ------------------------------------------------------------------
    # Page build helpers
    # ------------------------------------------------------------------

    async def merge_seo_data(self, page_key: str) -> dict[str, Any]:
        return await self.get_merger().merge_seo_data(page_key)

    def generate_page_schema(self, page_data: dict[str, Any]) -> list[dict[str, Any]]:
        return generate_page_schema(
            page_data, self.get_site_config(), self.get_schema_config(),
        )

    def validate_page(self, page_data: dict[str, Any]) -> dict[str, Any]:
        """Run every content check and return the aggregated report."""
        results = validate_page(page_data, self.get_quality_rules())
        report = generate_validation_report(results)
        summary = report["summary"]
        logger.info(
            "Validation: %d errors, %d warnings, %d info",
            summary["errors"], summary["warnings"], summary["info"],
        )
        return report

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def get_status(self) -> dict[str, dict[str, Any]]:
        """Return health status of the configured components."""
        self._ensure_initialized()
        status: dict[str, dict[str, Any]] = {}

        status["config"] = {
            "status": "ok" if self.config else "warning",
            "details": f"{len(self.config)} sections loaded" if self.config else "no config",
        }

        try:
            store = self.get_store()
            collections = store.collections()
            has_global = store.get("seo", self.config_section("seo").get("global_key", GLOBAL_KEY)) is not None
            status["content"] = {
                "status": "ok" if has_global else "warning",
                "details": (
                    f"{self.content_backend}: {len(collections)} collections"
                    + ("" if has_global else ", global SEO record missing")
                ),
            }
        except Exception as exc:
            status["content"] = {"status": "error", "details": str(exc)}

        site = self.get_site_config()
        status["site"] = {
            "status": "ok" if site["organization"].get("name") else "warning",
            "details": site["organization"].get("name") or "organization not configured",
        }
        return status
