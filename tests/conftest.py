"""Shared pytest fixtures for SEO Starter Kit tests."""

import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so 'seo_starter' is importable.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)


GLOBAL_SEO = {
    "meta": {
        "image": "https://pipefix.co.uk/og-image.jpg",
        "robots": "index, follow",
        "author": "PipeFix Experts",
        "keywords": "plumbing, emergency plumber, Manchester, PipeFix",
        "ogType": "website",
        "siteName": "PipeFix Experts",
        "twitterCard": "summary_large_image",
        "themeColor": "#1867c0",
        "title": "PipeFix Experts",
    },
    "schema": [
        {
            "@context": "https://schema.org",
            "@type": "LocalBusiness",
            "name": "PipeFix Experts",
            "url": "https://pipefix.co.uk",
        },
    ],
}

CONTACT_SEO = {
    "meta": {
        "title": "Contact PipeFix Experts | Get in Touch",
        "description": "Contact us for plumbing services in Manchester.",
        "url": "https://pipefix.co.uk/contact",
        "keywords": "contact, plumbing, Manchester",
    },
    "schema": [
        {
            "@context": "https://schema.org",
            "@type": "ContactPage",
            "name": "Contact PipeFix Experts",
            "url": "https://pipefix.co.uk/contact",
        },
    ],
}


@pytest.fixture(autouse=True)
def _reset_db_engine():
    """Autouse fixture: reset the global DB engine before and after every test.

    This prevents cross-test pollution when tests create their own
    databases.
    """
    from seo_starter.database import reset_engine
    reset_engine()
    yield
    reset_engine()


@pytest.fixture()
def test_db():
    """Provide an in-memory SQLite database with all tables created.

    Yields a database URL string. The engine is automatically torn down
    after the test by the autouse ``_reset_db_engine`` fixture.
    """
    from seo_starter.database import init_db, reset_engine
    reset_engine()
    db_url = "sqlite:///:memory:"
    init_db(database_url=db_url, echo=False)
    yield db_url


@pytest.fixture()
def file_db(tmp_path):
    """File-backed SQLite database for tests that read from worker threads."""
    from seo_starter.database import init_db
    db_url = "sqlite:///" + str(tmp_path / "content.db")
    init_db(database_url=db_url, echo=False)
    yield db_url


@pytest.fixture()
def seo_records():
    """Raw ``seo`` collection with a global and a contact record."""
    import copy
    return {
        "global": copy.deepcopy(GLOBAL_SEO),
        "contact": copy.deepcopy(CONTACT_SEO),
    }


@pytest.fixture()
def memory_store(seo_records):
    """MemoryContentStore holding the sample SEO records."""
    from seo_starter.modules.content import MemoryContentStore
    return MemoryContentStore({"seo": seo_records})


@pytest.fixture()
def accessor(memory_store):
    from seo_starter.modules.content import ContentAccessor
    return ContentAccessor(memory_store, timeout=2.0)


@pytest.fixture()
def content_dir(tmp_path):
    """A small on-disk content directory mirroring ``content/``."""
    import yaml

    root = tmp_path / "content"
    (root / "seo").mkdir(parents=True)
    (root / "services").mkdir()
    (root / "seo" / "global.yaml").write_text(yaml.safe_dump(GLOBAL_SEO), encoding="utf-8")
    (root / "seo" / "contact.yaml").write_text(yaml.safe_dump(CONTACT_SEO), encoding="utf-8")
    (root / "services" / "services.yaml").write_text(
        yaml.safe_dump({
            "services": [
                {"name": "Emergency Plumbing", "category": "plumbing", "popular": True},
                {"name": "Boiler Repair", "category": "heating", "popular": True},
                {"name": "Bathroom Installation", "category": "plumbing", "popular": False},
            ],
        }),
        encoding="utf-8",
    )
    return root


@pytest.fixture()
def site_config():
    """Site-level partial records used by generate_page_schema."""
    return {
        "organization": {
            "name": "PipeFix Experts",
            "url": "https://pipefix.co.uk",
            "logo": "https://pipefix.co.uk/logo.png",
        },
        "website": {
            "name": "PipeFix Experts",
            "url": "https://pipefix.co.uk",
        },
        "defaultAuthor": {"name": "Ricardo PipeFix"},
    }
