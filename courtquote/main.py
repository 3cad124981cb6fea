from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os

from .config import settings
from .database import engine, Base
from .routers import quotations, pricing

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("courtquote")

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)

BASE_REVISION = "5c2e8a1f4b7d"


def _run_migrations():
    """Run pending Alembic migrations on startup.

    A database created by Base.metadata.create_all() before Alembic tracked
    it has no alembic_version table; stamp the base revision first so the
    upgrade only applies what came after it.
    """
    try:
        from alembic.config import Config
        from alembic import command
        from sqlalchemy import inspect

        alembic_ini = os.path.join(os.path.dirname(__file__), "..", "alembic.ini")
        if not os.path.exists(alembic_ini):
            logger.info("alembic.ini not found, skipping migrations")
            return

        alembic_cfg = Config(alembic_ini)
        alembic_cfg.set_main_option("sqlalchemy.url", settings.DATABASE_URL)
        alembic_cfg.attributes["configure_logger"] = False

        insp = inspect(engine)
        has_alembic = "alembic_version" in insp.get_table_names()
        has_quotations = "quotations" in insp.get_table_names()

        if not has_alembic and has_quotations:
            logger.info("Stamping base migration %s (tables already exist)", BASE_REVISION)
            command.stamp(alembic_cfg, BASE_REVISION)

        logger.info("Running pending Alembic migrations...")
        command.upgrade(alembic_cfg, "head")
        logger.info("Migrations complete")

    except Exception as e:
        # Never let migration errors prevent app startup
        logger.warning("Alembic migration warning: %s", e)


app = FastAPI(
    title="Court Quotation Service",
    description="Sports-facility construction quotations: pricing, numbering and PDF documents",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(quotations.router, prefix="/api")
app.include_router(pricing.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "courtquote"}


@app.on_event("startup")
def auto_migrate():
    """Run pending Alembic migrations on startup."""
    _run_migrations()


@app.on_event("startup")
def auto_seed():
    """Seed the default pricing catalog on first run."""
    from .catalog import seed_pricing
    from .database import SessionLocal
    db = SessionLocal()
    try:
        if seed_pricing(db, settings.PRICING_CATEGORY):
            logger.info("Seeded default pricing catalog %r", settings.PRICING_CATEGORY)
    finally:
        db.close()
