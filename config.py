"""
config.py
---------
Process-wide settings, read once from the environment.

The .env file is loaded by main.py before this is consulted; nothing here
mutates after construction.
"""

import os
from dataclasses import dataclass
from typing import Optional

KNOWN_PROVIDERS = ("openrouter", "openai")


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def _provider_order(raw: str) -> tuple[str, ...]:
    order: list[str] = []
    for name in raw.split(","):
        name = name.strip().lower()
        if name in KNOWN_PROVIDERS and name not in order:
            order.append(name)
    return tuple(order)


@dataclass(frozen=True)
class Settings:
    # ── Text generation providers ───────────────────────────────────────────
    openrouter_api_key: str = ""
    openrouter_model: str = "tngtech/deepseek-r1t-chimera:free"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    provider_order: tuple[str, ...] = KNOWN_PROVIDERS
    provider_timeout_seconds: float = 60.0

    # Caller-side limit on the whole planning call (main.py)
    plan_timeout_seconds: float = 90.0

    # ── Enrichment lookups ──────────────────────────────────────────────────
    enable_enrichment: bool = True
    enrich_max_workers: int = 6
    unsplash_access_key: str = ""
    foursquare_api_key: str = ""

    # Seed for mock content / local tips / transport choice (None = unseeded)
    random_seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "Settings":
        seed = os.getenv("RANDOM_SEED", "").strip()
        return cls(
            openrouter_api_key=os.getenv("OPENROUTER_API_KEY", ""),
            openrouter_model=os.getenv("OPENROUTER_MODEL", cls.openrouter_model),
            openai_api_key=os.getenv("OPENAI_API_KEY", ""),
            openai_model=os.getenv("OPENAI_MODEL", cls.openai_model),
            provider_order=_provider_order(os.getenv("PROVIDER_ORDER", ",".join(KNOWN_PROVIDERS))),
            provider_timeout_seconds=float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "60")),
            plan_timeout_seconds=float(os.getenv("PLAN_TIMEOUT_SECONDS", "90")),
            enable_enrichment=_flag("ENABLE_ENRICHMENT", "true"),
            enrich_max_workers=int(os.getenv("ENRICH_MAX_WORKERS", "6")),
            unsplash_access_key=os.getenv("UNSPLASH_ACCESS_KEY", ""),
            foursquare_api_key=os.getenv("FOURSQUARE_API_KEY", ""),
            random_seed=int(seed) if seed else None,
        )
