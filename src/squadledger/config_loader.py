"""Load settings from the environment and persist seed profiles as JSON."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from squadledger.config import DEFAULT_PAYMENT_METHODS
from squadledger.models import PaymentMethodConfig, Player, Team
from squadledger.store import TeamStore


logger = logging.getLogger(__name__)

_SEED_PATH_ENV = "SQUADLEDGER_SEED_PATH"
_CURRENCY_ENV = "SQUADLEDGER_CURRENCY"
_LOG_LEVEL_ENV = "SQUADLEDGER_LOG_LEVEL"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class SeedError(ValueError):
    """Raised when a seed file breaks a store invariant."""


def _check_unique_methods(methods: List[PaymentMethodConfig]) -> None:
    seen_ids = set()
    seen_names = set()
    for method in methods:
        key = method.name.strip().casefold()
        if method.id in seen_ids:
            raise SeedError(f"Duplicate payment method id: {method.id}")
        if key in seen_names:
            raise SeedError(f"Duplicate payment method name: {method.name}")
        seen_ids.add(method.id)
        seen_names.add(key)


@dataclass
class SeedProfile:
    players: List[Player] = field(default_factory=list)
    teams: List[Team] = field(default_factory=list)
    payment_methods: List[PaymentMethodConfig] = field(
        default_factory=lambda: list(DEFAULT_PAYMENT_METHODS)
    )

    @classmethod
    def load(cls, path: Path) -> "SeedProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        methods = data.get("payment_methods")
        profile = cls(
            players=[Player.model_validate(item) for item in data.get("players", [])],
            teams=[Team.model_validate(item) for item in data.get("teams", [])],
        )
        if methods is not None:
            profile.payment_methods = [PaymentMethodConfig.model_validate(item) for item in methods]
            _check_unique_methods(profile.payment_methods)
        logger.info(
            "Loaded seed %s: %d players, %d teams, %d payment methods",
            path,
            len(profile.players),
            len(profile.teams),
            len(profile.payment_methods),
        )
        return profile

    @classmethod
    def from_store(cls, store: TeamStore) -> "SeedProfile":
        return cls(
            players=list(store.players),
            teams=list(store.teams),
            payment_methods=list(store.payment_methods),
        )

    def save(self, path: Path) -> None:
        payload = {
            "players": [player.model_dump(mode="json") for player in self.players],
            "teams": [team.model_dump(mode="json") for team in self.teams],
            "payment_methods": [method.model_dump(mode="json") for method in self.payment_methods],
        }
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def build_store(self) -> TeamStore:
        return TeamStore(
            players=self.players,
            teams=self.teams,
            payment_methods=self.payment_methods,
        )


@dataclass
class Settings:
    seed_path: Optional[Path] = None
    currency: str = "$"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        settings = cls()
        seed = os.getenv(_SEED_PATH_ENV)
        if seed:
            settings.seed_path = Path(seed)
        currency = os.getenv(_CURRENCY_ENV)
        if currency is not None:
            if currency.strip():
                settings.currency = currency.strip()
            else:
                logger.warning("Empty value for %s; using default %s", _CURRENCY_ENV, settings.currency)
        level = os.getenv(_LOG_LEVEL_ENV)
        if level is not None:
            if level.upper() in LOG_LEVELS:
                settings.log_level = level.upper()
            else:
                logger.warning("Invalid log level for %s: %s; using default %s", _LOG_LEVEL_ENV, level, settings.log_level)
        return settings


def build_store(settings: Settings | None = None) -> TeamStore:
    """Create the session store from the configured seed, or an empty one."""

    settings = settings or Settings.from_env()
    if settings.seed_path is None:
        return TeamStore()
    return SeedProfile.load(settings.seed_path).build_store()


__all__ = ["LOG_LEVELS", "SeedError", "SeedProfile", "Settings", "build_store"]
