"""Configurazione centrale per Moon House.

Qui centralizziamo i parametri modificabili della simulazione (raggio di
aggressione del Butcher, cooldown di movimento, capacità dello zaino,
salvataggi, logging). Tutti i valori hanno un default sensato e possono
essere sovrascritti via variabili d'ambiente.
"""
from __future__ import annotations
import os
from pathlib import Path


def _get_int_env(name: str, default: int, minval: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw)
        if minval is not None and v < minval:
            return default
        return v
    except ValueError:
        return default


def _get_float_env(name: str, default: float, minval: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = float(raw)
        if minval is not None and v < minval:
            return default
        return v
    except ValueError:
        return default


def _get_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    return val in {"1", "true", "yes", "on"}


# ---------------- Antagonista ----------------
# Distanza (in stanze) entro cui il Butcher inizia a inseguire il giocatore
DEFAULT_AGGRESSION_RADIUS: int = _get_int_env("MH_AGGRESSION_RADIUS", 3, minval=0)

# Azioni del giocatore da attendere tra due passi casuali dell'antagonista
AGENT_MOVE_COOLDOWN: int = _get_int_env("MH_AGENT_COOLDOWN", 1, minval=0)


# ---------------- Giocatore ----------------
PLAYER_MAX_WEIGHT: float = _get_float_env("MH_PLAYER_MAX_WEIGHT", 40.0, minval=0.1)
PLAYER_MAX_VOLUME: float = _get_float_env("MH_PLAYER_MAX_VOLUME", 50.0, minval=0.1)


# ---------------- Event bus ----------------
# In modalità strict un handler che fallisce solleva DispatchError a fine dispatch
BUS_STRICT: bool = _get_bool_env("MH_BUS_STRICT", False)


# ---------------- Salvataggi ----------------
# Salvataggio automatico su file quando si raggiunge una stanza checkpoint
AUTOSAVE_ON_CHECKPOINT: bool = _get_bool_env("MH_AUTOSAVE", False)

ENV_SAVES_DIR = "MH_SAVES_DIR"
DEFAULT_SAVES_DIR = "data/saves"


def get_saves_dir() -> Path:
    """Directory dei salvataggi. Var: MH_SAVES_DIR (default data/saves)."""
    raw = os.getenv(ENV_SAVES_DIR, "").strip()
    return Path(raw or DEFAULT_SAVES_DIR)


# ---------------- Dati mondo ----------------
ENV_WORLD_FILE = "MH_WORLD_FILE"
DEFAULT_WORLD_FILE = Path(__file__).resolve().parent / "assets" / "world" / "house.json"


def get_world_file() -> Path:
    """Ritorna il file JSON del mondo da caricare.

    Ordine di precedenza:
    1. Variabile d'ambiente MH_WORLD_FILE (se il file esiste)
    2. DEFAULT_WORLD_FILE
    """
    raw = os.getenv(ENV_WORLD_FILE)
    if raw:
        candidate = Path(raw)
        if candidate.is_file():
            return candidate
    return DEFAULT_WORLD_FILE


def get_random_seed() -> int | None:
    """Seed per il generatore casuale condiviso. Var: MH_SEED (default: nessuno)."""
    raw = os.getenv("MH_SEED")
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


# ---------------- Logging ----------------
def get_log_level() -> str:
    """Livello di logging. Var: MH_LOG_LEVEL (default WARNING)."""
    level = os.getenv("MH_LOG_LEVEL", "WARNING").strip().upper()
    if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        return "WARNING"
    return level


__all__ = [
    # Antagonista
    "DEFAULT_AGGRESSION_RADIUS", "AGENT_MOVE_COOLDOWN",
    # Giocatore
    "PLAYER_MAX_WEIGHT", "PLAYER_MAX_VOLUME",
    # Bus
    "BUS_STRICT",
    # Salvataggi
    "AUTOSAVE_ON_CHECKPOINT", "get_saves_dir", "ENV_SAVES_DIR", "DEFAULT_SAVES_DIR",
    # Mondo
    "get_world_file", "ENV_WORLD_FILE", "DEFAULT_WORLD_FILE", "get_random_seed",
    # Logging
    "get_log_level",
]
