"""
Reference tables for the engine: modality baselines, evidence citations,
payer gold-card thresholds and state AI-use requirements.

Tables are shipped as JSON under ``aiie/data`` and loaded once per process.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Tuple

from .models import EvidenceCitation, GoldCardThreshold, StateRequirement

_DATA_DIR = Path(__file__).parent / "data"


def _load_json(filename: str) -> dict:
    with open(_DATA_DIR / filename) as f:
        return json.load(f)


@lru_cache(maxsize=None)
def get_modality_baselines() -> Dict[str, dict]:
    """Historical approval and appeal-overturn rates keyed by modality."""
    return _load_json("modality_baselines.json")


@lru_cache(maxsize=None)
def get_evidence_citations() -> Dict[str, EvidenceCitation]:
    """Literature backing each cited scoring factor, keyed by factor id."""
    data = _load_json("evidence_citations.json")
    return {key: EvidenceCitation(**citation) for key, citation in data.items()}


@lru_cache(maxsize=None)
def get_gold_card_thresholds() -> Dict[str, GoldCardThreshold]:
    """Gold-card program thresholds keyed by canonical payer name."""
    data = _load_json("gold_card_thresholds.json")
    return {payer: GoldCardThreshold(**threshold) for payer, threshold in data["payers"].items()}


@lru_cache(maxsize=None)
def get_payer_aliases() -> List[Tuple[str, str]]:
    """(regex, payer key) pairs, checked in order."""
    data = _load_json("gold_card_thresholds.json")
    return [(alias["pattern"], alias["payer"]) for alias in data["aliases"]]


@lru_cache(maxsize=None)
def get_state_requirements() -> Dict[str, StateRequirement]:
    """State AI / prior-auth requirements keyed by two-letter state code."""
    data = _load_json("state_ai_requirements.json")
    return {code: StateRequirement(**rule) for code, rule in data.items()}
