"""Public API surface of iconsmith."""

from __future__ import annotations

from iconsmith.api.service import GenerationResult, fingerprint, generate, load_config


__all__ = ["GenerationResult", "fingerprint", "generate", "load_config"]
