"""
Advice service configuration.

Built once from the environment at startup. The dataclass is frozen: the
only way to change it at runtime is ``AdviceService.reconfigure``, which
swaps in a modified copy.
"""

from __future__ import annotations
import os
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

DEFAULT_PROXY_URL = "http://localhost:8000/api/ai-proxy"
DEFAULT_PROVIDER_URL = "https://api-inference.huggingface.co/models"
DEFAULT_MODELS: Tuple[str, ...] = ("gpt2", "microsoft/DialoGPT-small")
DEFAULT_TIMEOUT = 12.0


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_models(name: str) -> Tuple[str, ...]:
    value = os.getenv(name, "")
    models = tuple(m.strip() for m in value.split(",") if m.strip())
    return models or DEFAULT_MODELS


@dataclass(frozen=True)
class AdviceConfig:
    ai_enabled: bool = True
    api_key: Optional[str] = field(default=None, repr=False)
    use_proxy: bool = True
    proxy_url: str = DEFAULT_PROXY_URL
    provider_url: str = DEFAULT_PROVIDER_URL
    timeout: float = DEFAULT_TIMEOUT
    advice_models: Tuple[str, ...] = DEFAULT_MODELS
    explanation_models: Tuple[str, ...] = DEFAULT_MODELS

    @property
    def enabled(self) -> bool:
        """True when some transport can actually be used."""
        if not self.ai_enabled:
            return False
        if self.use_proxy:
            return bool(self.proxy_url)
        return bool(self.api_key)

    @property
    def mode(self) -> str:
        return "proxy" if self.use_proxy else "direct"

    def with_changes(self, **changes) -> "AdviceConfig":
        return replace(self, **changes)

    @classmethod
    def from_env(cls) -> "AdviceConfig":
        """
        Read configuration from environment variables.

        Returns:
            AdviceConfig with defaults for anything unset
        """
        return cls(
            ai_enabled=_env_bool("PRIVSCORE_AI_FEATURES_ENABLED", True),
            api_key=os.getenv("HUGGING_FACE_API_KEY") or None,
            use_proxy=_env_bool("PRIVSCORE_USE_PROXY", True),
            proxy_url=os.getenv("PRIVSCORE_PROXY_URL", DEFAULT_PROXY_URL),
            provider_url=os.getenv("PRIVSCORE_PROVIDER_URL", DEFAULT_PROVIDER_URL),
            timeout=float(os.getenv("PRIVSCORE_AI_TIMEOUT", str(DEFAULT_TIMEOUT))),
            advice_models=_env_models("PRIVSCORE_ADVICE_MODELS"),
            explanation_models=_env_models("PRIVSCORE_EXPLANATION_MODELS"),
        )
