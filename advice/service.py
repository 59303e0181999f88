# advice/service.py
"""
Advice and explanation service.

Tries the remote text-generation models first and falls back to the
expert-written tables whenever the transport is not configured, every
model fails, or the extracted text is unusable. Public methods never raise;
every returned string starts with a source marker (see ``split_source``).
"""

from __future__ import annotations
import threading
import time
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from advice.config import AdviceConfig
from advice.errors import AdviceError, TransportError, ExtractionInsufficient, NotConfigured
from advice.extraction import extract_advice, extract_explanation, MAX_ITEMS
from advice.fallback import fallback_advice, fallback_explanation
from advice.transport import InferenceTransport, build_transport
from assessment.questions import Question
from operation.logging import get_logger
from operation.monitoring.metrics import (
    get_metrics_registry,
    MetricsRegistry,
    ADVICE_MODEL_ATTEMPT,
    ADVICE_REMOTE_SUCCESS,
    ADVICE_FALLBACK,
    ADVICE_TRANSPORT_FAILURE,
)
from operation.monitoring.performance import performance_timer
from operation.retry import attempt_candidates, AllCandidatesFailed, retry_from_config, inference_retry_config
from prompts.advice_prompts import (
    AI_MARKER,
    EXPERT_MARKER,
    ADVICE_PARAMETERS,
    EXPLANATION_PARAMETERS,
    CONNECTION_TEST_PROMPT,
    CONNECTION_TEST_PARAMETERS,
    advice_prompt,
    explanation_prompts,
)

logger = get_logger(__name__)


def split_source(text: str) -> Tuple[str, str]:
    """Split a marked string into ("ai" | "expert", body)."""
    if text.startswith(AI_MARKER):
        return "ai", text[len(AI_MARKER):]
    if text.startswith(EXPERT_MARKER):
        return "expert", text[len(EXPERT_MARKER):]
    return "expert", text


class AdviceService:
    """
    Remote-first advice with a deterministic local fallback.

    The configuration is immutable between calls to ``reconfigure``.
    """

    def __init__(
        self,
        config: Optional[AdviceConfig] = None,
        transport: Optional[InferenceTransport] = None,
        registry: Optional[MetricsRegistry] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Args:
            config: Service configuration (defaults to ``AdviceConfig.from_env()``)
            transport: Fixed transport, used instead of one built from the config
            registry: Metrics registry for attempt/success/fallback counters
            sleep: Sleep function used between retries of the same model
        """
        self._lock = threading.Lock()
        self._config = config if config is not None else AdviceConfig.from_env()
        self._fixed_transport = transport
        self._transport = self._make_transport(self._config)
        self._registry = registry if registry is not None else get_metrics_registry()
        self._sleep = sleep

    # ------------------------------------------------------------------
    # configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> AdviceConfig:
        return self._config

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    def reconfigure(self, **changes) -> AdviceConfig:
        """
        Replace the configuration (set key, toggle proxy, enable/disable).

        Args:
            **changes: AdviceConfig fields to change

        Returns:
            The new configuration
        """
        with self._lock:
            config = self._config.with_changes(**changes)
            transport = self._make_transport(config)
            self._config, self._transport = config, transport
        logger.info(
            f"Advice service reconfigured: enabled={config.enabled}, mode={config.mode}, "
            f"api_key_set={bool(config.api_key)}"
        )
        return config

    def _make_transport(self, config: AdviceConfig) -> Optional[InferenceTransport]:
        if not config.enabled:
            return None
        if self._fixed_transport is not None:
            return self._fixed_transport
        return build_transport(config)

    def _snapshot(self) -> Tuple[AdviceConfig, Optional[InferenceTransport]]:
        """The configuration and its transport, read together."""
        with self._lock:
            return self._config, self._transport

    def _require_transport(self) -> Tuple[AdviceConfig, InferenceTransport]:
        config, transport = self._snapshot()
        if transport is None:
            raise NotConfigured("AI features are not configured")
        return config, transport

    # ------------------------------------------------------------------
    # remote calls
    # ------------------------------------------------------------------

    def _call_models(
        self,
        transport: InferenceTransport,
        models: Sequence[str],
        prompt: str,
        parameters: Dict[str, Any],
    ) -> Any:
        """Walk the model list until one returns a response; raise TransportError if none does."""
        retry = retry_from_config(inference_retry_config((TransportError,)), sleep=self._sleep)

        def attempt(model: str) -> Any:
            self._registry.counter(ADVICE_MODEL_ATTEMPT).inc()
            logger.debug(f"Calling {transport.mode} transport with model {model}")
            with performance_timer(f"inference.{model}"):
                return transport.generate(model, prompt, parameters)

        try:
            return attempt_candidates(models, retry(attempt), retryable=(TransportError,))
        except AllCandidatesFailed as e:
            self._registry.counter(ADVICE_TRANSPORT_FAILURE).inc()
            for model, error in e.errors:
                logger.warning(f"Model {model} failed: {error}")
            raise TransportError(str(e)) from e

    def _fallback(self, reason: str) -> None:
        self._registry.counter(ADVICE_FALLBACK).inc()
        logger.info(f"Using expert fallback: {reason}")

    # ------------------------------------------------------------------
    # public API
    # ------------------------------------------------------------------

    def personalized_advice(self, weak_areas: Sequence[str]) -> List[str]:
        """
        Up to three advice strings for the given weak categories.

        Never raises and never returns an empty list.
        """
        areas = list(weak_areas)
        try:
            config, transport = self._require_transport()
            prompt = advice_prompt(areas)
            raw = self._call_models(transport, config.advice_models, prompt, ADVICE_PARAMETERS)
            items = extract_advice(raw, prompt)
            self._registry.counter(ADVICE_REMOTE_SUCCESS).inc()
            return [f"{AI_MARKER}{item}" for item in items[:MAX_ITEMS]]
        except NotConfigured as e:
            self._fallback(str(e))
        except (TransportError, ExtractionInsufficient) as e:
            self._fallback(f"{type(e).__name__}: {e}")
        except Exception:
            logger.exception("Unexpected error while generating advice")
            self._fallback("unexpected error")
        return [f"{EXPERT_MARKER}{item}" for item in fallback_advice(areas, limit=MAX_ITEMS)]

    def question_explanation(self, question: Question) -> str:
        """
        Why a question matters, in one or two sentences.

        Up to three prompt phrasings are tried when the response is unusable;
        a transport failure goes straight to the fallback.
        """
        try:
            config, transport = self._require_transport()
            for prompt in explanation_prompts(question.prompt, question.category):
                raw = self._call_models(
                    transport, config.explanation_models, prompt, EXPLANATION_PARAMETERS
                )
                try:
                    explanation = extract_explanation(raw, prompt)
                except ExtractionInsufficient as e:
                    logger.debug(f"Explanation attempt unusable: {e}")
                    continue
                self._registry.counter(ADVICE_REMOTE_SUCCESS).inc()
                return f"{AI_MARKER}{explanation}"
            self._fallback("all explanation phrasings unusable")
        except AdviceError as e:
            self._fallback(f"{type(e).__name__}: {e}")
        except Exception:
            logger.exception("Unexpected error while generating explanation")
            self._fallback("unexpected error")
        return f"{EXPERT_MARKER}{fallback_explanation(question.category)}"

    def test_connection(self) -> Dict[str, Any]:
        """
        Send one tiny request through the configured transport.

        Returns:
            Dict with ``mode``, ``success``, ``message`` and ``time_ms``
        """
        config, transport = self._snapshot()
        if transport is None:
            return {
                "mode": config.mode,
                "success": False,
                "message": "AI features are not configured",
                "time_ms": 0.0,
            }

        model = config.advice_models[0] if config.advice_models else ""
        start = time.perf_counter()
        try:
            transport.generate(model, CONNECTION_TEST_PROMPT, CONNECTION_TEST_PARAMETERS)
            success, message = True, f"{config.mode} connection working"
        except TransportError as e:
            success, message = False, f"{config.mode} connection failed: {e}"
        except Exception as e:
            logger.exception("Unexpected error during connection test")
            success, message = False, f"{config.mode} connection failed: {e}"
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(f"Connection test: success={success} in {elapsed_ms:.0f}ms")
        return {"mode": config.mode, "success": success, "message": message, "time_ms": elapsed_ms}
