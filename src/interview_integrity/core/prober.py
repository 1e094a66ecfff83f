"""
Generation backend prober.

Checks that the configured Gemini backend is reachable with the current
API key and offers at least one model that supports content generation,
before any question generation workflow relies on it.

Features:
- Fails fast on a missing API key, before any network call
- Lists models and keeps those supporting generateContent
- Surfaces backend error messages verbatim
- Bounded request timeout, reported as a network error
- One-prompt smoke test against a single model
"""
import os
import sys
import argparse
from typing import Any, List, Optional

import httpx
from google import genai
from google.genai import errors, types

from interview_integrity import config
from interview_integrity.errors import (
    AuthError,
    BackendError,
    ConfigurationError,
    IntegrityError,
    NetworkError,
)
from interview_integrity.models.backend_models import ModelDescriptor, ProbeResult
from interview_integrity.utils.env_loader import load_env


def normalize_model_name(name: str) -> str:
    """Strip a leading path prefix such as 'models/' from a model name."""
    return (name or "").split("/")[-1]


def _mask(api_key: str) -> str:
    return api_key[:5] + "..." if len(api_key) > 5 else "***"


class GenerationBackendProber:
    """Verify the Gemini backend before trusting it with question content."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        client: Optional[Any] = None,
        verbose: bool = True
    ):
        """
        Initialize the prober.

        Args:
            api_key: Google AI API key. If not provided, uses GEMINI_API_KEY environment variable.
            timeout_ms: Request timeout in milliseconds. Defaults to config.PROBE_TIMEOUT_MS
            client: Pre-built genai client. Built lazily from the API key when omitted.
            verbose: Print progress to stdout.
        """
        # Load environment variables
        load_env()

        self.api_key = api_key if api_key is not None else os.environ.get(config.API_KEY_ENV_VAR)
        self.timeout_ms = timeout_ms or config.PROBE_TIMEOUT_MS
        self.verbose = verbose
        self._client = client

    def _require_credential(self) -> str:
        if not self.api_key or not self.api_key.strip():
            raise AuthError(
                f"{config.API_KEY_ENV_VAR} is missing. "
                f"Set it using: export {config.API_KEY_ENV_VAR}='your-api-key'"
            )
        return self.api_key.strip()

    def _get_client(self) -> Any:
        api_key = self._require_credential()
        if self._client is None:
            self._client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=self.timeout_ms)
            )
        return self._client

    def list_models(self, include_all: bool = False) -> List[ModelDescriptor]:
        """
        Query the backend's model listing.

        Args:
            include_all: Return every listed model instead of only those
                supporting content generation.

        Returns:
            List of ModelDescriptor objects with prefix-stripped names

        Raises:
            AuthError: No API key configured (no request is sent).
            BackendError: The backend answered with an error payload.
            NetworkError: The backend could not be reached in time.
        """
        client = self._get_client()

        if self.verbose:
            print(f"Fetching models (API key {_mask(self.api_key)})...")

        try:
            descriptors = [self._to_descriptor(model) for model in client.models.list()]
        except errors.APIError as e:
            raise BackendError(e.message or str(e), code=e.code, status=e.status) from e
        except httpx.TransportError as e:
            raise NetworkError(f"Could not reach the generation backend: {e}") from e

        if include_all:
            return descriptors
        return [d for d in descriptors if d.supports_generation]

    def probe(self) -> List[ModelDescriptor]:
        """Return the models that support content generation."""
        return self.list_models(include_all=False)

    def verify(self, required_model: Optional[str] = None) -> ProbeResult:
        """
        Probe the backend and judge whether it is usable.

        Args:
            required_model: Model the platform depends on, if any.

        Returns:
            ProbeResult; is_ready is False when no model can generate
            content or the required model is not offered.
        """
        return self.evaluate(self.list_models(include_all=True), required_model)

    @staticmethod
    def evaluate(
        all_models: List[ModelDescriptor],
        required_model: Optional[str] = None
    ) -> ProbeResult:
        """Build a ProbeResult from an already fetched full model listing."""
        generation_models = [m for m in all_models if m.supports_generation]

        result = ProbeResult(models=generation_models, total_models=len(all_models))
        if required_model:
            wanted = normalize_model_name(required_model)
            result.required_model = wanted
            result.required_model_available = any(m.name == wanted for m in generation_models)
        return result

    def ensure_ready(self, required_model: Optional[str] = None) -> ProbeResult:
        """Like verify(), but raise ConfigurationError if the backend is unusable."""
        result = self.verify(required_model=required_model)

        if not result.models:
            raise ConfigurationError(
                f"No model supporting '{config.REQUIRED_GENERATION_METHOD}' is available for this API key.")
        if not result.required_model_available:
            raise ConfigurationError(
                f"Model '{result.required_model}' is not available for "
                f"'{config.REQUIRED_GENERATION_METHOD}' with this API key.")
        return result

    def generate(self, model_name: str, prompt: Optional[str] = None) -> str:
        """
        Send a single prompt to one model and return the reply text.

        Args:
            model_name: Model to exercise, with or without the 'models/' prefix.
            prompt: Prompt to send. Defaults to config.SMOKE_TEST_PROMPT

        Returns:
            The generated text

        Raises:
            AuthError: No API key configured.
            ConfigurationError: Empty model name.
            BackendError: Quota, unknown model or an empty/malformed reply.
            NetworkError: The backend could not be reached in time.
        """
        if not model_name or not model_name.strip():
            raise ConfigurationError("A model name is required for the smoke test.")

        client = self._get_client()
        prompt_to_use = prompt or config.SMOKE_TEST_PROMPT

        if self.verbose:
            print(f"Sending request to Gemini ({model_name})...")

        try:
            response = client.models.generate_content(
                model=normalize_model_name(model_name),
                contents=prompt_to_use
            )
        except errors.APIError as e:
            raise BackendError(e.message or str(e), code=e.code, status=e.status) from e
        except httpx.TransportError as e:
            raise NetworkError(f"Could not reach the generation backend: {e}") from e

        text = getattr(response, "text", None)
        if not isinstance(text, str) or not text.strip():
            feedback = getattr(response, "prompt_feedback", None)
            detail = f": {feedback}" if feedback else ""
            raise BackendError(f"Model '{model_name}' returned an empty response{detail}")

        return text

    @staticmethod
    def _to_descriptor(model: Any) -> ModelDescriptor:
        return ModelDescriptor(
            name=normalize_model_name(model.name),
            display_name=getattr(model, "display_name", None) or "",
            supported_methods=set(getattr(model, "supported_actions", None) or [])
        )

    def display_models(self, models: List[ModelDescriptor], show_methods: bool = False):
        """
        Print one line per model.

        Args:
            models: Models to list
            show_methods: Also print each model's supported methods
        """
        if not models:
            print("No models found.")
            return

        for model in models:
            if show_methods:
                methods = ", ".join(sorted(model.supported_methods))
                print(f"  - {model.name} (Supports: {methods})")
            else:
                print(f"  - {model.name} ({model.display_name})")


def probe_backend(api_key: Optional[str]) -> List[ModelDescriptor]:
    """
    Probe the backend with exactly the given API key.

    Unlike GenerationBackendProber(), None here means no credential: the
    environment and .env are not consulted, and AuthError is raised.
    """
    return GenerationBackendProber(api_key=api_key or "", verbose=False).probe()


def main(argv: Optional[List[str]] = None) -> int:
    """Probe the generation backend and report whether it can be used."""
    parser = argparse.ArgumentParser(
        description="Check that the Gemini backend is reachable and supports content generation.")
    parser.add_argument("--model", default=None,
                        help="Model the platform depends on (checked for availability)")
    parser.add_argument("--all", action="store_true",
                        help="List every model with its supported methods")
    parser.add_argument("--smoke-test", action="store_true",
                        help="Send one prompt to --model (or the default model)")
    parser.add_argument("--prompt", default=None, help="Prompt for the smoke test")
    args = parser.parse_args(argv)

    print("="*70)
    print("GENERATION BACKEND PROBE")
    print("="*70 + "\n")

    try:
        prober = GenerationBackendProber()

        if args.all:
            models = prober.list_models(include_all=True)
            print(f"\n✓ {len(models)} models available for your key:")
            prober.display_models(models, show_methods=True)
            result = prober.evaluate(models, required_model=args.model)
        else:
            result = prober.verify(required_model=args.model)
        print(f"\n✓ Models supporting {config.REQUIRED_GENERATION_METHOD}: "
              f"{len(result.models)} of {result.total_models}")
        prober.display_models(result.models)

        if not result.models:
            print(f"\n✗ No model supports {config.REQUIRED_GENERATION_METHOD} for this key.")
            return 1
        if not result.required_model_available:
            print(f"\n✗ Model '{result.required_model}' is not available.")
            return 1

        if args.smoke_test:
            model_name = args.model or config.DEFAULT_MODEL_NAME
            text = prober.generate(model_name, args.prompt)
            print(f"✓ Response: {text.strip()}")

        print("\n✓ Backend is ready.")
        return 0

    except ConfigurationError as e:
        print(f"✗ ERROR: {e}")
        return 1
    except BackendError as e:
        print(f"✗ Gemini API Error: {e}")
        return 1
    except IntegrityError as e:
        print(f"✗ Connection Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
