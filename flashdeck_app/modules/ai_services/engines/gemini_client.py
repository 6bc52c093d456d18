# File: flashdeck_app/modules/ai_services/engines/gemini_client.py
# Gemini API client with retries and model fallback.

import threading
import time

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from flask import current_app

from ..exceptions import AIConfigurationError, AIContentBlockedError

DEFAULT_MODEL = 'gemini-2.0-flash-lite-001'

# Provider errors worth retrying on the same model
TRANSIENT_ERRORS = (
    google_exceptions.ServiceUnavailable,
    google_exceptions.DeadlineExceeded,
    google_exceptions.InternalServerError,
)

# A bad key fails every model the same way
CREDENTIAL_ERRORS = (
    google_exceptions.PermissionDenied,
    google_exceptions.Unauthenticated,
)


class GeminiClient:
    """
    Client for the Gemini API.

    ``model_name`` may be a comma-separated list; when one model fails the
    next is tried.
    """

    def __init__(self, api_key, model_name=DEFAULT_MODEL, max_retries=2, retry_delay=2.0):
        if not api_key:
            raise AIConfigurationError()

        self.api_key = api_key
        self.model_name = model_name or DEFAULT_MODEL
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        current_app.logger.info(f"Gemini Client initialised with model '{self.model_name}'.")

    @property
    def models(self):
        return [m.strip() for m in self.model_name.split(',') if m.strip()]

    def generate_content(self, prompt, response_schema=None):
        """
        Send ``prompt`` and return the response text.

        Raises the last provider error when every model failed.
        """
        models_to_try = self.models
        last_error = None

        for index, model_name in enumerate(models_to_try):
            current_app.logger.info(
                f"GeminiClient: [Model {index + 1}/{len(models_to_try)}] trying '{model_name}'"
            )
            try:
                text = self._generate_with_single_model(model_name, prompt, response_schema)
            except (AIContentBlockedError,) + CREDENTIAL_ERRORS:
                raise
            except google_exceptions.GoogleAPIError as e:
                last_error = e
                current_app.logger.warning(f"GeminiClient: model '{model_name}' failed: {e}")
                continue

            if index > 0:
                current_app.logger.info(f"GeminiClient: fell back to model '{model_name}'.")
            return text

        raise last_error

    def _generate_with_single_model(self, model_name, prompt, response_schema):
        generation_config = None
        if response_schema is not None:
            generation_config = genai.GenerationConfig(
                response_mime_type='application/json',
                response_schema=response_schema,
            )

        for attempt in range(self.max_retries + 1):
            try:
                genai.configure(api_key=self.api_key)
                model = genai.GenerativeModel(model_name)
                response = model.generate_content(prompt, generation_config=generation_config)
            except TRANSIENT_ERRORS as e:
                if attempt >= self.max_retries:
                    raise
                current_app.logger.warning(
                    f"GeminiClient: {e.__class__.__name__} on '{model_name}' (attempt {attempt + 1}), retrying"
                )
                time.sleep(self.retry_delay * (attempt + 1))
                continue

            return self._response_text(response)

    @staticmethod
    def _response_text(response):
        # A blocked prompt has no candidates, and .parts raises instead of
        # returning an empty list
        feedback = response.prompt_feedback
        if getattr(feedback, 'block_reason', None) or not response.candidates:
            raise AIContentBlockedError(f"Response blocked by content policy: {feedback}")

        try:
            parts = response.parts
        except ValueError as e:
            raise AIContentBlockedError(f"Response blocked by content policy: {feedback}") from e

        if not parts:
            raise AIContentBlockedError(f"Response blocked by content policy: {feedback}")
        return response.text


_client_lock = threading.Lock()


def get_gemini_client():
    """
    Return the app's GeminiClient, building it on first use.

    Raises:
        AIConfigurationError: GEMINI_API_KEY is not set.
    """
    config = current_app.config
    api_key = config.get('GEMINI_API_KEY')
    if not api_key:
        raise AIConfigurationError()

    with _client_lock:
        client = current_app.extensions.get('gemini_client')
        if client is None or client.api_key != api_key or client.model_name != config.get('GEMINI_MODEL'):
            client = GeminiClient(
                api_key,
                model_name=config.get('GEMINI_MODEL', DEFAULT_MODEL),
                max_retries=config.get('AI_MAX_RETRIES', 2),
            )
            current_app.extensions['gemini_client'] = client
    return client
