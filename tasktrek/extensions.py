"""Process-scoped providers for the application.

Each provider is created once at import time and bound to the Flask app in
``create_app`` through ``init_app``, the same way Flask extensions are.
"""

from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING, Any

import firebase_admin
import google.generativeai as genai
from firebase_admin import auth, credentials, firestore

if TYPE_CHECKING:
    from flask import Flask
    from google.cloud.firestore_v1.client import Client


class FirebaseProvider:
    """Owns the Firebase Admin app and hands out the Firestore and Auth handles."""

    def init_app(self, app: Flask) -> None:
        """Initialize the Firebase Admin SDK once per process."""
        app.extensions["firebase"] = self
        if app.config.get("TESTING"):
            return
        if firebase_admin._apps:
            app.logger.info("Firebase app already initialized.")
            return

        cred, project_id = self._load_credentials(app)
        if not cred:
            return

        options = {}
        if project_id:
            options["projectId"] = project_id
        try:
            firebase_admin.initialize_app(cred, options)
            app.logger.info("Firebase Admin initialized.")
        except ValueError:
            # This can happen if the app is already initialized, which is fine.
            app.logger.info("Firebase app already initialized.")

    @staticmethod
    def _load_credentials(app: Flask) -> tuple[Any, str | None]:
        """Resolve credentials from env JSON, split env vars, a file, or ADC."""
        project_id = app.config.get("FIREBASE_PROJECT_ID")

        cred_json = app.config.get("FIREBASE_CREDENTIALS_JSON")
        if cred_json:
            try:
                cred_info = json.loads(cred_json)
                return (
                    credentials.Certificate(cred_info),
                    cred_info.get("project_id") or project_id,
                )
            except (json.JSONDecodeError, ValueError) as e:
                app.logger.error(f"Error parsing FIREBASE_CREDENTIALS_JSON: {e}")

        client_email = app.config.get("FIREBASE_CLIENT_EMAIL")
        private_key = app.config.get("FIREBASE_PRIVATE_KEY")
        if project_id and client_email and private_key:
            try:
                cred_info = {
                    "type": "service_account",
                    "project_id": project_id,
                    "client_email": client_email,
                    "private_key": private_key.replace("\\n", "\n"),
                    "token_uri": "https://oauth2.googleapis.com/token",
                }
                return credentials.Certificate(cred_info), project_id
            except ValueError as e:
                app.logger.error(f"Error building credentials from environment: {e}")

        cred_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)), "firebase_credentials.json"
        )
        if os.path.exists(cred_path):
            try:
                with open(cred_path) as f:
                    cred_info = json.load(f)
                return (
                    credentials.Certificate(cred_path),
                    cred_info.get("project_id") or project_id,
                )
            except (json.JSONDecodeError, ValueError) as e:
                app.logger.error(f"Error loading credentials from file: {e}")

        try:
            return credentials.ApplicationDefault(), project_id
        except Exception as e:
            app.logger.error(
                f"Could not find any valid credentials (env, file, or default): {e}"
            )
        return None, None

    @property
    def db(self) -> Client:
        """Return the shared Firestore client."""
        return firestore.client()

    @property
    def auth(self) -> Any:
        """Return the Firebase Auth module."""
        return auth


class SuggestionModel:
    """Owns the generative model used for task suggestions."""

    def __init__(self) -> None:
        """Initialize the provider with no model."""
        self.model: Any = None

    def init_app(self, app: Flask) -> None:
        """Configure the generative-text client once per process."""
        app.extensions["suggestion_model"] = self
        if self.model is not None:
            return
        api_key = app.config.get("GOOGLE_API_KEY")
        if not api_key:
            if not app.config.get("TESTING"):
                app.logger.error("GOOGLE_API_KEY is not set. AI suggestions disabled.")
            return
        try:
            genai.configure(api_key=api_key)
            self.model = genai.GenerativeModel(app.config["AI_MODEL_NAME"])
            app.logger.info("Google AI model initialized.")
        except Exception as e:
            app.logger.error(f"Google AI initialization failed: {e}")
            self.model = None

    @property
    def ready(self) -> bool:
        """Return True when a model is available."""
        return self.model is not None

    def generate(self, prompt: str) -> str:
        """Send a prompt and return the stripped response text."""
        response = self.model.generate_content(prompt)
        return (response.text or "").strip()


firebase = FirebaseProvider()
suggestion_model = SuggestionModel()
