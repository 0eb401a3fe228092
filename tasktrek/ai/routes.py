"""Routes for the AI suggestions blueprint."""

from flask import current_app, jsonify, request

from tasktrek.core.dates import local_now
from tasktrek.errors import AppError, ServiceUnavailableError, ValidationError
from tasktrek.extensions import firebase, suggestion_model

from . import bp
from .services import (
    SuggestionFormatError,
    build_prompt,
    fallback_suggestions,
    load_task_history,
    parse_suggestions,
)


@bp.route("/aiSuggest", methods=["GET"])
def ai_suggest():
    """Suggest three tasks for an assignee based on their recent history."""
    if not suggestion_model.ready:
        current_app.logger.error("AI model is not initialized. Cannot process request.")
        raise ServiceUnavailableError("AI service initialization failed.")

    assignee_name = request.args.get("assigneeName")
    if not assignee_name:
        raise ValidationError("Missing assigneeName")

    try:
        task_list = load_task_history(
            firebase.db,
            assignee_name,
            limit=current_app.config["AI_TASK_HISTORY_LIMIT"],
        )
        prompt = build_prompt(task_list, local_now())
        current_app.logger.info(f"Requesting AI suggestions for {assignee_name}")
        text = suggestion_model.generate(prompt)
    except AppError:
        raise
    except Exception as e:
        current_app.logger.error(f"Error in AI suggestion handler: {e}")
        message = str(e) or "Internal Server Error generating suggestions."
        return jsonify({"error": message}), 500

    if not text:
        current_app.logger.warning("AI model returned an empty response.")
        return jsonify(
            {"suggestions": [], "message": "AI could not generate suggestions."}
        )

    try:
        suggestions = parse_suggestions(text)
    except SuggestionFormatError as e:
        current_app.logger.error(f"Failed to parse AI response: {e}. Raw: {text}")
        suggestions = fallback_suggestions(text)
        if not suggestions:
            return (
                jsonify({"error": "Failed to parse AI suggestions.", "rawResponse": text}),
                500,
            )
        return jsonify(
            {
                "suggestions": suggestions,
                "message": "AI response format issue, only titles parsed.",
            }
        )

    return jsonify({"suggestions": suggestions})
