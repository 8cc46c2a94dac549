"""API layer for stroke grading.

This module provides the service entry points used by callers that own
input capture, persistence and presentation.

The module exports:
    ValidationService: Grades drawn strokes against a reference character.
    validate_character: Functional form of ``ValidationService.validate``.
    format_feedback: Renders a ValidationResult as feedback text lines.

Example usage:
    Grade and show feedback::

        from stroke_grader.api import validate_character, format_feedback

        result = validate_character(drawn_strokes, character, canvas_size=300)
        for line in format_feedback(result):
            print(line)
"""

from .feedback import format_feedback
from .services import ValidationService, validate_character

__all__ = ['ValidationService', 'validate_character', 'format_feedback']
